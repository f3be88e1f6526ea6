"""Origen de actividades crudas para el recap."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from recap_tool.model import ActivityRecord


@dataclass(frozen=True)
class SourcePaths:
    """Where an activity export lives (a folder or a single file)."""

    root: Path


class ActivitySource(ABC):
    """Export of raw activities, listed as files and read into records."""

    def __init__(self, paths: SourcePaths) -> None:
        self._paths = paths

    @property
    def root(self) -> Path:
        return self._paths.root

    def validate(self) -> None:
        """Check that the export root exists.

        Raises:
            FileNotFoundError: If the root is missing.
        """
        if not self.root.exists():
            raise FileNotFoundError(str(self.root))

    @abstractmethod
    def activity_files(self) -> list[Path]:
        """Files holding activities, in read order."""

    @abstractmethod
    def load_activities(self, paths: list[Path]) -> list[ActivityRecord]:
        """Read activities from the given files."""

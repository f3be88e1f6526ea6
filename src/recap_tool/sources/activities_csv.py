"""Lectura de actividades desde exportaciones CSV."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import pandas as pd
from dateutil import parser as date_parser

from recap_tool.model import ActivityRecord
from recap_tool.sources.base import ActivitySource, SourcePaths

logger = logging.getLogger(__name__)

_START_PATTERNS = [r"\bstart", r"activity date", r"\bdate\b", r"\bfecha\b"]
_TYPE_PATTERNS = [r"sport.?type", r"activity type", r"\btype\b", r"\btipo\b"]
_DISTANCE_PATTERNS = [r"\bdistance", r"\bdistancia\b"]
_MOVING_PATTERNS = [r"moving.?time", r"elapsed.?time", r"\bduration\b", r"\bduraci"]
_ELEVATION_PATTERNS = [r"elevation", r"\belevaci", r"\bdesnivel\b"]
_SCORE_PATTERNS = [r"effort.?score", r"relative effort", r"\bsuffer"]


@dataclass(frozen=True)
class ActivityCsvPaths(SourcePaths):
    """Paths for a folder of activity CSV exports."""

    # root: folder containing *.csv
    # distance columns are multiplied by this factor to get metres
    distance_scale: float = 1.0


class ActivityCsvSource(ActivitySource):
    """CSV activity export reader."""

    _paths: ActivityCsvPaths

    def activity_files(self) -> list[Path]:
        """Return the CSV files of the export folder, or the root if it is a file."""
        root = self.root
        if root.is_file():
            return [root]
        files = sorted(root.glob("*.csv"))
        if files:
            return files
        raise FileNotFoundError(f"No *.csv in {root}")

    def load_activities(self, paths: list[Path]) -> list[ActivityRecord]:
        """Load activities from CSV files.

        Raises:
            ValueError: If a file has no recognizable start/date column.
        """
        out: list[ActivityRecord] = []
        for csv_path in paths:
            df = pd.read_csv(csv_path)
            out.extend(_frame_to_activities(df, self._paths.distance_scale, csv_path))
        return out


def _find_col(columns: list[str], patterns: list[str]) -> str | None:
    for pat in patterns:
        rx = re.compile(pat, re.IGNORECASE)
        for c in columns:
            if rx.search(c):
                return c
    return None


def _frame_to_activities(
    df: pd.DataFrame, distance_scale: float, source: Path
) -> list[ActivityRecord]:
    if df.empty:
        return []

    df = df.rename(columns={c: str(c).strip() for c in df.columns})
    cols = list(df.columns)

    start_col = _find_col(cols, _START_PATTERNS)
    if start_col is None:
        raise ValueError(f"{source}: no start/date column in {cols}")
    type_col = _find_col(cols, _TYPE_PATTERNS)
    dist_col = _find_col(cols, _DISTANCE_PATTERNS)
    time_col = _find_col(cols, _MOVING_PATTERNS)
    elev_col = _find_col(cols, _ELEVATION_PATTERNS)
    score_col = _find_col(cols, _SCORE_PATTERNS)

    def numeric(col: str | None) -> pd.Series:
        if col is None:
            return pd.Series(0.0, index=df.index)
        return pd.to_numeric(df[col], errors="coerce").fillna(0.0)

    distances = numeric(dist_col) * distance_scale
    times = numeric(time_col)
    elevations = numeric(elev_col)
    scores = (
        pd.to_numeric(df[score_col], errors="coerce")
        if score_col is not None
        else pd.Series(float("nan"), index=df.index)
    )

    out: list[ActivityRecord] = []
    skipped = 0
    for idx in df.index:
        start = _parse_start(df.at[idx, start_col])
        if start is None:
            skipped += 1
            continue
        label = df.at[idx, type_col] if type_col is not None else None
        score = scores.at[idx]
        out.append(
            ActivityRecord(
                start=start,
                activity_type="" if pd.isna(label) else str(label).strip(),
                distance_m=float(distances.at[idx]),
                moving_time_sec=float(times.at[idx]),
                elevation_m=float(elevations.at[idx]),
                effort_score=None if pd.isna(score) else float(score),
            )
        )
    if skipped:
        logger.warning("%s: skipped %d row(s) with an unreadable start", source, skipped)
    return out


def _parse_start(value: object) -> datetime | None:
    """Parses the start column of one row."""
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    try:
        return date_parser.parse(str(value))
    except (ValueError, OverflowError):
        return None

"""Clasificación de tipos de actividad por estilo de esfuerzo."""

from __future__ import annotations

from collections.abc import Iterable

from recap_tool.model import ActivityStyle

# Types whose effort reads better in minutes than in distance.
DURATION_STYLE_TYPES: frozenset[str] = frozenset(
    {
        "Crossfit",
        "HighIntensityIntervalTraining",
        "Pilates",
        "StrengthTraining",
        "WeightTraining",
        "Workout",
        "Yoga",
    }
)


def normalize_types(types: object) -> tuple[str, ...]:
    """Strip labels, drop empty ones and dedupe.

    Sequences keep first-seen order. Sets have no stable order across
    processes, so their labels come back sorted.
    """
    if types is None or isinstance(types, str | bytes):
        return ()
    if not isinstance(types, Iterable):
        return ()
    labels = (str(t if t is not None else "").strip() for t in types)
    unique = tuple(dict.fromkeys(label for label in labels if label))
    if isinstance(types, set | frozenset):
        return tuple(sorted(unique))
    return unique


def classify(label: str) -> ActivityStyle:
    """Return the effort style of a type; unknown labels are distance-style."""
    if label.strip() in DURATION_STYLE_TYPES:
        return ActivityStyle.DURATION
    return ActivityStyle.DISTANCE


def is_duration_style(label: str) -> bool:
    return classify(label) is ActivityStyle.DURATION

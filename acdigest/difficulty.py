"""
Difficulty Classification Module for AC Digest.

Maps the raw IRT difficulty published by AtCoder Problems to a normalized
difficulty and to one of the AtCoder rating colors.
All functions are pure and deterministic.
"""

import math
from enum import IntEnum
from typing import Dict, Iterable, Optional


class Color(IntEnum):
    """Rating colors ordered by severity. UNKNOWN sorts below GRAY."""

    UNKNOWN = 0
    GRAY = 1
    BROWN = 2
    GREEN = 3
    CYAN = 4
    BLUE = 5
    YELLOW = 6
    ORANGE = 7
    RED = 8


# Embed accent color per bucket
COLOR_ACCENTS: Dict[Color, int] = {
    Color.UNKNOWN: 0x000000,
    Color.GRAY: 0x808080,
    Color.BROWN: 0x804000,
    Color.GREEN: 0x008000,
    Color.CYAN: 0x00C0C0,
    Color.BLUE: 0x0000FF,
    Color.YELLOW: 0xC0C000,
    Color.ORANGE: 0xFF8000,
    Color.RED: 0xFF0000,
}

COLOR_LABELS: Dict[Color, str] = {
    Color.UNKNOWN: "unknown",
    Color.GRAY: "gray",
    Color.BROWN: "brown",
    Color.GREEN: "green",
    Color.CYAN: "cyan",
    Color.BLUE: "blue",
    Color.YELLOW: "yellow",
    Color.ORANGE: "orange",
    Color.RED: "red",
}

# Lower bound (inclusive) of each bucket above GRAY
COLOR_THRESHOLDS = (
    (2800, Color.RED),
    (2400, Color.ORANGE),
    (2000, Color.YELLOW),
    (1600, Color.BLUE),
    (1200, Color.CYAN),
    (800, Color.GREEN),
    (400, Color.BROWN),
)

NORMALIZE_FLOOR = 400


def normalize_difficulty(difficulty: int) -> int:
    """
    Compress low raw difficulties so novice problems stay above zero.

    Raw values at or above 400 are returned unchanged. Below that the value
    is squashed with 400 / (1 + e^(1 - d/400)) and truncated toward zero,
    which keeps the result in [0, 400). Values so low that the exponent
    overflows a float normalize to 0.

    Args:
        difficulty: Raw difficulty from the problem model

    Returns:
        Normalized difficulty
    """
    if difficulty >= NORMALIZE_FLOOR:
        return difficulty
    try:
        return int(NORMALIZE_FLOOR / (1.0 + math.exp(1.0 - difficulty / NORMALIZE_FLOOR)))
    except OverflowError:
        return 0


def difficulty_color(difficulty: int) -> Color:
    """Get the color bucket for a normalized difficulty. Never UNKNOWN."""
    for lower, color in COLOR_THRESHOLDS:
        if difficulty >= lower:
            return color
    return Color.GRAY


def color_for_raw(difficulty: Optional[int]) -> Color:
    """Color for a raw model difficulty, UNKNOWN when there is no model."""
    if difficulty is None:
        return Color.UNKNOWN
    return difficulty_color(normalize_difficulty(difficulty))


def summary_color(colors: Iterable[Color]) -> Color:
    """Most severe color of a group, UNKNOWN for an empty group."""
    return max(colors, default=Color.UNKNOWN)


def format_difficulty(difficulty: Optional[int]) -> str:
    """Render a normalized difficulty as e.g. '1650(blue)'."""
    if difficulty is None:
        return COLOR_LABELS[Color.UNKNOWN]
    return f"{difficulty}({COLOR_LABELS[difficulty_color(difficulty)]})"

"""Shared constants and enumerations for the tower planner."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Axis(str, Enum):
    """Directions a word's letters can run."""

    X = "X"
    Y = "Y"
    VERTICAL = "VERTICAL"

    @property
    def is_horizontal(self) -> bool:
        return self is not Axis.VERTICAL


class CellType(str, Enum):
    """All supported cell states in the volume."""

    EMPTY = "EMPTY"
    LETTER = "LETTER"
    BLOCKER = "BLOCKER"


class VerticalDirection(int, Enum):
    """Sign of the z step between successive letters of a vertical word."""

    DESCENDING = -1
    ASCENDING = 1


BASE_FLOOR_Z = 0
MIN_FLOORS = 2
MIN_INTERSECTIONS = 2

DEFAULT_VOLUME: Tuple[int, int, int] = (30, 30, 100)
DEFAULT_ANCHOR: Tuple[int, int, int] = (5, 5, 0)
DEFAULT_BASE_MIN_LENGTH = 5
DEFAULT_MAX_VERTICAL_RUN = 17
DEFAULT_FLOOR_MIN_LENGTH = 3
DEFAULT_VERTICAL_SEPARATION = 2


@dataclass(frozen=True)
class Volume:
    """Simple box bounds helper: width along x, depth along y, height along z."""

    width: int
    depth: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.depth <= 0 or self.height <= 0:
            raise ValueError(f"Volume dimensions must be positive, got {self.as_tuple()}")

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.width, self.depth, self.height)

    def contains(self, x: int, y: int, level: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.depth and 0 <= level < self.height

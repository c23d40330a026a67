"""Data models supporting the tower planner."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .constants import Axis, CellType, VerticalDirection


@dataclass(frozen=True)
class Coordinate:
    """Integer point in world space."""

    x: int
    y: int
    z: int

    def shifted(self, dx: int = 0, dy: int = 0, dz: int = 0) -> "Coordinate":
        return Coordinate(self.x + dx, self.y + dy, self.z + dz)

    def as_list(self) -> List[int]:
        return [self.x, self.y, self.z]


def axis_step(axis: Axis, vertical_step: int = VerticalDirection.DESCENDING) -> Tuple[int, int, int]:
    """Return the (dx, dy, dz) unit step for ``axis``."""

    if axis == Axis.X:
        return (1, 0, 0)
    if axis == Axis.Y:
        return (0, 1, 0)
    return (0, 0, int(vertical_step))


def run_cells(
    origin: Coordinate,
    axis: Axis,
    length: int,
    vertical_step: int = VerticalDirection.DESCENDING,
) -> List[Coordinate]:
    """Cells covered by a run of ``length`` letters starting at ``origin``."""

    dx, dy, dz = axis_step(axis, vertical_step)
    return [origin.shifted(dx * i, dy * i, dz * i) for i in range(length)]


@dataclass(frozen=True)
class Placement:
    """A word instance bound to an origin coordinate and axis."""

    word_id: int
    origin: Coordinate
    axis: Axis

    def cells(self, length: int, vertical_step: int = VerticalDirection.DESCENDING) -> List[Coordinate]:
        return run_cells(self.origin, self.axis, length, vertical_step)


@dataclass
class Cell:
    """Represents a volume cell."""

    type: CellType = CellType.EMPTY
    letter: Optional[str] = None

    def is_empty(self) -> bool:
        return self.type == CellType.EMPTY

    def is_blocker(self) -> bool:
        return self.type == CellType.BLOCKER

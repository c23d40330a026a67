"""Dense 3D letter volume and placement legality checks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.constants import CellType, VerticalDirection, Volume
from ..core.exceptions import PlacementError
from ..core.models import Cell, Coordinate, Placement
from ..data.vocabulary import Vocabulary
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class GridConfig:
    """Configuration values driving the volume layout."""

    width: int
    depth: int
    height: int
    vertical_step: VerticalDirection = VerticalDirection.DESCENDING

    def __post_init__(self) -> None:
        self.vertical_step = VerticalDirection(self.vertical_step)

    @classmethod
    def from_volume(
        cls,
        volume: Volume | Sequence[int],
        vertical_step: VerticalDirection = VerticalDirection.DESCENDING,
    ) -> "GridConfig":
        if not isinstance(volume, Volume):
            volume = Volume(*volume)
        return cls(
            width=volume.width,
            depth=volume.depth,
            height=volume.height,
            vertical_step=vertical_step,
        )

    def volume(self) -> Volume:
        return Volume(width=self.width, depth=self.depth, height=self.height)


class SpatialGrid:
    """Sole authority on cell occupancy inside a bounded volume.

    Cells are addressed in world coordinates. The vertical extent is measured
    along the configured growth direction, so ``z * vertical_step`` must fall in
    ``[0, height)``; the base floor ``z = 0`` is always the first level.
    Placements are never retracted: a caller abandoning a branch discards the
    grid and starts from a fresh instance.
    """

    def __init__(self, config: GridConfig, vocabulary: Vocabulary) -> None:
        self.config = config
        self.bounds = config.volume()
        self.vertical_step = config.vertical_step
        self.vocabulary = vocabulary
        self.cells: List[List[List[Cell]]] = [
            [[Cell() for _ in range(self.bounds.height)] for _ in range(self.bounds.depth)]
            for _ in range(self.bounds.width)
        ]
        self._committed: List[Placement] = []
        self._filled_count = 0

    # ------------------------------------------------------------------
    # Coordinate helpers
    # ------------------------------------------------------------------
    def _level(self, z: int) -> int:
        return z * int(self.vertical_step)

    def contains(self, coord: Coordinate) -> bool:
        return self.bounds.contains(coord.x, coord.y, self._level(coord.z))

    def cell(self, coord: Coordinate) -> Cell:
        if not self.contains(coord):
            raise IndexError(f"Cell outside volume: {coord}")
        return self.cells[coord.x][coord.y][self._level(coord.z)]

    def letter_at(self, coord: Coordinate) -> Optional[str]:
        if not self.contains(coord):
            return None
        return self.cell(coord).letter

    def run(self, placement: Placement) -> List[Coordinate]:
        """Cells covered by ``placement`` under this grid's vertical convention."""

        return placement.cells(self.vocabulary.length(placement.word_id), self.vertical_step)

    @property
    def filled_count(self) -> int:
        return self._filled_count

    # ------------------------------------------------------------------
    # Legality checks
    # ------------------------------------------------------------------
    def can_fit(self, placement: Placement) -> bool:
        """True iff the whole letter run stays inside the volume."""

        return all(self.contains(coord) for coord in self.run(placement))

    def has_collision(self, placement: Placement) -> bool:
        """True iff some letter lands on a blocker or on a different letter.

        Sharing a cell with the same letter is an intersection and is allowed.
        Cells outside the volume are left to :meth:`can_fit`.
        """

        word = self.vocabulary.word(placement.word_id)
        for index, coord in enumerate(self.run(placement)):
            if not self.contains(coord):
                continue
            cell = self.cell(coord)
            if cell.type == CellType.BLOCKER:
                LOGGER.debug("Blocker at %s rejects word %s", coord, placement.word_id)
                return True
            if cell.letter is not None and cell.letter != word[index]:
                LOGGER.debug(
                    "Letter conflict at %s: %s vs %s", coord, cell.letter, word[index]
                )
                return True
        return False

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def insert(self, placement: Placement) -> None:
        """Write every letter of ``placement`` and record it in the commit log.

        Collisions are not checked here; callers that need legality call
        :meth:`can_fit` and :meth:`has_collision` first. A run leaving the
        volume cannot be stored and raises before any cell changes.
        """

        word = self.vocabulary.word(placement.word_id)
        coords = self.run(placement)
        outside = [coord for coord in coords if not self.contains(coord)]
        if outside:
            raise PlacementError(
                f"Word {word!r} (id {placement.word_id}) extends outside the volume at {outside[0]}"
            )

        for index, coord in enumerate(coords):
            cell = self.cell(coord)
            if cell.letter is None:
                self._filled_count += 1
            cell.type = CellType.LETTER
            cell.letter = word[index]
        self._committed.append(placement)

    def try_insert(self, placement: Placement) -> bool:
        """Insert only when the placement fits and does not collide."""

        if not self.can_fit(placement) or self.has_collision(placement):
            return False
        self.insert(placement)
        return True

    def set_blocker(self, coord: Coordinate) -> None:
        """Mark a cell permanently unplaceable; out-of-volume coordinates are ignored."""

        if not self.contains(coord):
            LOGGER.debug("Ignoring blocker outside volume at %s", coord)
            return
        cell = self.cell(coord)
        if cell.letter is not None:
            self._filled_count -= 1
        cell.type = CellType.BLOCKER
        cell.letter = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def list_committed(self) -> List[Placement]:
        """Every inserted placement, in insertion order."""

        return list(self._committed)

    def layer(self, z: int) -> List[List[Cell]]:
        """Cells of one floor indexed as ``[y][x]`` for rendering."""

        level = self._level(z)
        if not 0 <= level < self.bounds.height:
            raise IndexError(f"Floor z={z} outside volume")
        return [
            [self.cells[x][y][level] for x in range(self.bounds.width)]
            for y in range(self.bounds.depth)
        ]

    def occupied_floors(self) -> List[int]:
        """World z values holding at least one letter, in growth order."""

        floors: List[int] = []
        step = int(self.vertical_step)
        for level in range(self.bounds.height):
            if any(
                self.cells[x][y][level].letter is not None
                for x in range(self.bounds.width)
                for y in range(self.bounds.depth)
            ):
                floors.append(level * step)
        return floors

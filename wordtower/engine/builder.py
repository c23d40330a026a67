"""Greedy initial tower assembly.

The builder runs four selection steps against a single grid:

  1. Base: first word long enough, laid along X at the anchor (floor 0).
  2. First vertical: crossing the base, shared letter nearest its own start.
  3. Floor extension: a horizontal word one floor past the base, crossing the
     first vertical at its next letter, as centrally as possible.
  4. Second vertical: like step 2, kept apart from the first one.

It is a heuristic, not a solver: the result is deterministic for a given
vocabulary order and may still fail the structural rules of the scorer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from ..core.constants import (
    DEFAULT_ANCHOR,
    DEFAULT_BASE_MIN_LENGTH,
    DEFAULT_FLOOR_MIN_LENGTH,
    DEFAULT_MAX_VERTICAL_RUN,
    DEFAULT_VERTICAL_SEPARATION,
    DEFAULT_VOLUME,
    MIN_FLOORS,
    Axis,
    VerticalDirection,
    Volume,
)
from ..core.models import Coordinate, Placement
from ..data.vocabulary import Vocabulary
from ..utils.logger import get_logger
from .candidates import (
    CrossingCandidate,
    find_crossing_candidates,
    find_letter_candidates,
    first_word_with_min_length,
    indices_within,
)
from .grid import GridConfig, SpatialGrid


LOGGER = get_logger(__name__)


@dataclass
class BuilderConfig:
    volume: Tuple[int, int, int] = DEFAULT_VOLUME
    anchor: Tuple[int, int, int] = DEFAULT_ANCHOR
    base_min_length: int = DEFAULT_BASE_MIN_LENGTH
    max_vertical_run: int = DEFAULT_MAX_VERTICAL_RUN
    floor_min_length: int = DEFAULT_FLOOR_MIN_LENGTH
    vertical_separation: int = DEFAULT_VERTICAL_SEPARATION
    vertical_step: VerticalDirection = VerticalDirection.DESCENDING
    floor_axis: Axis = Axis.X

    def __post_init__(self) -> None:
        self.vertical_step = VerticalDirection(self.vertical_step)
        self.floor_axis = Axis(self.floor_axis)
        if not self.floor_axis.is_horizontal:
            raise ValueError("floor_axis must be a horizontal axis")
        if self.base_min_length < 1:
            raise ValueError("base_min_length must be positive")
        if self.max_vertical_run < 2:
            raise ValueError("max_vertical_run must allow at least two letters")

    def to_grid_config(self) -> GridConfig:
        return GridConfig.from_volume(Volume(*self.volume), vertical_step=self.vertical_step)

    def anchor_coordinate(self) -> Coordinate:
        return Coordinate(*self.anchor)


@dataclass
class _BuildState:
    """Bookkeeping for a single build call."""

    grid: SpatialGrid
    accepted: List[Placement] = field(default_factory=list)
    used_ids: Set[int] = field(default_factory=set)


class TowerBuilder:
    """Greedy nearest-fit builder over a word inventory."""

    def __init__(self, vocabulary: Vocabulary, config: Optional[BuilderConfig] = None) -> None:
        self.vocabulary = vocabulary
        self.config = config or BuilderConfig()
        self.grid: Optional[SpatialGrid] = None

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def build(
        self, grid: Optional[SpatialGrid] = None, used_ids: Iterable[int] = ()
    ) -> List[Placement]:
        """Assemble an initial tower; an empty list means the build failed.

        ``used_ids`` are words already spent elsewhere (e.g. reported by the game
        service); they are never selected.
        """

        if grid is None:
            grid = SpatialGrid(self.config.to_grid_config(), self.vocabulary)
        elif grid.vertical_step != self.config.vertical_step:
            raise ValueError("Grid and builder disagree on the vertical direction")
        self.grid = grid
        state = _BuildState(grid=grid, used_ids=set(used_ids))
        if state.used_ids:
            LOGGER.info("Skipping %d already used words", len(state.used_ids))

        base = self._place_base(state)
        if base is None:
            return []

        first_vertical = self._select_vertical(state, base, "first vertical")
        if first_vertical is not None and self._place_vertical(
            state, base, first_vertical, "first vertical"
        ):
            self._place_floor_extension(state, base, first_vertical)

        # Crowding is judged against the chosen crossing even if its commit failed.
        excluded: List[int] = []
        if first_vertical is not None:
            excluded = indices_within(
                first_vertical.anchor_index,
                self.config.vertical_separation,
                len(self.vocabulary[base.word_id]),
            )
        second_vertical = self._select_vertical(state, base, "second vertical", excluded)
        if second_vertical is not None:
            self._place_vertical(state, base, second_vertical, "second vertical")

        floors = self._count_floors(state.accepted)
        LOGGER.info(
            "Built tower with %d words reaching %d floors", len(state.accepted), floors
        )
        if floors < MIN_FLOORS:
            LOGGER.error(
                "Tower spans %d floor(s), fewer than the required %d; discarding build",
                floors,
                MIN_FLOORS,
            )
            return []
        return list(state.accepted)

    # ------------------------------------------------------------------
    # Selection steps
    # ------------------------------------------------------------------
    def _place_base(self, state: _BuildState) -> Optional[Placement]:
        word_id = first_word_with_min_length(
            self.vocabulary, state.used_ids, self.config.base_min_length
        )
        if word_id is None:
            LOGGER.error(
                "No base word of length >= %d in %d words",
                self.config.base_min_length,
                len(self.vocabulary),
            )
            return None

        placement = Placement(word_id, self.config.anchor_coordinate(), Axis.X)
        LOGGER.info("Selected base word %r", self.vocabulary[word_id])
        if not self._commit(state, placement, "base"):
            return None
        return placement

    def _select_vertical(
        self,
        state: _BuildState,
        base: Placement,
        label: str,
        excluded_anchor_indices: Sequence[int] = (),
    ) -> Optional[CrossingCandidate]:
        candidates = find_crossing_candidates(
            self.vocabulary,
            state.used_ids,
            self.vocabulary[base.word_id],
            min_length=2,
            max_length=self.config.max_vertical_run,
            excluded_anchor_indices=excluded_anchor_indices,
        )
        if not candidates:
            LOGGER.warning("No %s word crosses the base word", label)
            return None
        return candidates[0]

    def _place_vertical(
        self, state: _BuildState, base: Placement, chosen: CrossingCandidate, label: str
    ) -> bool:
        crossing = base.origin.shifted(dx=chosen.anchor_index)
        # Shift the origin back along the run so the shared letter lands on the base.
        origin = crossing.shifted(dz=-int(self.config.vertical_step) * chosen.candidate_index)
        placement = Placement(chosen.word_id, origin, Axis.VERTICAL)
        LOGGER.info(
            "Selected %s %r crossing base at %s on letter %r",
            label,
            self.vocabulary[chosen.word_id],
            crossing,
            chosen.letter,
        )
        return self._commit(state, placement, label)

    def _place_floor_extension(
        self, state: _BuildState, base: Placement, vertical: CrossingCandidate
    ) -> Optional[Placement]:
        vertical_word = self.vocabulary[vertical.word_id]
        next_index = vertical.candidate_index + 1
        if next_index >= len(vertical_word):
            LOGGER.info("Vertical %r ends at the base; no floor extension", vertical_word)
            return None

        letter = vertical_word[next_index]
        candidates = find_letter_candidates(
            self.vocabulary, state.used_ids, letter, self.config.floor_min_length
        )
        if not candidates:
            LOGGER.warning("No floor word contains letter %r", letter)
            return None

        chosen = candidates[0]
        target = base.origin.shifted(
            dx=vertical.anchor_index, dz=int(self.config.vertical_step)
        )
        if self.config.floor_axis == Axis.X:
            origin = target.shifted(dx=-chosen.position)
        else:
            origin = target.shifted(dy=-chosen.position)
        placement = Placement(chosen.word_id, origin, self.config.floor_axis)
        LOGGER.info(
            "Selected floor word %r at z=%d crossing on letter %r",
            self.vocabulary[chosen.word_id],
            target.z,
            letter,
        )
        if not self._commit(state, placement, "floor extension"):
            return None
        return placement

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _commit(self, state: _BuildState, placement: Placement, label: str) -> bool:
        word = self.vocabulary[placement.word_id]
        if not state.grid.try_insert(placement):
            reason = "out of bounds" if not state.grid.can_fit(placement) else "collision"
            LOGGER.warning(
                "Could not add %s %r at %s: %s", label, word, placement.origin, reason
            )
            return False
        state.accepted.append(placement)
        state.used_ids.add(placement.word_id)
        LOGGER.debug("Committed %s %r at %s along %s", label, word, placement.origin, placement.axis.value)
        return True

    def _count_floors(self, placements: List[Placement]) -> int:
        floors: Set[int] = set()
        for placement in placements:
            length = self.vocabulary.length(placement.word_id)
            floors.update(coord.z for coord in placement.cells(length, self.config.vertical_step))
        return len(floors)

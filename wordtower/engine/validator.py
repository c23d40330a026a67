"""Structural rule validation and scoring for finished towers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Set

from ..core.constants import (
    BASE_FLOOR_Z,
    MIN_FLOORS,
    MIN_INTERSECTIONS,
    Axis,
    VerticalDirection,
)
from ..core.exceptions import ValidationError, VocabularyError
from ..core.models import Coordinate, Placement
from ..data.vocabulary import Vocabulary
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class PlacedWord:
    """A placement resolved against the vocabulary."""

    placement: Placement
    text: str
    cells: Sequence[Coordinate]

    @property
    def axis(self) -> Axis:
        return self.placement.axis

    @property
    def is_vertical(self) -> bool:
        return self.placement.axis == Axis.VERTICAL

    @property
    def z(self) -> int:
        return self.placement.origin.z


@dataclass
class FloorState:
    """Words touching one z level, with their horizontal bounding box."""

    z: int
    words: List[PlacedWord]
    horizontal_words: List[PlacedWord]
    vertical_words: List[PlacedWord]
    width: int
    depth: int


@dataclass
class TowerState:
    """Derived view over a placement list; rebuilt for every scoring pass."""

    words: List[PlacedWord]
    floors: Dict[int, FloorState]


@dataclass
class FloorReport:
    z: int
    score: float
    is_valid: bool = True
    letter_count: int = 0
    proportion: float = 0.0
    density: float = 0.0
    multiplier: int = 0
    width: int = 0
    depth: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "z": self.z,
            "score": self.score,
            "is_valid": self.is_valid,
            "letter_count": self.letter_count,
            "proportion": self.proportion,
            "density": self.density,
            "multiplier": self.multiplier,
            "width": self.width,
            "depth": self.depth,
        }


@dataclass
class TowerReport:
    is_valid: bool
    score: float
    floors: List[FloorReport] = field(default_factory=list)
    invalid_reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "is_valid": self.is_valid,
            "score": self.score,
            "floors": [floor.to_dict() for floor in self.floors],
        }
        if self.invalid_reason is not None:
            payload["invalid_reason"] = self.invalid_reason
        return payload


class TowerScorer:
    """Checks the structural rules of a tower and scores its floors.

    Works purely from placement geometry; it never consults a grid, so one
    scorer may evaluate any number of placement sets.
    """

    def __init__(
        self,
        vocabulary: Vocabulary,
        vertical_step: VerticalDirection = VerticalDirection.DESCENDING,
    ) -> None:
        self.vocabulary = vocabulary
        self.vertical_step = VerticalDirection(vertical_step)

    # ------------------------------------------------------------------
    # Tower state
    # ------------------------------------------------------------------
    def resolve(self, placement: Placement) -> PlacedWord:
        text = self.vocabulary[placement.word_id]
        return PlacedWord(
            placement=placement,
            text=text,
            cells=tuple(placement.cells(len(text), self.vertical_step)),
        )

    def create_tower_state(self, placements: Sequence[Placement]) -> TowerState:
        """Group placements into floors by every z value their letters touch."""

        words = [self.resolve(placement) for placement in placements]
        by_z: Dict[int, List[PlacedWord]] = {}
        for word in words:
            touched: List[int] = []
            for coord in word.cells:
                if coord.z not in touched:
                    touched.append(coord.z)
            for z in touched:
                by_z.setdefault(z, []).append(word)

        floors: Dict[int, FloorState] = {}
        for z, floor_words in by_z.items():
            xs = [coord.x for word in floor_words for coord in word.cells]
            ys = [coord.y for word in floor_words for coord in word.cells]
            floors[z] = FloorState(
                z=z,
                words=floor_words,
                horizontal_words=[word for word in floor_words if not word.is_vertical],
                vertical_words=[word for word in floor_words if word.is_vertical],
                width=max(xs) - min(xs) + 1,
                depth=max(ys) - min(ys) + 1,
            )
        return TowerState(words=words, floors=floors)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------
    def evaluate_placements(self, placements: Sequence[Placement]) -> TowerReport:
        """Resolve and evaluate raw placements; unknown word ids make the tower invalid."""

        try:
            tower = self.create_tower_state(placements)
        except VocabularyError as exc:
            LOGGER.info("Tower rejected: %s", exc)
            return TowerReport(is_valid=False, score=0.0, floors=[], invalid_reason=str(exc))
        return self.evaluate(tower)

    def evaluate(self, tower: TowerState) -> TowerReport:
        """Validate the tower rule by rule; score it only when every rule holds."""

        try:
            self._check_floor_count(tower)
            self._check_vertical_words(tower)
            self._check_horizontal_words(tower)
        except ValidationError as exc:
            LOGGER.info("Tower rejected: %s", exc)
            return TowerReport(is_valid=False, score=0.0, floors=[], invalid_reason=str(exc))

        floors = [self.score_floor(tower.floors[z]) for z in sorted(tower.floors, reverse=True)]
        total = sum(floor.score for floor in floors)
        LOGGER.info("Tower valid: %d floors, score %.2f", len(floors), total)
        return TowerReport(is_valid=True, score=total, floors=floors)

    def score_floor(self, floor: FloorState) -> FloorReport:
        letter_count = sum(len(word.text) for word in floor.words)
        proportion = min(floor.width, floor.depth) / max(floor.width, floor.depth)
        x_words = sum(1 for word in floor.horizontal_words if word.axis == Axis.X)
        y_words = sum(1 for word in floor.horizontal_words if word.axis == Axis.Y)
        density = 1 + (x_words + y_words) / 4
        multiplier = abs(floor.z) + 1
        return FloorReport(
            z=floor.z,
            score=letter_count * proportion * density * multiplier,
            is_valid=True,
            letter_count=letter_count,
            proportion=proportion,
            density=density,
            multiplier=multiplier,
            width=floor.width,
            depth=floor.depth,
        )

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------
    def _check_floor_count(self, tower: TowerState) -> None:
        if len(tower.floors) < MIN_FLOORS:
            raise ValidationError(
                f"Tower must have at least {MIN_FLOORS} floors (found {len(tower.floors)})"
            )

    def _check_vertical_words(self, tower: TowerState) -> None:
        horizontals = [word for word in tower.words if not word.is_vertical]
        for word in tower.words:
            if not word.is_vertical:
                continue
            count = self._count_intersections(word, horizontals)
            if count < MIN_INTERSECTIONS:
                raise ValidationError(
                    f'Vertical word "{word.text}" has only {count} valid intersections, '
                    f"needs at least {MIN_INTERSECTIONS}"
                )

    def _check_horizontal_words(self, tower: TowerState) -> None:
        verticals = [word for word in tower.words if word.is_vertical]
        for word in tower.words:
            if word.is_vertical or word.z == BASE_FLOOR_Z:
                continue
            count = self._count_intersections(word, verticals)
            if count < MIN_INTERSECTIONS:
                raise ValidationError(
                    f'Horizontal word "{word.text}" at Z={word.z} has only {count} '
                    f"valid intersections, needs at least {MIN_INTERSECTIONS}"
                )

    @staticmethod
    def _count_intersections(word: PlacedWord, counterparts: Sequence[PlacedWord]) -> int:
        """Counterparts sharing a cell with ``word`` past its first letter, once each."""

        own_cells = word.cells[1:]
        count = 0
        for other in counterparts:
            other_cells: Set[Coordinate] = set(other.cells)
            if any(coord in other_cells for coord in own_cells):
                count += 1
        return count

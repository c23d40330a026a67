"""Build-then-score pipeline used by the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..core.models import Placement
from ..data.vocabulary import Vocabulary
from ..utils.logger import get_logger
from .builder import BuilderConfig, TowerBuilder
from .grid import SpatialGrid
from .validator import TowerReport, TowerScorer


LOGGER = get_logger(__name__)


@dataclass
class TowerPlan:
    placements: List[Placement]
    report: TowerReport
    grid: Optional[SpatialGrid] = field(default=None, repr=False)

    @property
    def ready_to_submit(self) -> bool:
        return bool(self.placements) and self.report.is_valid


def plan_tower(
    vocabulary: Vocabulary,
    config: Optional[BuilderConfig] = None,
    used_ids: Iterable[int] = (),
) -> TowerPlan:
    """Run the builder on a fresh grid and score whatever it produced."""

    builder = TowerBuilder(vocabulary, config)
    placements = builder.build(used_ids=used_ids)
    if not placements:
        LOGGER.error("Builder produced no placements from %d words", len(vocabulary))
        report = TowerReport(
            is_valid=False, score=0.0, invalid_reason="Builder produced no placements"
        )
        return TowerPlan(placements=[], report=report, grid=builder.grid)

    scorer = TowerScorer(vocabulary, builder.config.vertical_step)
    report = scorer.evaluate_placements(placements)
    if not report.is_valid:
        LOGGER.warning("Built tower does not pass validation: %s", report.invalid_reason)
    return TowerPlan(placements=placements, report=report, grid=builder.grid)

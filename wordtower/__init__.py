"""Word tower planner for the 3D word-placement game.

This package exposes the public API surface via:

- ``wordtower.engine.grid.SpatialGrid``: occupancy and placement legality.
- ``wordtower.engine.builder.TowerBuilder``: greedy initial tower assembly.
- ``wordtower.engine.validator.TowerScorer``: structural rules and scoring.
- ``wordtower.data.vocabulary.Vocabulary``: id-addressed word inventory.
"""

from .engine.builder import BuilderConfig, TowerBuilder
from .engine.grid import GridConfig, SpatialGrid
from .engine.validator import TowerReport, TowerScorer
from .data.vocabulary import Vocabulary

__all__ = [
    "BuilderConfig",
    "TowerBuilder",
    "GridConfig",
    "SpatialGrid",
    "TowerReport",
    "TowerScorer",
    "Vocabulary",
]

__version__ = "0.1.0"

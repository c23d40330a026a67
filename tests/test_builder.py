import unittest

from wordtower.core.constants import Axis, VerticalDirection
from wordtower.core.models import Coordinate, Placement
from wordtower.data.vocabulary import Vocabulary
from wordtower.engine.builder import BuilderConfig, TowerBuilder
from wordtower.engine.grid import GridConfig, SpatialGrid
from wordtower.engine.planner import plan_tower


WORDS = ["HOUSE", "SEA", "EAR", "HUT"]


class TowerBuilderTests(unittest.TestCase):
    def test_builds_base_verticals_and_floor_word(self) -> None:
        builder = TowerBuilder(Vocabulary(WORDS))
        placements = builder.build()
        self.assertEqual(
            placements,
            [
                Placement(0, Coordinate(5, 5, 0), Axis.X),
                Placement(1, Coordinate(8, 5, 0), Axis.VERTICAL),
                Placement(2, Coordinate(8, 5, -1), Axis.X),
                Placement(3, Coordinate(5, 5, 0), Axis.VERTICAL),
            ],
        )
        assert builder.grid is not None
        self.assertEqual(builder.grid.list_committed(), placements)
        self.assertEqual(builder.grid.letter_at(Coordinate(8, 5, -1)), "E")
        self.assertEqual(builder.grid.letter_at(Coordinate(5, 5, -2)), "T")

    def test_build_is_deterministic(self) -> None:
        vocabulary = Vocabulary(WORDS)
        self.assertEqual(TowerBuilder(vocabulary).build(), TowerBuilder(vocabulary).build())

    def test_floor_word_along_y(self) -> None:
        config = BuilderConfig(floor_axis=Axis.Y)
        placements = TowerBuilder(Vocabulary(WORDS), config).build()
        self.assertEqual(placements[2], Placement(2, Coordinate(8, 5, -1), Axis.Y))

    def test_no_long_word_yields_empty_build(self) -> None:
        builder = TowerBuilder(Vocabulary(["CAT", "DOG", "BIRD"]))
        self.assertEqual(builder.build(), [])
        assert builder.grid is not None
        self.assertEqual(builder.grid.filled_count, 0)

    def test_empty_vocabulary_yields_empty_build(self) -> None:
        self.assertEqual(TowerBuilder(Vocabulary([])).build(), [])

    def test_single_floor_build_is_discarded(self) -> None:
        self.assertEqual(TowerBuilder(Vocabulary(["HOUSE", "ZZZ"])).build(), [])

    def test_long_words_never_become_verticals(self) -> None:
        config = BuilderConfig(max_vertical_run=2)
        self.assertEqual(TowerBuilder(Vocabulary(["HOUSE", "SEA"]), config).build(), [])

    def test_rejected_commit_skips_step(self) -> None:
        vocabulary = Vocabulary(WORDS)
        config = BuilderConfig()
        grid = SpatialGrid(config.to_grid_config(), vocabulary)
        # Block the cell right under the S of HOUSE so SEA cannot go down there.
        grid.set_blocker(Coordinate(8, 5, -1))
        placements = TowerBuilder(vocabulary, config).build(grid)
        self.assertEqual(
            placements,
            [
                Placement(0, Coordinate(5, 5, 0), Axis.X),
                Placement(3, Coordinate(5, 5, 0), Axis.VERTICAL),
            ],
        )

    def test_already_used_words_are_never_selected(self) -> None:
        placements = TowerBuilder(Vocabulary(WORDS)).build(used_ids=[1])
        self.assertEqual(
            placements,
            [
                Placement(0, Coordinate(5, 5, 0), Axis.X),
                Placement(2, Coordinate(9, 5, 0), Axis.VERTICAL),
                Placement(3, Coordinate(5, 5, 0), Axis.VERTICAL),
            ],
        )

    def test_used_base_word_moves_base_selection(self) -> None:
        builder = TowerBuilder(Vocabulary(["HOUSE", "SEA", "HOTEL"]))
        builder.build(used_ids=[0])
        assert builder.grid is not None
        self.assertEqual(builder.grid.list_committed()[0], Placement(2, Coordinate(5, 5, 0), Axis.X))

    def test_base_that_does_not_fit_fails_build(self) -> None:
        config = BuilderConfig(volume=(8, 8, 8))
        self.assertEqual(TowerBuilder(Vocabulary(WORDS), config).build(), [])

    def test_ascending_tower_grows_upward(self) -> None:
        config = BuilderConfig(vertical_step=VerticalDirection.ASCENDING)
        placements = TowerBuilder(Vocabulary(WORDS), config).build()
        self.assertEqual(placements[2], Placement(2, Coordinate(8, 5, 1), Axis.X))

    def test_grid_with_other_vertical_direction_is_rejected(self) -> None:
        vocabulary = Vocabulary(WORDS)
        grid = SpatialGrid(
            GridConfig(30, 30, 100, vertical_step=VerticalDirection.ASCENDING), vocabulary
        )
        with self.assertRaises(ValueError):
            TowerBuilder(vocabulary).build(grid)

    def test_vertical_floor_axis_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            BuilderConfig(floor_axis=Axis.VERTICAL)


class PlannerTests(unittest.TestCase):
    def test_plan_scores_built_tower(self) -> None:
        plan = plan_tower(Vocabulary(WORDS))
        self.assertEqual(len(plan.placements), 4)
        self.assertFalse(plan.report.is_valid)
        self.assertIn('Vertical word "SEA"', plan.report.invalid_reason or "")
        self.assertFalse(plan.ready_to_submit)

    def test_plan_reports_empty_build(self) -> None:
        plan = plan_tower(Vocabulary(["CAT"]))
        self.assertEqual(plan.placements, [])
        self.assertEqual(plan.report.invalid_reason, "Builder produced no placements")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

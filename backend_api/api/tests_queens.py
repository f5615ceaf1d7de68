from django.test import SimpleTestCase

from api.puzzles import QueensEngine
from api.puzzles.constraints import DiagonalQueensRules, QueensRules
from api.puzzles.grid import QUEEN, Board, Coord
from api.puzzles.instances import QueensPuzzle

# A A A B
# C A B B
# C C D B
# C D D D
FOUR_BY_FOUR = {
    "gridSize": 4,
    "regions": {
        "A": [[0, 0], [0, 1], [0, 2], [1, 1]],
        "B": [[0, 3], [1, 2], [1, 3], [2, 3]],
        "C": [[1, 0], [2, 0], [2, 1], [3, 0]],
        "D": [[2, 2], [3, 1], [3, 2], [3, 3]],
    },
}

# Regions A and B both sit in column 0.
CONTRADICTORY = {
    "gridSize": 4,
    "regions": {
        "A": [[0, 0]],
        "B": [[1, 0]],
        "C": [[2, 0], [3, 0], [0, 1], [1, 1], [2, 1], [3, 1]],
        "D": [[r, c] for r in range(4) for c in (2, 3)],
    },
}


def column_regions(n):
    return {"gridSize": n, "regions": {f"col{c}": [[r, c] for r in range(n)] for c in range(n)}}


class QueensRulesTests(SimpleTestCase):
    def setUp(self):
        self.puzzle = QueensPuzzle.from_payload(FOUR_BY_FOUR)
        self.board = Board.create(4)
        self.board.assign(Coord(0, 0), QUEEN)

    def test_row_column_region_and_touching(self):
        rules = QueensRules()
        self.assertFalse(rules.is_admissible(self.board, Coord(0, 3), QUEEN, self.puzzle))  # row
        self.assertFalse(rules.is_admissible(self.board, Coord(3, 0), QUEEN, self.puzzle))  # column
        self.assertFalse(rules.is_admissible(self.board, Coord(1, 1), QUEEN, self.puzzle))  # touching
        self.assertTrue(rules.is_admissible(self.board, Coord(2, 1), QUEEN, self.puzzle))

    def test_region_already_used(self):
        cells = [[r, c] for r in range(4) for c in range(4) if (r, c) not in ((0, 0), (2, 2))]
        puzzle = QueensPuzzle.from_payload(
            {"gridSize": 4, "regions": {"a": [[0, 0], [2, 2]], "b": cells}}
        )
        self.assertFalse(QueensRules().is_admissible(self.board, Coord(2, 2), QUEEN, puzzle))
        self.assertTrue(QueensRules().is_admissible(self.board, Coord(2, 1), QUEEN, puzzle))

    def test_far_diagonal_only_rejected_by_variant(self):
        self.assertTrue(QueensRules().is_admissible(self.board, Coord(2, 2), QUEEN, self.puzzle))
        self.assertFalse(DiagonalQueensRules().is_admissible(self.board, Coord(2, 2), QUEEN, self.puzzle))

    def test_uncovered_cell_never_admissible(self):
        puzzle = QueensPuzzle.from_payload({"gridSize": 2, "regions": {"a": [[0, 0]]}})
        self.assertFalse(QueensRules().is_admissible(Board.create(2), Coord(1, 1), QUEEN, puzzle))


class QueensEngineTests(SimpleTestCase):
    def setUp(self):
        self.engine = QueensEngine()

    def test_four_by_four(self):
        puzzle = self.engine.build(FOUR_BY_FOUR)
        result = self.engine.solve(puzzle)
        self.assertTrue(result.solved)
        self.assertEqual(result.solution, [[0, 2], [1, 0], [2, 3], [3, 1]])
        self.assertEqual(self.engine.verify(puzzle, result.solution), [])

    def test_solution_is_sorted_by_row(self):
        puzzle = self.engine.build(column_regions(6))
        result = self.engine.solve(puzzle)
        self.assertTrue(result.solved)
        self.assertEqual([row for row, _ in result.solution], list(range(6)))
        self.assertEqual(self.engine.verify(puzzle, result.solution), [])

    def test_contradictory_layout_has_no_solution(self):
        result = self.engine.solve(self.engine.build(CONTRADICTORY))
        self.assertFalse(result.solved)
        self.assertIsNone(result.solution)
        self.assertGreater(result.metadata["nodes"], 0)

    def test_single_cell_skips_search(self):
        result = self.engine.solve(self.engine.build({"gridSize": 1, "regions": {"x": [[0, 0]]}}))
        self.assertEqual(result.solution, [[0, 0]])
        self.assertNotIn("nodes", result.metadata)

    def test_diagonal_variant_agrees_on_four_by_four(self):
        engine = QueensEngine(rules=DiagonalQueensRules())
        result = engine.solve(engine.build(FOUR_BY_FOUR))
        self.assertEqual(result.solution, [[0, 2], [1, 0], [2, 3], [3, 1]])

    def test_deterministic(self):
        first = self.engine.solve(self.engine.build(column_regions(7)))
        second = self.engine.solve(self.engine.build(column_regions(7)))
        self.assertEqual(first.solution, second.solution)

    def test_verify_reports_violations(self):
        puzzle = self.engine.build(FOUR_BY_FOUR)
        violations = self.engine.verify(puzzle, [[0, 0], [1, 1], [2, 2], [3, 3]])
        self.assertTrue(any("touch" in v for v in violations))
        self.assertTrue(any("Region A" in v for v in violations))
        self.assertEqual(self.engine.verify(puzzle, "nonsense"), ["Solution must be a list of [row, col] pairs."])

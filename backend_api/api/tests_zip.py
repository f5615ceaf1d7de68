from django.test import SimpleTestCase

from api.puzzles import PuzzleInputError, ZipEngine
from api.puzzles.constraints import ZipRules
from api.puzzles.grid import Board, Coord
from api.puzzles.instances import ZipPuzzle

CORNER_TO_CORNER = {"gridSize": 3, "numbers": {"1": [0, 0], "2": [2, 2]}}
CORNER_TO_CORNER_PATH = [[0, 0], [0, 1], [0, 2], [1, 2], [1, 1], [1, 0], [2, 0], [2, 1], [2, 2]]


class ZipRulesTests(SimpleTestCase):
    def setUp(self):
        self.rules = ZipRules()
        self.puzzle = ZipPuzzle.from_payload(
            {
                "gridSize": 3,
                "numbers": {"1": [0, 0], "2": [1, 1], "3": [2, 2]},
                "walls": [[[0, 0], [1, 0]]],
            }
        )
        self.board = Board.create(3)
        self.board.assign(Coord(0, 0), 0)

    def test_plain_cell_is_steppable(self):
        self.assertTrue(self.rules.is_admissible(self.board, (Coord(0, 0), Coord(0, 1)), 2, self.puzzle))

    def test_wall_blocks_step(self):
        self.assertFalse(self.rules.is_admissible(self.board, (Coord(0, 0), Coord(1, 0)), 2, self.puzzle))

    def test_visited_and_outside_cells(self):
        self.assertFalse(self.rules.is_admissible(self.board, (Coord(0, 1), Coord(0, 0)), 2, self.puzzle))
        self.assertFalse(self.rules.is_admissible(self.board, (Coord(0, 0), Coord(-1, 0)), 2, self.puzzle))

    def test_only_the_expected_checkpoint(self):
        self.board.assign(Coord(0, 1), 1)
        self.assertTrue(self.rules.is_admissible(self.board, (Coord(0, 1), Coord(1, 1)), 2, self.puzzle))
        self.assertFalse(self.rules.is_admissible(self.board, (Coord(0, 1), Coord(1, 1)), 3, self.puzzle))

    def test_last_checkpoint_must_close_the_path(self):
        self.board.assign(Coord(0, 1), 1)
        self.board.assign(Coord(1, 1), 2)
        self.board.assign(Coord(1, 2), 3)
        self.assertFalse(self.rules.is_admissible(self.board, (Coord(1, 2), Coord(2, 2)), 3, self.puzzle))


class ZipEngineTests(SimpleTestCase):
    def setUp(self):
        self.engine = ZipEngine()

    def test_three_by_three(self):
        puzzle = self.engine.build(CORNER_TO_CORNER)
        result = self.engine.solve(puzzle)
        self.assertTrue(result.solved)
        self.assertEqual(result.solution, CORNER_TO_CORNER_PATH)
        self.assertEqual(self.engine.verify(puzzle, result.solution), [])

    def test_walls_are_respected(self):
        data = dict(CORNER_TO_CORNER, walls=[[[0, 0], [0, 1]], [[2, 1], [2, 2]]])
        puzzle = self.engine.build(data)
        result = self.engine.solve(puzzle)
        self.assertTrue(result.solved)
        self.assertEqual(result.solution[1], [1, 0])
        self.assertEqual(self.engine.verify(puzzle, result.solution), [])

    def test_checkpoints_in_order(self):
        data = {"gridSize": 4, "numbers": {"1": [0, 0], "2": [1, 3], "3": [2, 0], "4": [3, 0]}}
        puzzle = self.engine.build(data)
        result = self.engine.solve(puzzle)
        self.assertTrue(result.solved)
        self.assertEqual(len(result.solution), 16)
        self.assertEqual(self.engine.verify(puzzle, result.solution), [])
        positions = [result.solution.index(cell) for cell in ([0, 0], [1, 3], [2, 0], [3, 0])]
        self.assertEqual(positions, sorted(positions))
        self.assertEqual(positions[-1], 15)

    def test_parity_makes_two_by_two_unsolvable(self):
        result = self.engine.solve(self.engine.build({"gridSize": 2, "numbers": {"1": [0, 0], "2": [1, 1]}}))
        self.assertFalse(result.solved)
        self.assertIsNone(result.solution)

    def test_single_checkpoint_cannot_close_a_longer_path(self):
        result = self.engine.solve(self.engine.build({"gridSize": 3, "numbers": {"1": [1, 1]}}))
        self.assertFalse(result.solved)

    def test_single_cell_skips_search(self):
        result = self.engine.solve(self.engine.build({"gridSize": 1, "numbers": {"1": [0, 0]}}))
        self.assertEqual(result.solution, [[0, 0]])
        self.assertNotIn("nodes", result.metadata)

    def test_non_consecutive_numbers(self):
        puzzle = self.engine.build({"gridSize": 3, "numbers": {"2": [0, 0], "5": [1, 1], "9": [2, 2]}})
        result = self.engine.solve(puzzle)
        self.assertEqual(puzzle.order, [2, 5, 9])
        self.assertEqual(result.solution, CORNER_TO_CORNER_PATH)

    def test_duplicate_cells_rejected(self):
        with self.assertRaises(PuzzleInputError):
            ZipPuzzle.from_payload({"gridSize": 3, "numbers": {"1": [0, 0], "2": [0, 0]}})

    def test_deterministic(self):
        first = self.engine.solve(self.engine.build(CORNER_TO_CORNER))
        second = self.engine.solve(self.engine.build(CORNER_TO_CORNER))
        self.assertEqual(first.solution, second.solution)

    def test_verify_reports_wall_crossing(self):
        puzzle = self.engine.build(dict(CORNER_TO_CORNER, walls=[[[0, 1], [0, 2]]]))
        violations = self.engine.verify(puzzle, CORNER_TO_CORNER_PATH)
        self.assertEqual(violations, ["Path crosses the wall between (0, 1) and (0, 2)."])

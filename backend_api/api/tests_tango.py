from itertools import permutations, product

from django.test import SimpleTestCase

from api.puzzles import PuzzleInputError, TangoEngine
from api.puzzles.constraints import TangoRules
from api.puzzles.grid import MOON, SUN, Board, Coord
from api.puzzles.instances import Relation, TangoPuzzle

UNIQUE_FOUR = {
    "gridSize": 4,
    "initialGrid": [
        [1, 0, -1, 1],
        [0, -1, -1, -1],
        [-1, 0, -1, -1],
        [-1, -1, -1, -1],
    ],
    "constraints": [
        {"c1": [1, 1], "c2": [1, 2], "type": "="},
        {"c1": [2, 2], "c2": [2, 3], "type": "x"},
        {"c1": [1, 2], "c2": [2, 2], "type": "="},
    ],
}

UNIQUE_FOUR_SOLUTION = [
    [1, 0, 0, 1],
    [0, 1, 1, 0],
    [1, 0, 1, 0],
    [0, 1, 0, 1],
]


def empty_grid(n):
    return {"gridSize": n, "initialGrid": [[-1] * n for _ in range(n)], "constraints": []}


def brute_force(engine, puzzle):
    """Every grid whose rows are balanced permutations and that passes verify()."""
    n = puzzle.size
    rows = sorted(set(permutations([SUN] * (n // 2) + [MOON] * (n // 2))))
    found = []
    for grid in product(rows, repeat=n):
        candidate = [list(row) for row in grid]
        if not engine.verify(puzzle, candidate):
            found.append(candidate)
    return found


class TangoRulesTests(SimpleTestCase):
    def setUp(self):
        self.rules = TangoRules()
        self.puzzle = TangoPuzzle(size=6, givens={}, edges=[])
        self.board = Board.create(6)

    def test_run_of_three(self):
        self.board.assign(Coord(0, 0), SUN)
        self.board.assign(Coord(0, 1), SUN)
        self.assertFalse(self.rules.is_admissible(self.board, Coord(0, 2), SUN, self.puzzle))
        self.assertTrue(self.rules.is_admissible(self.board, Coord(0, 2), MOON, self.puzzle))
        self.assertTrue(self.rules.is_admissible(self.board, Coord(0, 3), SUN, self.puzzle))

    def test_run_of_three_around_gap(self):
        self.board.assign(Coord(1, 0), MOON)
        self.board.assign(Coord(3, 0), MOON)
        self.assertFalse(self.rules.is_admissible(self.board, Coord(2, 0), MOON, self.puzzle))

    def test_balance_cap(self):
        for c, value in enumerate([SUN, MOON, SUN, MOON]):
            self.board.assign(Coord(0, c), value)
        self.board.assign(Coord(0, 5), SUN)
        self.assertFalse(self.rules.is_admissible(self.board, Coord(0, 4), SUN, self.puzzle))
        self.assertTrue(self.rules.is_admissible(self.board, Coord(0, 4), MOON, self.puzzle))

    def test_edges_only_checked_against_assigned_cells(self):
        puzzle = TangoPuzzle(size=4, givens={}, edges=[(Coord(0, 0), Coord(0, 1), Relation.UNEQUAL)])
        board = Board.create(4)
        self.assertTrue(self.rules.is_admissible(board, Coord(0, 1), SUN, puzzle))
        board.assign(Coord(0, 0), SUN)
        self.assertFalse(self.rules.is_admissible(board, Coord(0, 1), SUN, puzzle))
        self.assertTrue(self.rules.is_admissible(board, Coord(0, 1), MOON, puzzle))

    def test_distinct_lines(self):
        board = Board.create(4)
        for c, value in enumerate([SUN, MOON, SUN, MOON]):
            board.assign(Coord(0, c), value)
        for c, value in enumerate([SUN, MOON, SUN]):
            board.assign(Coord(1, c), value)
        loose = TangoPuzzle(size=4, givens={}, edges=[])
        strict = TangoPuzzle(size=4, givens={}, edges=[], distinct_lines=True)
        self.assertTrue(self.rules.is_admissible(board, Coord(1, 3), MOON, loose))
        self.assertFalse(self.rules.is_admissible(board, Coord(1, 3), MOON, strict))

    def test_relation_tokens(self):
        self.assertIs(Relation.parse("="), Relation.EQUAL)
        self.assertIs(Relation.parse("X"), Relation.UNEQUAL)
        self.assertIs(Relation.parse("opposite"), Relation.UNEQUAL)
        with self.assertRaises(PuzzleInputError):
            Relation.parse("?")

    def test_odd_size_rejected(self):
        with self.assertRaises(PuzzleInputError):
            TangoPuzzle(size=3, givens={}, edges=[])


class TangoEngineTests(SimpleTestCase):
    def setUp(self):
        self.engine = TangoEngine()

    def test_unique_completion_matches_brute_force(self):
        puzzle = self.engine.build(UNIQUE_FOUR)
        result = self.engine.solve(puzzle)
        self.assertTrue(result.solved)
        self.assertEqual(result.solution, UNIQUE_FOUR_SOLUTION)
        self.assertEqual(brute_force(self.engine, puzzle), [UNIQUE_FOUR_SOLUTION])

    def test_solution_is_one_of_the_brute_force_grids(self):
        puzzle = self.engine.build(
            {
                "gridSize": 4,
                "initialGrid": [[-1] * 4 for _ in range(4)],
                "constraints": [{"c1": [0, 0], "c2": [1, 0], "type": "x"}],
            }
        )
        result = self.engine.solve(puzzle)
        self.assertIn(result.solution, brute_force(self.engine, puzzle))

    def test_empty_six_by_six(self):
        puzzle = self.engine.build(empty_grid(6))
        result = self.engine.solve(puzzle)
        self.assertTrue(result.solved)
        self.assertEqual(self.engine.verify(puzzle, result.solution), [])

    def test_distinct_lines_solution(self):
        data = dict(empty_grid(6), distinctLines=True)
        puzzle = self.engine.build(data)
        result = self.engine.solve(puzzle)
        self.assertTrue(result.solved)
        self.assertEqual(self.engine.verify(puzzle, result.solution), [])

    def test_contradictory_edges_have_no_solution(self):
        data = empty_grid(4)
        data["constraints"] = [
            {"c1": [0, 0], "c2": [0, 1], "type": "="},
            {"c1": [0, 0], "c2": [0, 1], "type": "x"},
        ]
        result = self.engine.solve(self.engine.build(data))
        self.assertFalse(result.solved)
        self.assertIsNone(result.solution)

    def test_inconsistent_givens_have_no_solution(self):
        data = empty_grid(4)
        data["initialGrid"][0] = [1, 1, 1, -1]
        result = self.engine.solve(self.engine.build(data))
        self.assertFalse(result.solved)

    def test_givens_are_kept(self):
        data = empty_grid(6)
        data["initialGrid"][2][3] = 0
        data["initialGrid"][5][5] = 1
        result = self.engine.solve(self.engine.build(data))
        self.assertEqual(result.solution[2][3], 0)
        self.assertEqual(result.solution[5][5], 1)

    def test_deterministic(self):
        first = self.engine.solve(self.engine.build(UNIQUE_FOUR))
        second = self.engine.solve(self.engine.build(UNIQUE_FOUR))
        self.assertEqual(first.solution, second.solution)

from django.test import SimpleTestCase

from api.puzzles.grid import UNASSIGNED, Board, Coord, OutOfRange
from api.puzzles.search import SearchStats, backtrack, run_search


class BoardTests(SimpleTestCase):
    def test_create_is_unassigned(self):
        board = Board.create(3)
        self.assertEqual(board.to_lists(), [[None] * 3 for _ in range(3)])
        self.assertEqual(board.first_unassigned(), Coord(0, 0))
        self.assertFalse(board.is_full())

    def test_out_of_range(self):
        board = Board.create(2)
        with self.assertRaises(OutOfRange):
            board.get(2, 0)
        with self.assertRaises(OutOfRange):
            board.set(0, -1, 1)
        # OutOfRange is an IndexError so plain sequence handling still works
        with self.assertRaises(IndexError):
            board[Coord(5, 5)]

    def test_assign_and_unassign_restore_state(self):
        board = Board.create(2)
        board.assign(Coord(0, 1), 7)
        board.assign(Coord(1, 0), 8)
        self.assertEqual(board.depth, 2)
        self.assertEqual(board.get(0, 1), 7)

        self.assertEqual(board.unassign(), Coord(1, 0))
        self.assertIs(board.get(1, 0), UNASSIGNED)
        self.assertEqual(board.get(0, 1), 7)
        self.assertEqual(board.unassign(), Coord(0, 1))
        self.assertIsNone(board.unassign())

    def test_assign_refuses_assigned_cell(self):
        board = Board.create(2)
        board.assign(Coord(0, 0), 1)
        with self.assertRaises(ValueError):
            board.assign(Coord(0, 0), 0)

    def test_row_and_column(self):
        board = Board.create(2)
        board.set(0, 1, "a")
        board.set(1, 1, "b")
        self.assertEqual(board.row(0), [None, "a"])
        self.assertEqual(board.column(1), ["a", "b"])

    def test_neighbour_order(self):
        cell = Coord(1, 1)
        self.assertEqual(
            cell.orthogonal_neighbours(),
            [Coord(0, 1), Coord(1, 2), Coord(2, 1), Coord(1, 0)],
        )
        self.assertEqual(len(cell.touching_neighbours()), 8)
        self.assertTrue(cell.is_adjacent(Coord(1, 0)))
        self.assertFalse(cell.is_adjacent(Coord(0, 0)))


class _BitsProblem:
    """Pick three bits whose sum equals ``target``."""

    def __init__(self, target, order=(0, 1)):
        self.target = target
        self.order = order

    def next_decision(self, state):
        return len(state) if len(state) < 3 else None

    def candidates(self, state, decision):
        return self.order

    def is_admissible(self, state, decision, choice):
        return sum(state) + choice <= self.target

    def commit(self, state, decision, choice):
        state.append(choice)

    def rollback(self, state, decision, choice):
        state.pop()

    def accept(self, state):
        return sum(state) == self.target


class BacktrackTests(SimpleTestCase):
    def test_first_solution_follows_candidate_order(self):
        state = []
        stats = SearchStats()
        self.assertTrue(backtrack(_BitsProblem(2), state, stats))
        self.assertEqual(state, [0, 1, 1])
        self.assertEqual(stats.nodes, 8)
        self.assertEqual(stats.backtracks, 1)

        state = []
        self.assertTrue(backtrack(_BitsProblem(2, order=(1, 0)), state))
        self.assertEqual(state, [1, 1, 0])

    def test_exhaustion_rolls_everything_back(self):
        state = []
        stats = SearchStats()
        self.assertFalse(backtrack(_BitsProblem(4), state, stats))
        self.assertEqual(state, [])
        self.assertGreater(stats.backtracks, 0)

    def test_inadmissible_choices_are_counted(self):
        state = []
        found, stats = run_search(_BitsProblem(1, order=(1, 0)), state)
        self.assertTrue(found)
        self.assertEqual(state, [1, 0, 0])
        self.assertEqual(stats.rejected, 2)
        self.assertEqual(stats.nodes, 4)

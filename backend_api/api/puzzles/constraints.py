from __future__ import annotations

from typing import Any, List, Optional, Protocol, Tuple

from .grid import QUEEN, UNASSIGNED, Board, Coord
from .instances import QueensPuzzle, TangoPuzzle, ZipPuzzle


class Rules(Protocol):
    """Admissibility predicate for a single local change."""

    # PUBLIC_INTERFACE
    def is_admissible(self, board: Board, target: Any, value: Any, puzzle: Any) -> bool:
        """Return True if placing ``value`` at ``target`` keeps the board legal.

        Only the constraints touching ``target`` are evaluated; the rest of
        the board is assumed to be legal already.
        """


class QueensRules:
    """One queen per row, column and region; queens never touch (8 directions)."""

    def is_admissible(self, board: Board, target: Coord, value: int, puzzle: QueensPuzzle) -> bool:
        if value != QUEEN:
            return True
        region = puzzle.regions.get(target)
        if region is None:
            return False
        n = board.size
        if any(board.get(target.row, c) == QUEEN for c in range(n)):
            return False
        if any(board.get(r, target.col) == QUEEN for r in range(n)):
            return False
        if any(board[cell] == QUEEN for cell in puzzle.region_cells[region]):
            return False
        return not self._attacked(board, target)

    def _attacked(self, board: Board, target: Coord) -> bool:
        return any(
            board.in_bounds(cell) and board[cell] == QUEEN
            for cell in target.touching_neighbours()
        )


class DiagonalQueensRules(QueensRules):
    """Variant that also forbids queens anywhere on the same diagonal lines.

    Stricter than the touching rule: boards accepted here are a subset of the
    ones accepted by :class:`QueensRules`.
    """

    def _attacked(self, board: Board, target: Coord) -> bool:
        for dr, dc in ((-1, -1), (-1, 1), (1, -1), (1, 1)):
            cell = target.offset(dr, dc)
            while board.in_bounds(cell):
                if board[cell] == QUEEN:
                    return True
                cell = cell.offset(dr, dc)
        return False


class TangoRules:
    """Balanced lines, no run of three, edge markers, optional distinct lines."""

    def is_admissible(self, board: Board, target: Coord, value: int, puzzle: TangoPuzzle) -> bool:
        half = board.size // 2
        row = board.row(target.row)
        column = board.column(target.col)
        for line, index in ((row, target.col), (column, target.row)):
            # Capping each symbol at n/2 forces an exact split once the line is full.
            if line.count(value) + 1 > half:
                return False
            if _makes_run_of_three(line, index, value):
                return False

        for other, relation in puzzle.edges_by_cell.get(target, ()):
            other_value = board[other]
            if other_value is not UNASSIGNED and not relation.holds(value, other_value):
                return False

        if puzzle.distinct_lines:
            if _duplicates_line(_with(row, target.col, value), board.rows(), target.row):
                return False
            columns = (board.column(c) for c in range(board.size))
            if _duplicates_line(_with(column, target.row, value), columns, target.col):
                return False
        return True


def _with(line: List[Any], index: int, value: Any) -> List[Any]:
    candidate = list(line)
    candidate[index] = value
    return candidate


def _makes_run_of_three(line: List[Any], index: int, value: Any) -> bool:
    n = len(line)
    for start in range(index - 2, index + 1):
        if start < 0 or start + 2 >= n:
            continue
        window = [value if i == index else line[i] for i in range(start, start + 3)]
        if all(symbol == value for symbol in window):
            return True
    return False


def _duplicates_line(candidate: List[Any], lines, skip: int) -> bool:
    if UNASSIGNED in candidate:
        return False
    for i, other in enumerate(lines):
        if i != skip and UNASSIGNED not in other and list(other) == candidate:
            return True
    return False


class ZipRules:
    """A single step of the path from its head to a neighbouring cell.

    ``target`` is the ``(head, cell)`` pair and ``value`` the next checkpoint
    number the path must reach (None once every checkpoint is behind it).
    """

    def is_admissible(
        self,
        board: Board,
        target: Tuple[Coord, Coord],
        value: Optional[int],
        puzzle: ZipPuzzle,
    ) -> bool:
        head, cell = target
        if not board.in_bounds(cell) or board[cell] is not UNASSIGNED:
            return False
        if puzzle.is_walled(head, cell):
            return False
        number = puzzle.checkpoints.get(cell)
        if number is None:
            return True
        if number != value:
            return False
        # The last checkpoint has to close the path.
        if number == puzzle.last_number and board.depth + 1 < board.size * board.size:
            return False
        return True

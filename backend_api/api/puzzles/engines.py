from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol

from .constraints import QueensRules, TangoRules, ZipRules
from .formatters import format_queens, format_tango, format_zip
from .grid import MOON, QUEEN, SUN, Board, Coord
from .instances import QueensPuzzle, TangoPuzzle, ZipPuzzle
from .search import SearchStats, run_search
from .validators import validate_queens, validate_tango, validate_zip

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
@dataclass
class SolveResult:
    """Outcome of a solve: ``solution`` is already in the wire format.

    ``solved`` is False when the search space was exhausted; that is a normal
    outcome, not an error.
    """

    solved: bool
    solution: Optional[Any] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


class Engine(Protocol):
    """Protocol for puzzle engines."""

    name: str

    # PUBLIC_INTERFACE
    def build(self, data: Mapping[str, Any]) -> Any:
        """Turn a validated request payload into a puzzle instance."""

    # PUBLIC_INTERFACE
    def solve(self, puzzle: Any) -> SolveResult:
        """Return the first solution under the engine's fixed search order."""

    # PUBLIC_INTERFACE
    def verify(self, puzzle: Any, solution: Any) -> List[str]:
        """Return rule violations of ``solution`` (empty when it is valid)."""


def _result(name: str, solution: Optional[Any], stats: Optional[SearchStats] = None) -> SolveResult:
    metadata: Dict[str, Any] = {"engine": name}
    if stats is not None:
        metadata.update(stats.as_dict())
    logger.info("%s solve finished: solved=%s %s", name, solution is not None, metadata)
    return SolveResult(solved=solution is not None, solution=solution, metadata=metadata)


# ---------------------------------------------------------------- Queens


@dataclass
class QueensState:
    board: Board
    queens: List[Coord] = field(default_factory=list)


@dataclass
class QueensSearch:
    """Column by column, trying rows top to bottom."""

    puzzle: QueensPuzzle
    rules: QueensRules

    def next_decision(self, state: QueensState) -> Optional[int]:
        col = len(state.queens)
        return col if col < self.puzzle.size else None

    def candidates(self, state: QueensState, col: int) -> Iterable[Coord]:
        return (Coord(row, col) for row in range(self.puzzle.size))

    def is_admissible(self, state: QueensState, col: int, cell: Coord) -> bool:
        return self.rules.is_admissible(state.board, cell, QUEEN, self.puzzle)

    def commit(self, state: QueensState, col: int, cell: Coord) -> None:
        state.board.assign(cell, QUEEN)
        state.queens.append(cell)

    def rollback(self, state: QueensState, col: int, cell: Coord) -> None:
        state.board.unassign()
        state.queens.pop()

    def accept(self, state: QueensState) -> bool:
        # Column-local checks cannot see a region that was never used.
        used = {self.puzzle.regions[q] for q in state.queens}
        return len(used) == self.puzzle.size and len(self.puzzle.region_cells) == self.puzzle.size


@dataclass
class QueensEngine:
    """One queen per row, column and colour region, no two touching."""

    rules: QueensRules = field(default_factory=QueensRules)
    name: str = "queens"

    # PUBLIC_INTERFACE
    def build(self, data: Mapping[str, Any]) -> QueensPuzzle:
        return QueensPuzzle.from_payload(data)

    # PUBLIC_INTERFACE
    def solve(self, puzzle: QueensPuzzle) -> SolveResult:
        """Place the queens; the solution lists ``[row, col]`` by increasing row."""
        if puzzle.size == 1:
            cell = Coord(0, 0)
            return _result(self.name, format_queens([cell]) if cell in puzzle.regions else None)

        state = QueensState(board=Board.create(puzzle.size))
        found, stats = run_search(QueensSearch(puzzle, self.rules), state, self.name)
        return _result(self.name, format_queens(state.queens) if found else None, stats)

    # PUBLIC_INTERFACE
    def verify(self, puzzle: QueensPuzzle, solution: Any) -> List[str]:
        return validate_queens(puzzle, solution)


# ---------------------------------------------------------------- Tango


@dataclass
class TangoSearch:
    """First empty cell in row-major order, sun before moon."""

    puzzle: TangoPuzzle
    rules: TangoRules

    def next_decision(self, board: Board) -> Optional[Coord]:
        return board.first_unassigned()

    def candidates(self, board: Board, cell: Coord) -> Iterable[int]:
        return (SUN, MOON)

    def is_admissible(self, board: Board, cell: Coord, value: int) -> bool:
        return self.rules.is_admissible(board, cell, value, self.puzzle)

    def commit(self, board: Board, cell: Coord, value: int) -> None:
        board.assign(cell, value)

    def rollback(self, board: Board, cell: Coord, value: int) -> None:
        board.unassign()

    def accept(self, board: Board) -> bool:
        return True


@dataclass
class TangoEngine:
    """Sun/moon balance puzzle with ``=`` and ``x`` edge markers."""

    rules: TangoRules = field(default_factory=TangoRules)
    name: str = "tango"

    # PUBLIC_INTERFACE
    def build(self, data: Mapping[str, Any]) -> TangoPuzzle:
        return TangoPuzzle.from_payload(data)

    # PUBLIC_INTERFACE
    def solve(self, puzzle: TangoPuzzle) -> SolveResult:
        """Complete the grid; givens that already break a rule mean no solution."""
        board = Board.create(puzzle.size)
        for cell, value in sorted(puzzle.givens.items()):
            if not self.rules.is_admissible(board, cell, value, puzzle):
                logger.info("tango givens are inconsistent at %s", tuple(cell))
                return _result(self.name, None)
            board.assign(cell, value)

        found, stats = run_search(TangoSearch(puzzle, self.rules), board, self.name)
        return _result(self.name, format_tango(board) if found else None, stats)

    # PUBLIC_INTERFACE
    def verify(self, puzzle: TangoPuzzle, solution: Any) -> List[str]:
        return validate_tango(puzzle, solution)


# ---------------------------------------------------------------- Zip


@dataclass
class ZipState:
    board: Board
    path: List[Coord] = field(default_factory=list)
    # index into puzzle.order of the next checkpoint to reach
    next_checkpoint: int = 0


@dataclass
class ZipSearch:
    """Grow the path from its head: up, right, down, left."""

    puzzle: ZipPuzzle
    rules: ZipRules

    def _cells(self) -> int:
        return self.puzzle.size * self.puzzle.size

    def start(self, state: ZipState) -> None:
        self.commit(state, None, self.puzzle.start)

    def next_decision(self, state: ZipState) -> Optional[Coord]:
        if len(state.path) == self._cells():
            return None
        return state.path[-1]

    def candidates(self, state: ZipState, head: Coord) -> Iterable[Coord]:
        return head.orthogonal_neighbours()

    def is_admissible(self, state: ZipState, head: Coord, cell: Coord) -> bool:
        order = self.puzzle.order
        expected = order[state.next_checkpoint] if state.next_checkpoint < len(order) else None
        return self.rules.is_admissible(state.board, (head, cell), expected, self.puzzle)

    def commit(self, state: ZipState, head: Optional[Coord], cell: Coord) -> None:
        state.board.assign(cell, len(state.path))
        state.path.append(cell)
        if cell in self.puzzle.checkpoints:
            state.next_checkpoint += 1

    def rollback(self, state: ZipState, head: Coord, cell: Coord) -> None:
        state.board.unassign()
        state.path.pop()
        if cell in self.puzzle.checkpoints:
            state.next_checkpoint -= 1

    def accept(self, state: ZipState) -> bool:
        return (
            len(state.path) == self._cells()
            and state.path[-1] == self.puzzle.finish
            and state.next_checkpoint == len(self.puzzle.order)
        )


@dataclass
class ZipEngine:
    """Hamiltonian path through numbered checkpoints, walls block moves."""

    rules: ZipRules = field(default_factory=ZipRules)
    name: str = "zip"

    # PUBLIC_INTERFACE
    def build(self, data: Mapping[str, Any]) -> ZipPuzzle:
        return ZipPuzzle.from_payload(data)

    # PUBLIC_INTERFACE
    def solve(self, puzzle: ZipPuzzle) -> SolveResult:
        """Find the path; it starts on the lowest and ends on the highest number."""
        if puzzle.size == 1:
            return _result(self.name, format_zip([puzzle.start]))
        if len(puzzle.order) == 1:
            # The path cannot start and end on the same cell.
            return _result(self.name, None)

        search = ZipSearch(puzzle, self.rules)
        state = ZipState(board=Board.create(puzzle.size))
        search.start(state)
        found, stats = run_search(search, state, self.name)
        return _result(self.name, format_zip(state.path) if found else None, stats)

    # PUBLIC_INTERFACE
    def verify(self, puzzle: ZipPuzzle, solution: Any) -> List[str]:
        return validate_zip(puzzle, solution)

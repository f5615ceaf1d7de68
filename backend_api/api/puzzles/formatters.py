from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .grid import Board, Coord

NO_SOLUTION: Dict[str, Dict[str, Any]] = {
    "queens": {"solution": [], "error": "No solution exists"},
    "tango": {"solution": None, "error": "No solution exists"},
    "zip": {"path": None, "error": "No solution found."},
}


# PUBLIC_INTERFACE
def format_queens(markers: Iterable[Coord]) -> List[List[int]]:
    """Marker coordinates as ``[row, col]`` pairs in increasing row order.

    The search fills columns left to right, so its order is column-major.
    """
    return [[coord.row, coord.col] for coord in sorted(markers)]


# PUBLIC_INTERFACE
def format_tango(board: Board) -> List[List[int]]:
    """Completed board as a matrix of 1 (sun) / 0 (moon)."""
    return [[int(value) for value in row] for row in board.rows()]


# PUBLIC_INTERFACE
def format_zip(path: Iterable[Coord]) -> List[List[int]]:
    """Path cells as ``[row, col]`` pairs in traversal order."""
    return [[coord.row, coord.col] for coord in path]


# PUBLIC_INTERFACE
def format_response(puzzle_type: str, solution: Optional[Any]) -> Dict[str, Any]:
    """Wrap a formatted solution (or None) in the response body for ``puzzle_type``."""
    if solution is None:
        return dict(NO_SOLUTION[puzzle_type])
    key = "path" if puzzle_type == "zip" else "solution"
    return {key: solution}

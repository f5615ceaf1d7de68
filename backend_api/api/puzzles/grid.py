from __future__ import annotations

from typing import Any, Iterator, List, NamedTuple, Optional, Tuple

# Cell states shared by all puzzle families.
UNASSIGNED = None

# Queens marker; cells without one stay unassigned
QUEEN = 1

# Tango symbols (same encoding as the browser overlay: 1 = sun, 0 = moon)
SUN = 1
MOON = 0
EMPTY_SENTINEL = -1

# Up, right, down, left
ORTHOGONAL_STEPS: Tuple[Tuple[int, int], ...] = ((-1, 0), (0, 1), (1, 0), (0, -1))
TOUCHING_STEPS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)


class OutOfRange(IndexError):
    """Raised when a coordinate falls outside the board."""

    def __init__(self, row: int, col: int, size: int):
        super().__init__(f"Cell ({row}, {col}) is outside a {size}x{size} grid.")
        self.row = row
        self.col = col
        self.size = size


# PUBLIC_INTERFACE
class Coord(NamedTuple):
    """Hashable (row, col) cell coordinate."""

    row: int
    col: int

    def offset(self, dr: int, dc: int) -> "Coord":
        return Coord(self.row + dr, self.col + dc)

    def orthogonal_neighbours(self) -> List["Coord"]:
        """Neighbours in search order: up, right, down, left."""
        return [self.offset(dr, dc) for dr, dc in ORTHOGONAL_STEPS]

    def touching_neighbours(self) -> List["Coord"]:
        return [self.offset(dr, dc) for dr, dc in TOUCHING_STEPS]

    def is_adjacent(self, other: "Coord") -> bool:
        return abs(self.row - other.row) + abs(self.col - other.col) == 1

    def in_bounds(self, size: int) -> bool:
        return 0 <= self.row < size and 0 <= self.col < size


# PUBLIC_INTERFACE
class Board:
    """Square board of cell states with a reversible assignment log.

    Search code mutates one board in place: ``assign`` records the change on
    an undo stack and ``unassign`` restores the most recent one, so branches
    never copy the grid.
    """

    def __init__(self, size: int, fill: Any = UNASSIGNED):
        if size < 1:
            raise ValueError("Board size must be a positive integer.")
        self.size = size
        self._cells: List[List[Any]] = [[fill] * size for _ in range(size)]
        self._undo: List[Coord] = []

    # PUBLIC_INTERFACE
    @classmethod
    def create(cls, size: int, fill: Any = UNASSIGNED) -> "Board":
        """Return a size x size board with every cell set to ``fill``."""
        return cls(size, fill)

    def _check(self, row: int, col: int) -> None:
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise OutOfRange(row, col, self.size)

    def in_bounds(self, coord: Coord) -> bool:
        return coord.in_bounds(self.size)

    def get(self, row: int, col: int) -> Any:
        self._check(row, col)
        return self._cells[row][col]

    def set(self, row: int, col: int, value: Any) -> None:
        self._check(row, col)
        self._cells[row][col] = value

    def __getitem__(self, coord: Coord) -> Any:
        return self.get(coord[0], coord[1])

    # PUBLIC_INTERFACE
    def assign(self, coord: Coord, value: Any) -> None:
        """Fill an unassigned cell and remember it for ``unassign``."""
        row, col = coord
        if self.get(row, col) is not UNASSIGNED:
            raise ValueError(f"Cell {tuple(coord)} is already assigned.")
        self._cells[row][col] = value
        self._undo.append(Coord(row, col))

    # PUBLIC_INTERFACE
    def unassign(self) -> Optional[Coord]:
        """Undo the most recent ``assign``; returns the restored cell."""
        if not self._undo:
            return None
        coord = self._undo.pop()
        self._cells[coord.row][coord.col] = UNASSIGNED
        return coord

    @property
    def depth(self) -> int:
        """Number of assignments that can still be undone."""
        return len(self._undo)

    def row(self, row: int) -> List[Any]:
        self._check(row, 0)
        return self._cells[row]

    def column(self, col: int) -> List[Any]:
        self._check(0, col)
        return [cells[col] for cells in self._cells]

    def rows(self) -> Iterator[List[Any]]:
        return iter(self._cells)

    def coords(self) -> Iterator[Coord]:
        """All cells in row-major order."""
        for r in range(self.size):
            for c in range(self.size):
                yield Coord(r, c)

    def first_unassigned(self) -> Optional[Coord]:
        for coord in self.coords():
            if self._cells[coord.row][coord.col] is UNASSIGNED:
                return coord
        return None

    def is_full(self) -> bool:
        return self.first_unassigned() is None

    def to_lists(self) -> List[List[Any]]:
        return [list(cells) for cells in self._cells]

    def __repr__(self) -> str:  # pragma: no cover
        return f"Board(size={self.size}, depth={self.depth})"

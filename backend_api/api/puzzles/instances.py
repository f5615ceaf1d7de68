from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Sequence, Tuple

from .grid import EMPTY_SENTINEL, MOON, SUN, Coord, OutOfRange

Wall = FrozenSet[Coord]


class PuzzleInputError(ValueError):
    """Raised for instances that fail shape checks (e.g. odd Tango size)."""


def _coord(raw: Sequence[int], size: int) -> Coord:
    """Build a bounds-checked Coord from a ``[row, col]`` pair."""
    row, col = int(raw[0]), int(raw[1])
    if not (0 <= row < size and 0 <= col < size):
        raise OutOfRange(row, col, size)
    return Coord(row, col)


# PUBLIC_INTERFACE
class Relation(str, Enum):
    """Tango edge marker between two neighbouring cells."""

    EQUAL = "equal"
    UNEQUAL = "unequal"

    @classmethod
    def parse(cls, token: str) -> "Relation":
        key = (token or "").strip().lower()
        if key in ("=", "equal", "equals", "same"):
            return cls.EQUAL
        if key in ("x", "×", "unequal", "opposite", "different"):
            return cls.UNEQUAL
        raise PuzzleInputError(f"Unknown constraint type: {token!r}")

    def holds(self, a: int, b: int) -> bool:
        return (a == b) if self is Relation.EQUAL else (a != b)


# PUBLIC_INTERFACE
@dataclass
class QueensPuzzle:
    """Queens instance: every cell belongs to one of ``size`` colour regions."""

    size: int
    regions: Dict[Coord, str]
    region_cells: Dict[str, List[Coord]] = field(init=False)

    def __post_init__(self) -> None:
        self.region_cells = {}
        for coord, region in self.regions.items():
            self.region_cells.setdefault(region, []).append(coord)

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "QueensPuzzle":
        size = int(data["gridSize"])
        regions: Dict[Coord, str] = {}
        for region_id, cells in data["regions"].items():
            for raw in cells:
                regions[_coord(raw, size)] = str(region_id)
        return cls(size=size, regions=regions)


# PUBLIC_INTERFACE
@dataclass
class TangoPuzzle:
    """Tango instance: pre-filled symbols plus ``=``/``x`` edges."""

    size: int
    givens: Dict[Coord, int]
    edges: List[Tuple[Coord, Coord, Relation]]
    distinct_lines: bool = False
    edges_by_cell: Dict[Coord, List[Tuple[Coord, Relation]]] = field(init=False)

    def __post_init__(self) -> None:
        if self.size % 2:
            raise PuzzleInputError("Tango grid size must be even.")
        self.edges_by_cell = {}
        for a, b, relation in self.edges:
            self.edges_by_cell.setdefault(a, []).append((b, relation))
            self.edges_by_cell.setdefault(b, []).append((a, relation))

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "TangoPuzzle":
        size = int(data["gridSize"])
        grid = data.get("initialGrid") or []
        givens: Dict[Coord, int] = {}
        for r, cells in enumerate(grid):
            for c, value in enumerate(cells):
                if value is None or value == EMPTY_SENTINEL:
                    continue
                if value not in (SUN, MOON):
                    raise PuzzleInputError(f"Invalid symbol {value!r} at ({r}, {c}).")
                givens[_coord((r, c), size)] = int(value)
        edges = [
            (_coord(edge["c1"], size), _coord(edge["c2"], size), Relation.parse(edge["type"]))
            for edge in data.get("constraints") or []
        ]
        return cls(
            size=size,
            givens=givens,
            edges=edges,
            distinct_lines=bool(data.get("distinctLines", False)),
        )


# PUBLIC_INTERFACE
@dataclass
class ZipPuzzle:
    """Zip instance: numbered checkpoints and walls between adjacent cells."""

    size: int
    checkpoints: Dict[Coord, int]
    walls: FrozenSet[Wall] = frozenset()
    order: List[int] = field(init=False)

    def __post_init__(self) -> None:
        if not self.checkpoints:
            raise PuzzleInputError("At least one numbered cell is required.")
        self.order = sorted(self.checkpoints.values())
        if len(set(self.order)) != len(self.order):
            raise PuzzleInputError("Checkpoint numbers must be distinct.")
        self._positions = {number: coord for coord, number in self.checkpoints.items()}

    @property
    def start(self) -> Coord:
        return self._positions[self.order[0]]

    @property
    def finish(self) -> Coord:
        return self._positions[self.order[-1]]

    @property
    def last_number(self) -> int:
        return self.order[-1]

    def is_walled(self, a: Coord, b: Coord) -> bool:
        return frozenset((a, b)) in self.walls

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "ZipPuzzle":
        size = int(data["gridSize"])
        checkpoints: Dict[Coord, int] = {}
        for number, raw in data["numbers"].items():
            coord = _coord(raw, size)
            if coord in checkpoints:
                raise PuzzleInputError(f"Cell {tuple(coord)} holds more than one number.")
            checkpoints[coord] = int(number)
        return cls(size=size, checkpoints=checkpoints, walls=_walls(data.get("walls") or [], size))


def _walls(pairs: Iterable[Sequence[Sequence[int]]], size: int) -> FrozenSet[Wall]:
    return frozenset(frozenset((_coord(a, size), _coord(b, size))) for a, b in pairs)

"""Whole-solution checks used by the diagnostics endpoint.

Each checker returns a list of human readable violations; an empty list means
the candidate solves the puzzle.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, List, Sequence

from .grid import MOON, SUN, Coord
from .instances import QueensPuzzle, TangoPuzzle, ZipPuzzle


def _as_coords(raw: Any) -> List[Coord]:
    return [Coord(int(cell[0]), int(cell[1])) for cell in raw or []]


# PUBLIC_INTERFACE
def validate_queens(puzzle: QueensPuzzle, solution: Any) -> List[str]:
    """Check one queen per row, column and region with no two queens touching."""
    n = puzzle.size
    try:
        queens = _as_coords(solution)
    except (TypeError, ValueError, IndexError):
        return ["Solution must be a list of [row, col] pairs."]

    violations: List[str] = []
    if len(queens) != n:
        violations.append(f"Expected {n} queens, got {len(queens)}.")
    outside = [q for q in queens if not q.in_bounds(n)]
    for q in outside:
        violations.append(f"Queen {tuple(q)} is outside the grid.")
    queens = [q for q in queens if q.in_bounds(n)]

    for label, counts in (
        ("row", Counter(q.row for q in queens)),
        ("column", Counter(q.col for q in queens)),
        ("region", Counter(puzzle.regions.get(q) for q in queens)),
    ):
        for key, count in sorted(counts.items(), key=lambda item: str(item[0])):
            if count > 1:
                violations.append(f"{label.capitalize()} {key} holds {count} queens.")
    missing_regions = set(puzzle.region_cells) - {puzzle.regions.get(q) for q in queens}
    for region in sorted(missing_regions):
        violations.append(f"Region {region} holds no queen.")

    placed = set(queens)
    for q in sorted(placed):
        for other in q.touching_neighbours():
            if other in placed and other > q:
                violations.append(f"Queens {tuple(q)} and {tuple(other)} touch.")
    return violations


# PUBLIC_INTERFACE
def validate_tango(puzzle: TangoPuzzle, solution: Any) -> List[str]:
    """Check balance, runs, givens and edge markers of a filled Tango grid."""
    n = puzzle.size
    if (
        not isinstance(solution, Sequence)
        or len(solution) != n
        or any(not isinstance(row, Sequence) or len(row) != n for row in solution)
    ):
        return [f"Solution must be a {n}x{n} matrix."]

    violations: List[str] = []
    for r, row in enumerate(solution):
        for c, value in enumerate(row):
            if value not in (SUN, MOON):
                violations.append(f"Cell ({r}, {c}) holds {value!r}, expected 0 or 1.")
    if violations:
        return violations

    columns = [[solution[r][c] for r in range(n)] for c in range(n)]
    for label, lines in (("Row", solution), ("Column", columns)):
        for i, line in enumerate(lines):
            if line.count(SUN) != n // 2:
                violations.append(f"{label} {i} is not balanced.")
            for start in range(n - 2):
                if line[start] == line[start + 1] == line[start + 2]:
                    violations.append(f"{label} {i} has three in a row at {start}.")
                    break
        if puzzle.distinct_lines:
            seen = {}
            for i, line in enumerate(lines):
                key = tuple(line)
                if key in seen:
                    violations.append(f"{label}s {seen[key]} and {i} are identical.")
                seen.setdefault(key, i)

    for coord, value in sorted(puzzle.givens.items()):
        if solution[coord.row][coord.col] != value:
            violations.append(f"Given cell {tuple(coord)} was changed.")
    for a, b, relation in puzzle.edges:
        if not relation.holds(solution[a.row][a.col], solution[b.row][b.col]):
            violations.append(f"Cells {tuple(a)} and {tuple(b)} break the {relation.value} marker.")
    return violations


# PUBLIC_INTERFACE
def validate_zip(puzzle: ZipPuzzle, solution: Any) -> List[str]:
    """Check that a path covers the grid, respects walls and visits checkpoints in order."""
    n = puzzle.size
    try:
        path = _as_coords(solution)
    except (TypeError, ValueError, IndexError):
        return ["Path must be a list of [row, col] pairs."]

    violations: List[str] = []
    if len(path) != n * n:
        violations.append(f"Path covers {len(path)} cells, expected {n * n}.")
    if len(set(path)) != len(path):
        violations.append("Path visits a cell more than once.")
    for cell in path:
        if not cell.in_bounds(n):
            violations.append(f"Cell {tuple(cell)} is outside the grid.")
    for a, b in zip(path, path[1:]):
        if not a.is_adjacent(b):
            violations.append(f"Cells {tuple(a)} and {tuple(b)} are not adjacent.")
        elif puzzle.is_walled(a, b):
            violations.append(f"Path crosses the wall between {tuple(a)} and {tuple(b)}.")

    visited = [puzzle.checkpoints[cell] for cell in path if cell in puzzle.checkpoints]
    if visited != puzzle.order:
        violations.append(f"Checkpoints visited as {visited}, expected {puzzle.order}.")
    if path and path[0] != puzzle.start:
        violations.append(f"Path must start on checkpoint {puzzle.order[0]}.")
    if path and path[-1] != puzzle.finish:
        violations.append(f"Path must end on checkpoint {puzzle.last_number}.")
    return violations

"""
Puzzle solvers.

Exports:
- EngineRegistry and get_engine for resolving puzzle engines
- QueensEngine, TangoEngine and ZipEngine engine classes
- Board and Coord grid primitives
- PuzzleInputError and OutOfRange failure types

These modules are framework-agnostic and can be reused by views, management
commands or services without importing request objects.
"""

from .engines import QueensEngine, SolveResult, TangoEngine, ZipEngine
from .grid import Board, Coord, OutOfRange
from .instances import PuzzleInputError
from .registry import EngineRegistry, get_engine

__all__ = [
    "QueensEngine",
    "TangoEngine",
    "ZipEngine",
    "SolveResult",
    "EngineRegistry",
    "get_engine",
    "Board",
    "Coord",
    "OutOfRange",
    "PuzzleInputError",
]

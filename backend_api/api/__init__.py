"""
API package initializer.

Re-exports puzzle engines and registry helpers so callers can import from api
directly, e.g.:

    from api import get_engine, PuzzleInputError
"""

# PUBLIC_INTERFACE
from .puzzles import (
    QueensEngine,
    TangoEngine,
    ZipEngine,
    SolveResult,
    EngineRegistry,
    get_engine,
    PuzzleInputError,
)

__all__ = [
    "QueensEngine",
    "TangoEngine",
    "ZipEngine",
    "SolveResult",
    "EngineRegistry",
    "get_engine",
    "PuzzleInputError",
]

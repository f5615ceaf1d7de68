from __future__ import annotations

from typing import Dict, List, Type

from .engines import QueensEngine, TangoEngine, ZipEngine


# PUBLIC_INTERFACE
class EngineRegistry:
    """Registry mapping puzzle type identifiers to engine classes."""

    _registry: Dict[str, Type] = {
        "queens": QueensEngine,
        "tango": TangoEngine,
        "zip": ZipEngine,
    }

    @classmethod
    def get(cls, puzzle_type: str):
        """Return an engine class for a given puzzle type, or raise KeyError."""
        key = (puzzle_type or "").strip().lower()
        if key not in cls._registry:
            raise KeyError(f"Unknown puzzle type: {puzzle_type!r}")
        return cls._registry[key]

    @classmethod
    def register(cls, puzzle_type: str, engine_cls) -> None:
        """Register or override an engine class for a given puzzle type."""
        key = (puzzle_type or "").strip().lower()
        if not key:
            raise ValueError("puzzle_type must be a non-empty string")
        cls._registry[key] = engine_cls

    @classmethod
    def types(cls) -> List[str]:
        return list(cls._registry)


# PUBLIC_INTERFACE
def get_engine(puzzle_type: str):
    """Convenience function returning the engine class for the given puzzle_type.

    Example:
        engine = get_engine("queens")()
        result = engine.solve(engine.build({"gridSize": 1, "regions": {"a": [[0, 0]]}}))
    """
    engine_cls = EngineRegistry.get(puzzle_type)
    return engine_cls

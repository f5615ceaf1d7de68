from __future__ import annotations

from typing import Any, Dict

from django.conf import settings
from rest_framework import serializers

from .puzzles import EngineRegistry, PuzzleInputError
from .puzzles.instances import Relation


def _coordinate(**kwargs) -> serializers.ListField:
    """A ``[row, col]`` pair. Bounds are checked against the grid by the solver."""
    return serializers.ListField(child=serializers.IntegerField(), min_length=2, max_length=2, **kwargs)


def _max_grid_size() -> int:
    return int(settings.PUZZLE_SOLVER.get("MAX_GRID_SIZE", 12))


class GridSizeMixin(serializers.Serializer):
    """Shared ``gridSize`` field capped by settings.PUZZLE_SOLVER['MAX_GRID_SIZE']."""

    gridSize = serializers.IntegerField(min_value=1, help_text="Number of rows (and columns).")

    def validate_gridSize(self, value: int) -> int:
        limit = _max_grid_size()
        if value > limit:
            raise serializers.ValidationError(f"Grid size must be at most {limit}.")
        return value


# PUBLIC_INTERFACE
class QueensSolveRequestSerializer(GridSizeMixin):
    """Request payload for the Queens solver.

    Fields:
    - gridSize: grid dimension n
    - regions: region id -> list of [row, col] cells; n regions covering all cells
    """

    regions = serializers.DictField(
        child=serializers.ListField(child=_coordinate(), allow_empty=False),
        allow_empty=False,
        help_text="Region id mapped to its cells.",
    )


# PUBLIC_INTERFACE
class QueensSolveResponseSerializer(serializers.Serializer):
    """Queen positions ordered by row; empty with ``error`` when unsolvable."""

    solution = serializers.ListField(child=_coordinate())
    error = serializers.CharField(required=False)


class TangoConstraintSerializer(serializers.Serializer):
    """An ``=`` or ``x`` marker between two neighbouring cells."""

    c1 = _coordinate()
    c2 = _coordinate()
    type = serializers.CharField(help_text="'=' (same symbol) or 'x' (opposite symbols).")

    def validate_type(self, value: str) -> str:
        try:
            return Relation.parse(value).value
        except PuzzleInputError as e:
            raise serializers.ValidationError(str(e))


# PUBLIC_INTERFACE
class TangoSolveRequestSerializer(GridSizeMixin):
    """Request payload for the Tango solver.

    Fields:
    - gridSize: even grid dimension n
    - initialGrid: n x n matrix, 1 = sun, 0 = moon, -1 = empty
    - constraints: list of {c1, c2, type} edge markers (may be empty)
    - distinctLines (optional, default false): also require unique rows/columns
    """

    initialGrid = serializers.ListField(
        child=serializers.ListField(child=serializers.IntegerField(min_value=-1, max_value=1)),
    )
    constraints = TangoConstraintSerializer(many=True, allow_empty=True)
    distinctLines = serializers.BooleanField(required=False, default=False)

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        size = attrs["gridSize"]
        if size % 2:
            raise serializers.ValidationError({"gridSize": "Tango grid size must be even."})
        grid = attrs["initialGrid"]
        if len(grid) != size or any(len(row) != size for row in grid):
            raise serializers.ValidationError({"initialGrid": f"Expected a {size}x{size} matrix."})
        return attrs


# PUBLIC_INTERFACE
class TangoSolveResponseSerializer(serializers.Serializer):
    """Completed grid; null with ``error`` when unsolvable."""

    solution = serializers.ListField(
        child=serializers.ListField(child=serializers.IntegerField()), allow_null=True
    )
    error = serializers.CharField(required=False)


# PUBLIC_INTERFACE
class ZipSolveRequestSerializer(GridSizeMixin):
    """Request payload for the Zip solver.

    Fields:
    - gridSize: grid dimension n
    - numbers: checkpoint number -> [row, col]
    - walls (optional): list of [[row, col], [row, col]] blocked edges
    """

    numbers = serializers.DictField(child=_coordinate(), allow_empty=False)
    walls = serializers.ListField(
        child=serializers.ListField(child=_coordinate(), min_length=2, max_length=2),
        required=False,
        default=list,
    )

    def validate_numbers(self, value: Dict[str, Any]) -> Dict[str, Any]:
        for key in value:
            try:
                number = int(key)
            except (TypeError, ValueError):
                raise serializers.ValidationError(f"Checkpoint {key!r} is not an integer.")
            if number < 1:
                raise serializers.ValidationError("Checkpoint numbers must be positive.")
        return value


# PUBLIC_INTERFACE
class ZipSolveResponseSerializer(serializers.Serializer):
    """Path in traversal order; null with ``error`` when unsolvable."""

    path = serializers.ListField(child=_coordinate(), allow_null=True)
    error = serializers.CharField(required=False)


REQUEST_SERIALIZERS = {
    "queens": QueensSolveRequestSerializer,
    "tango": TangoSolveRequestSerializer,
    "zip": ZipSolveRequestSerializer,
}

RESPONSE_SERIALIZERS = {
    "queens": QueensSolveResponseSerializer,
    "tango": TangoSolveResponseSerializer,
    "zip": ZipSolveResponseSerializer,
}


# PUBLIC_INTERFACE
class ValidateRequestSerializer(serializers.Serializer):
    """Request payload for checking a candidate solution.

    Fields:
    - puzzleType: queens | tango | zip
    - puzzle: the same body the matching solve endpoint accepts
    - solution: queen list, Tango matrix or Zip path
    """

    puzzleType = serializers.ChoiceField(choices=[(t, t) for t in EngineRegistry.types()])
    puzzle = serializers.DictField()
    solution = serializers.JSONField()

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        inner = REQUEST_SERIALIZERS[attrs["puzzleType"]](data=attrs["puzzle"])
        if not inner.is_valid():
            raise serializers.ValidationError({"puzzle": inner.errors})
        attrs["puzzle"] = inner.validated_data
        return attrs


# PUBLIC_INTERFACE
class ValidateResponseSerializer(serializers.Serializer):
    """Verdict for a candidate solution."""

    valid = serializers.BooleanField()
    violations = serializers.ListField(child=serializers.CharField())

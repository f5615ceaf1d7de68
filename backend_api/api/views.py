from __future__ import annotations

import logging
from typing import Any, Dict

from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework import status, permissions
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi

from .serializers import (
    QueensSolveRequestSerializer,
    QueensSolveResponseSerializer,
    TangoSolveRequestSerializer,
    TangoSolveResponseSerializer,
    ZipSolveRequestSerializer,
    ZipSolveResponseSerializer,
    ValidateRequestSerializer,
    ValidateResponseSerializer,
    REQUEST_SERIALIZERS,
    RESPONSE_SERIALIZERS,
)
from api.puzzles import EngineRegistry, PuzzleInputError, get_engine
from api.puzzles.formatters import format_response

logger = logging.getLogger(__name__)

INTERNAL_ERROR = {"error": "An internal server error occurred."}


def _internal_error(puzzle_type: str) -> Response:
    """Log the active exception and return a generic 500 without details."""
    logger.exception("Unexpected failure in %s solver", puzzle_type)
    return Response(INTERNAL_ERROR, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


def solve_payload(puzzle_type: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """Build, solve and format one already-validated request payload.

    Raises PuzzleInputError for instances that pass field validation but are
    still not solvable as given (e.g. duplicate checkpoint cells).
    """
    engine = get_engine(puzzle_type)()
    puzzle = engine.build(data)
    result = engine.solve(puzzle)
    return format_response(puzzle_type, result.solution)


def _solve(request, puzzle_type: str) -> Response:
    serializer = REQUEST_SERIALIZERS[puzzle_type](data=request.data or {})
    serializer.is_valid(raise_exception=True)

    try:
        resp = solve_payload(puzzle_type, serializer.validated_data)
    except PuzzleInputError as e:
        return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except Exception:
        return _internal_error(puzzle_type)

    return Response(RESPONSE_SERIALIZERS[puzzle_type](resp).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def health(request):
    """Health check endpoint for the API.

    Returns:
    - 200 OK with {"message": "Server is up!"}
    """
    return Response({"message": "Server is up!"})


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="solve_queens",
    operation_summary="Solve a Queens puzzle",
    operation_description="""
Place one queen in every row, column and colour region so that no two queens
touch, diagonals included.

Request body:
- gridSize (int, required)
- regions (object, required): region id -> list of [row, col] cells

Response:
- solution: list of [row, col] ordered by row
- error: present (with an empty solution) when no placement exists
""",
    request_body=QueensSolveRequestSerializer,
    responses={200: QueensSolveResponseSerializer},
    tags=["solvers"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def solve_queens(request):
    """Solve a Queens region puzzle."""
    return _solve(request, "queens")


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="solve_tango",
    operation_summary="Solve a Tango puzzle",
    operation_description="""
Fill the grid with suns (1) and moons (0): every row and column balanced, no
three identical symbols in a row, and every '=' / 'x' marker respected.

Request body:
- gridSize (even int, required)
- initialGrid (matrix, required): -1 for empty cells
- constraints (list, required): {c1: [r, c], c2: [r, c], type: '=' | 'x'}
- distinctLines (bool, optional): also forbid identical rows/columns

Response:
- solution: the completed grid, or null with error when unsolvable
""",
    request_body=TangoSolveRequestSerializer,
    responses={200: TangoSolveResponseSerializer},
    tags=["solvers"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def solve_tango(request):
    """Solve a Tango balance puzzle."""
    return _solve(request, "tango")


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="solve_zip",
    operation_summary="Solve a Zip puzzle",
    operation_description="""
Find a path through every cell that visits the numbered cells in increasing
order, starts on the lowest number, ends on the highest and never crosses a
wall.

Request body:
- gridSize (int, required)
- numbers (object, required): number -> [row, col]
- walls (list, optional): [[r1, c1], [r2, c2]] pairs of blocked neighbours

Response:
- path: list of [row, col] in traversal order, or null with error
""",
    request_body=ZipSolveRequestSerializer,
    responses={200: ZipSolveResponseSerializer},
    tags=["solvers"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def solve_zip(request):
    """Solve a Zip path puzzle."""
    return _solve(request, "zip")


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="diagnostics_validate",
    operation_summary="Check a candidate solution",
    operation_description="""
Check a solution against the rules of its puzzle without searching.

Request body:
- puzzleType: queens | tango | zip
- puzzle: the body accepted by the matching solve endpoint
- solution: queen list, Tango grid or Zip path

Response:
- valid (bool) and the list of rule violations
""",
    request_body=ValidateRequestSerializer,
    responses={200: ValidateResponseSerializer},
    tags=["diagnostics"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def diagnostics_validate(request):
    """Report every rule a candidate solution breaks."""
    serializer = ValidateRequestSerializer(data=request.data or {})
    serializer.is_valid(raise_exception=True)
    vd = serializer.validated_data
    puzzle_type = vd["puzzleType"]

    engine = get_engine(puzzle_type)()
    try:
        puzzle = engine.build(vd["puzzle"])
        violations = engine.verify(puzzle, vd["solution"])
    except PuzzleInputError as e:
        return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except Exception:
        return _internal_error(puzzle_type)

    resp = {"valid": not violations, "violations": violations}
    return Response(ValidateResponseSerializer(resp).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="get_puzzle_types",
    operation_summary="List available puzzle types",
    operation_description="Returns supported puzzle types.",
    tags=["meta"],
    responses={200: openapi.Response("OK", schema=openapi.Schema(type=openapi.TYPE_ARRAY, items=openapi.Items(type=openapi.TYPE_STRING)))},
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def get_puzzle_types(request):
    """List available puzzle engine types."""
    return Response(EngineRegistry.types(), status=status.HTTP_200_OK)

from django.urls import path
from .views import (
    health,
    solve_queens,
    solve_tango,
    solve_zip,
    get_puzzle_types,
    diagnostics_validate,
)

urlpatterns = [
    path('health/', health, name='Health'),
    path('queens/solve', solve_queens, name='queens-solve'),
    path('tango/solve', solve_tango, name='tango-solve'),
    path('zip/solve', solve_zip, name='zip-solve'),
    path('puzzle-types', get_puzzle_types, name='get-puzzle-types'),
    path('diagnostics/validate', diagnostics_validate, name='diagnostics-validate'),
]

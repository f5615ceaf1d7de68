import json
import os
import tempfile
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import override_settings
from django.urls import reverse
from rest_framework.test import APITestCase

from api.tests_queens import CONTRADICTORY, FOUR_BY_FOUR
from api.tests_tango import UNIQUE_FOUR, UNIQUE_FOUR_SOLUTION
from api.tests_zip import CORNER_TO_CORNER, CORNER_TO_CORNER_PATH


class MetaEndpointTests(APITestCase):
    def test_health(self):
        resp = self.client.get(reverse('Health'))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"message": "Server is up!"})

    def test_puzzle_types(self):
        resp = self.client.get(reverse('get-puzzle-types'))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), ["queens", "tango", "zip"])


class QueensEndpointTests(APITestCase):
    def test_solve(self):
        resp = self.client.post(reverse('queens-solve'), FOUR_BY_FOUR, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"solution": [[0, 2], [1, 0], [2, 3], [3, 1]]})

    def test_no_solution(self):
        resp = self.client.post(reverse('queens-solve'), CONTRADICTORY, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"solution": [], "error": "No solution exists"})

    def test_missing_regions(self):
        resp = self.client.post(reverse('queens-solve'), {"gridSize": 4}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("regions", resp.json())

    def test_method_not_allowed(self):
        resp = self.client.get(reverse('queens-solve'))
        self.assertEqual(resp.status_code, 405)

    def test_out_of_range_cell_is_internal_error(self):
        payload = {"gridSize": 2, "regions": {"a": [[0, 0], [5, 5]], "b": [[1, 1]]}}
        with self.assertLogs("api.views", level="ERROR"):
            resp = self.client.post(reverse('queens-solve'), payload, format="json")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "An internal server error occurred."})

    def test_identical_requests_give_identical_bytes(self):
        first = self.client.post(reverse('queens-solve'), FOUR_BY_FOUR, format="json")
        second = self.client.post(reverse('queens-solve'), FOUR_BY_FOUR, format="json")
        self.assertEqual(first.content, second.content)


class TangoEndpointTests(APITestCase):
    def test_solve(self):
        resp = self.client.post(reverse('tango-solve'), UNIQUE_FOUR, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"solution": UNIQUE_FOUR_SOLUTION})

    def test_odd_size(self):
        payload = {"gridSize": 3, "initialGrid": [[-1] * 3] * 3, "constraints": []}
        resp = self.client.post(reverse('tango-solve'), payload, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("gridSize", resp.json())

    def test_missing_constraints(self):
        payload = {"gridSize": 4, "initialGrid": [[-1] * 4] * 4}
        resp = self.client.post(reverse('tango-solve'), payload, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("constraints", resp.json())

    def test_unknown_marker(self):
        payload = dict(UNIQUE_FOUR, constraints=[{"c1": [0, 0], "c2": [0, 1], "type": "?"}])
        resp = self.client.post(reverse('tango-solve'), payload, format="json")
        self.assertEqual(resp.status_code, 400)

    def test_contradictory_edges(self):
        payload = {
            "gridSize": 4,
            "initialGrid": [[-1] * 4] * 4,
            "constraints": [
                {"c1": [0, 0], "c2": [0, 1], "type": "="},
                {"c1": [0, 0], "c2": [0, 1], "type": "x"},
            ],
        }
        resp = self.client.post(reverse('tango-solve'), payload, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"solution": None, "error": "No solution exists"})


class ZipEndpointTests(APITestCase):
    def test_solve(self):
        resp = self.client.post(reverse('zip-solve'), CORNER_TO_CORNER, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"path": CORNER_TO_CORNER_PATH})

    def test_no_solution(self):
        payload = {"gridSize": 2, "numbers": {"1": [0, 0], "2": [1, 1]}}
        resp = self.client.post(reverse('zip-solve'), payload, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"path": None, "error": "No solution found."})

    def test_missing_numbers(self):
        resp = self.client.post(reverse('zip-solve'), {"gridSize": 3}, format="json")
        self.assertEqual(resp.status_code, 400)

    def test_non_numeric_checkpoint(self):
        payload = {"gridSize": 3, "numbers": {"one": [0, 0]}}
        resp = self.client.post(reverse('zip-solve'), payload, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("numbers", resp.json())

    def test_duplicate_checkpoint_cell(self):
        payload = {"gridSize": 3, "numbers": {"1": [0, 0], "2": [0, 0]}}
        resp = self.client.post(reverse('zip-solve'), payload, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("error", resp.json())

    @override_settings(PUZZLE_SOLVER={"MAX_GRID_SIZE": 2})
    def test_grid_size_limit(self):
        resp = self.client.post(reverse('zip-solve'), CORNER_TO_CORNER, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("gridSize", resp.json())


class DiagnosticsValidateTests(APITestCase):
    def test_valid_solution(self):
        payload = {"puzzleType": "zip", "puzzle": CORNER_TO_CORNER, "solution": CORNER_TO_CORNER_PATH}
        resp = self.client.post(reverse('diagnostics-validate'), payload, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"valid": True, "violations": []})

    def test_invalid_solution(self):
        payload = {"puzzleType": "queens", "puzzle": FOUR_BY_FOUR, "solution": [[0, 0], [1, 2]]}
        resp = self.client.post(reverse('diagnostics-validate'), payload, format="json")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertFalse(data["valid"])
        self.assertIn("Expected 4 queens, got 2.", data["violations"])

    def test_invalid_puzzle(self):
        payload = {"puzzleType": "tango", "puzzle": {"gridSize": 5}, "solution": []}
        resp = self.client.post(reverse('diagnostics-validate'), payload, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("puzzle", resp.json())

    def test_unknown_type(self):
        payload = {"puzzleType": "sudoku", "puzzle": {}, "solution": []}
        resp = self.client.post(reverse('diagnostics-validate'), payload, format="json")
        self.assertEqual(resp.status_code, 400)


class SolvePuzzleCommandTests(APITestCase):
    def _write(self, payload):
        handle, path = tempfile.mkstemp(suffix=".json")
        with os.fdopen(handle, "w", encoding="utf-8") as f:
            json.dump(payload, f)
        self.addCleanup(os.remove, path)
        return path

    def test_solve(self):
        out = StringIO()
        call_command("solve_puzzle", "zip", self._write(CORNER_TO_CORNER), stdout=out)
        self.assertEqual(json.loads(out.getvalue()), {"path": CORNER_TO_CORNER_PATH})

    def test_verify(self):
        out = StringIO()
        payload = dict(UNIQUE_FOUR, solution=UNIQUE_FOUR_SOLUTION)
        call_command("solve_puzzle", "tango", self._write(payload), "--verify", stdout=out)
        self.assertEqual(json.loads(out.getvalue()), {"valid": True, "violations": []})

    def test_invalid_input(self):
        with self.assertRaises(CommandError):
            call_command("solve_puzzle", "queens", self._write({"gridSize": 4}), stdout=StringIO())

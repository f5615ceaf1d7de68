import json
import sys

from django.core.management.base import BaseCommand, CommandError

from api.puzzles import PuzzleInputError, get_engine
from api.serializers import REQUEST_SERIALIZERS
from api.views import solve_payload


class Command(BaseCommand):
    help = "Solve (or with --verify, check) a puzzle read from a JSON request body."

    def add_arguments(self, parser):
        parser.add_argument("puzzle_type", choices=sorted(REQUEST_SERIALIZERS))
        parser.add_argument("source", help="Path to a JSON file, or '-' for stdin.")
        parser.add_argument(
            "--verify",
            action="store_true",
            help="Check the solution stored under 'solution' instead of solving.",
        )

    def handle(self, *args, **options):
        # PUBLIC_INTERFACE
        puzzle_type = options["puzzle_type"]
        payload = self._load(options["source"])

        serializer = REQUEST_SERIALIZERS[puzzle_type](data=payload)
        if not serializer.is_valid():
            raise CommandError(f"Invalid {puzzle_type} puzzle: {json.dumps(serializer.errors)}")

        try:
            if options["verify"]:
                if "solution" not in payload:
                    raise CommandError("--verify needs a 'solution' entry in the input.")
                engine = get_engine(puzzle_type)()
                violations = engine.verify(engine.build(serializer.validated_data), payload["solution"])
                result = {"valid": not violations, "violations": violations}
            else:
                result = solve_payload(puzzle_type, serializer.validated_data)
        except PuzzleInputError as e:
            raise CommandError(str(e))

        self.stdout.write(json.dumps(result))
        if result.get("error") or result.get("valid") is False:
            self.stderr.write(self.style.WARNING(result.get("error") or "Solution is not valid."))

    def _load(self, source):
        try:
            if source == "-":
                return json.load(sys.stdin)
            with open(source, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CommandError(f"Could not read puzzle from {source}: {e}")

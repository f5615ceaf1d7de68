"""Generic depth-first backtracking over a mutable search state."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Protocol, Tuple, TypeVar

logger = logging.getLogger(__name__)

State = TypeVar("State")
Decision = Any
Choice = Any


@dataclass
class SearchStats:
    """Counters collected while searching."""

    nodes: int = 0
    rejected: int = 0
    backtracks: int = 0

    def as_dict(self) -> dict:
        return {"nodes": self.nodes, "rejected": self.rejected, "backtracks": self.backtracks}


class SearchProblem(Protocol[State]):
    """Hooks that specialise :func:`backtrack` for one puzzle family."""

    def next_decision(self, state: State) -> Optional[Decision]:
        """Next decision point, or None when nothing is left to decide."""

    def candidates(self, state: State, decision: Decision) -> Iterable[Choice]:
        """Choices for ``decision`` in the order they should be tried."""

    def is_admissible(self, state: State, decision: Decision, choice: Choice) -> bool:
        ...

    def commit(self, state: State, decision: Decision, choice: Choice) -> None:
        ...

    def rollback(self, state: State, decision: Decision, choice: Choice) -> None:
        ...

    def accept(self, state: State) -> bool:
        """Global completion check once every decision has been made."""


# PUBLIC_INTERFACE
def backtrack(problem: SearchProblem, state: Any, stats: Optional[SearchStats] = None) -> bool:
    """Search depth-first for the first accepted completion of ``state``.

    On success the state is left holding the solution and True is returned.
    On failure every committed choice has been rolled back and False is
    returned. Orderings come from the problem, so results are deterministic.
    """
    stats = stats if stats is not None else SearchStats()
    stats.nodes += 1

    decision = problem.next_decision(state)
    if decision is None:
        return problem.accept(state)

    for choice in problem.candidates(state, decision):
        if not problem.is_admissible(state, decision, choice):
            stats.rejected += 1
            continue
        problem.commit(state, decision, choice)
        if backtrack(problem, state, stats):
            return True
        problem.rollback(state, decision, choice)

    stats.backtracks += 1
    return False


# PUBLIC_INTERFACE
def run_search(problem: SearchProblem, state: Any, label: str = "") -> Tuple[bool, SearchStats]:
    """Run :func:`backtrack` and log the collected counters."""
    stats = SearchStats()
    found = backtrack(problem, state, stats)
    logger.debug(
        "search %s finished: found=%s nodes=%d rejected=%d backtracks=%d",
        label or type(problem).__name__,
        found,
        stats.nodes,
        stats.rejected,
        stats.backtracks,
    )
    return found, stats

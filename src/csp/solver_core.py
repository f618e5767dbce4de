"""Propagation plus backtracking search over SameHouse hypotheses."""

from dataclasses import dataclass
from typing import List, Optional

from .domains import DomainStore
from .errors import DomainContradiction, SearchExhausted, StalledPropagation
from .model import Constraint, PuzzleInput, PuzzleResult, SameHouse, describe
from .propagation import propagate
from src.utils.logging_utils import get_logger
from src.utils.trace import Tracer, get_tracer

logger = get_logger()


@dataclass
class _DepthLimit:
    max_depth: Optional[int]
    reached: bool = False


def solve(
    puzzle: PuzzleInput,
    *,
    max_depth: Optional[int] = None,
    tracer: Optional[Tracer] = None,
) -> PuzzleResult:
    """
    Solve an already validated puzzle.

    Raises DomainContradiction when the constraints contradict each other
    outright, StalledPropagation when they leave the puzzle underdetermined,
    and SearchExhausted when no hypothesis leads to a solution.
    """
    tracer = tracer or get_tracer()
    store = DomainStore.from_input(puzzle, tracer=tracer)
    limit = _DepthLimit(max_depth)
    solved = _solve(list(puzzle.constraints), store, depth=0, limit=limit)
    if solved is None:
        if limit.reached:
            raise SearchExhausted(
                f"Cannot solve the puzzle: search depth limit {max_depth} reached without a solution"
            )
        raise SearchExhausted("Cannot solve the puzzle: no assignment satisfies constraints")

    logger.info("Solved %d-house puzzle", solved.house_count)
    return PuzzleResult(houses=solved.materialize())


def _solve(
    constraints: List[Constraint],
    store: DomainStore,
    depth: int,
    limit: _DepthLimit,
) -> Optional[DomainStore]:
    """
    Propagate, then branch. Returns the solved store, or None when this
    subtree has no solution.
    """
    remaining = propagate(constraints, store, depth=depth)

    if store.is_solved():
        store.tracer.log_solution_found(depth)
        return store

    if not remaining:
        raise StalledPropagation("Unsatisfiable: stalled with no remaining constraints")

    branch_points = [c for c in remaining if isinstance(c, SameHouse)]
    if not branch_points:
        if depth == 0:
            raise StalledPropagation(
                "Unsatisfiable: stalled with no SameHouse constraint left to branch on "
                f"({len(remaining)} constraints remain)"
            )
        return None

    if limit.max_depth is not None and depth >= limit.max_depth:
        limit.reached = True
        logger.debug("Depth limit %d reached, abandoning subtree", limit.max_depth)
        return None

    return _search(remaining, branch_points, store, depth, limit)


def _search(
    remaining: List[Constraint],
    branch_points: List[SameHouse],
    store: DomainStore,
    depth: int,
    limit: _DepthLimit,
) -> Optional[DomainStore]:
    for constraint in branch_points:
        rest = list(remaining)
        rest.remove(constraint)
        label = describe(constraint)

        for candidate in store.candidate_houses(constraint.first, constraint.second):
            store.tracer.log_branch(label, candidate.position, depth)
            logger.debug("Depth %d: trying %s at house %d", depth, label, candidate.position)

            fork = store.fork()
            house = fork.house(candidate.position)
            try:
                fork.assign(constraint.first, house)
                fork.assign(constraint.second, house)
                result = _solve(rest, fork, depth + 1, limit)
            except DomainContradiction as exc:
                store.tracer.log_backtrack(label, candidate.position, depth, reason=str(exc))
                logger.debug("Depth %d: %s at house %d failed: %s", depth, label, candidate.position, exc)
                continue

            if result is not None:
                return result
            store.tracer.log_backtrack(label, candidate.position, depth, reason="No solution below")

    return None

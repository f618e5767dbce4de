"""Exceptions raised while validating and solving puzzles."""


class PuzzleError(Exception):
    """Base class for solver failures."""


class DomainContradiction(PuzzleError):
    """
    A candidate set would become empty, or two resolved attributes disagree
    with a constraint. The search treats it as "this branch is infeasible";
    anywhere else it ends the solve attempt.
    """


class StalledPropagation(PuzzleError):
    """Propagation stopped short of a solution and nothing is left to branch on."""


class SearchExhausted(PuzzleError):
    """Every branch of the search ended in a contradiction."""


class InvalidPuzzleInput(ValueError):
    """The puzzle record is malformed or inconsistent."""

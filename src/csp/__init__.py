"""Puzzle model, parsing, and the propagation + search solver for zebra puzzles."""

from .model import (
    Attribute,
    Constraint,
    House,
    NextTo,
    PositionIs,
    PuzzleInput,
    PuzzleResult,
    RightOf,
    SameHouse,
)
from .domains import DomainStore
from .errors import (
    DomainContradiction,
    InvalidPuzzleInput,
    PuzzleError,
    SearchExhausted,
    StalledPropagation,
)
from .solver_core import solve
from .parser import parse_puzzle
from .validator import validate_puzzle_input

__all__ = [
    "Attribute",
    "Constraint",
    "House",
    "NextTo",
    "PositionIs",
    "PuzzleInput",
    "PuzzleResult",
    "RightOf",
    "SameHouse",
    "DomainStore",
    "DomainContradiction",
    "InvalidPuzzleInput",
    "PuzzleError",
    "SearchExhausted",
    "StalledPropagation",
    "solve",
    "parse_puzzle",
    "validate_puzzle_input",
]

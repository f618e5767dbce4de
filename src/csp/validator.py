"""Input checks the solver relies on but never re-runs itself."""

from typing import Dict, List

from .errors import InvalidPuzzleInput
from .model import PositionIs, PuzzleInput, constraint_attributes
from src.utils.config import CATEGORY_KEYS


def validate_puzzle_input(puzzle: PuzzleInput) -> PuzzleInput:
    """Raise InvalidPuzzleInput on the first problem; return the puzzle unchanged otherwise."""
    _validate_houses_count(puzzle)
    _validate_attribute_lists(puzzle)
    _validate_constraint_attributes(puzzle)
    return puzzle


def _label(category: str) -> str:
    return CATEGORY_KEYS.get(category, category.lower())


def _validate_houses_count(puzzle: PuzzleInput) -> None:
    if puzzle.houses <= 1:
        raise InvalidPuzzleInput("Number of houses must be greater than 1")


def _validate_attribute_lists(puzzle: PuzzleInput) -> None:
    for category, values in puzzle.categories.items():
        if len(values) != puzzle.houses or len(set(values)) != puzzle.houses:
            raise InvalidPuzzleInput(
                f"Number of {_label(category)} must match number of houses"
            )


def _validate_constraint_attributes(puzzle: PuzzleInput) -> None:
    universes: Dict[str, List[str]] = puzzle.categories
    for constraint in puzzle.constraints:
        for attribute in constraint_attributes(constraint):
            if attribute.category not in universes:
                known = ", ".join(universes)
                raise InvalidPuzzleInput(
                    f"Unknown category '{attribute.category}' (expected one of: {known})"
                )
            values = universes[attribute.category]
            if attribute.value not in values:
                raise InvalidPuzzleInput(
                    f"{attribute.category} '{attribute.value}' is not in the list of "
                    f"{_label(attribute.category)}: {values}"
                )

        if isinstance(constraint, PositionIs) and not 1 <= constraint.position <= puzzle.houses:
            raise InvalidPuzzleInput(
                f"Position {constraint.position} is out of range (1..{puzzle.houses})"
            )

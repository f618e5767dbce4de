"""Puzzle parser: convert JSON puzzle records into PuzzleInput structures.

Supports the record layout

    {"colors": [...], "nationalities": [...], "drinks": [...], "smokes": [...],
     "pets": [...], "categories": {"Music": [...]},
     "constraints": [{"type": "SameHouse", "attribute1": {...}, ...}]}

where every attribute is written as {"type": "<Category>", "value": "<value>"}.
Unknown keys are ignored.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List

from .errors import InvalidPuzzleInput
from .model import (
    Attribute,
    Constraint,
    NextTo,
    PositionIs,
    PuzzleInput,
    RightOf,
    SameHouse,
)
from src.utils.config import CATEGORY_KEYS, EXTRA_CATEGORIES_KEY


def parse_puzzle(puzzle_json: Dict[str, Any]) -> PuzzleInput:
    if not isinstance(puzzle_json, dict):
        raise InvalidPuzzleInput(f"Puzzle must be a JSON object, got {type(puzzle_json).__name__}")

    categories = parse_categories(puzzle_json)

    raw_constraints = puzzle_json.get("constraints") or []
    if not isinstance(raw_constraints, list):
        raise InvalidPuzzleInput("'constraints' must be a list")
    constraints = [parse_constraint(raw) for raw in raw_constraints]

    return PuzzleInput(categories=categories, constraints=constraints)


def parse_categories(puzzle_json: Dict[str, Any]) -> Dict[str, List[str]]:
    """Collect category universes: well-known plural keys first, then extras."""
    categories: Dict[str, List[str]] = {}

    for category, key in CATEGORY_KEYS.items():
        if key in puzzle_json and puzzle_json[key] is not None:
            categories[category] = _parse_values(puzzle_json[key], key)

    extra = puzzle_json.get(EXTRA_CATEGORIES_KEY) or {}
    if not isinstance(extra, dict):
        raise InvalidPuzzleInput(f"'{EXTRA_CATEGORIES_KEY}' must map category names to value lists")
    for category, values in extra.items():
        name = str(category).strip()
        if not name:
            raise InvalidPuzzleInput("Category names must not be empty")
        categories[name] = _parse_values(values, name)

    return categories


def parse_attribute(raw: Any) -> Attribute:
    if not isinstance(raw, dict):
        raise InvalidPuzzleInput(f"Attribute must be an object with 'type' and 'value', got {raw!r}")
    category = raw.get("type")
    value = raw.get("value")
    if not isinstance(category, str) or not category.strip() or value is None:
        raise InvalidPuzzleInput(f"Attribute needs a string 'type' and a 'value': {raw!r}")
    if isinstance(value, (dict, list)):
        raise InvalidPuzzleInput(f"Attribute value must be a scalar: {raw!r}")
    return Attribute(category=category.strip(), value=str(value).strip())


def _parse_same_house(raw: Dict[str, Any]) -> Constraint:
    return SameHouse(_field(raw, "attribute1"), _field(raw, "attribute2"))


def _parse_next_to(raw: Dict[str, Any]) -> Constraint:
    return NextTo(_field(raw, "attribute1"), _field(raw, "attribute2"))


def _parse_position_is(raw: Dict[str, Any]) -> Constraint:
    position = raw.get("position")
    # bool is an int subclass; reject it explicitly.
    if isinstance(position, bool) or not isinstance(position, int):
        try:
            position = int(str(position).strip())
        except ValueError:
            raise InvalidPuzzleInput(f"PositionIs needs an integer 'position': {raw!r}") from None
    return PositionIs(_field(raw, "attribute"), position)


def _parse_right_of(raw: Dict[str, Any]) -> Constraint:
    return RightOf(_field(raw, "attributeLeft"), _field(raw, "attributeRight"))


_CONSTRAINT_PARSERS: Dict[str, Callable[[Dict[str, Any]], Constraint]] = {
    "SameHouse": _parse_same_house,
    "NextTo": _parse_next_to,
    "PositionIs": _parse_position_is,
    "RightOf": _parse_right_of,
}


def parse_constraint(raw: Any) -> Constraint:
    if not isinstance(raw, dict):
        raise InvalidPuzzleInput(f"Constraint must be an object, got {raw!r}")
    kind = raw.get("type")
    if not isinstance(kind, str):
        raise InvalidPuzzleInput(f"Constraint 'type' must be a string, got {kind!r}")
    parser = _CONSTRAINT_PARSERS.get(kind.strip())
    if parser is None:
        known = ", ".join(_CONSTRAINT_PARSERS)
        raise InvalidPuzzleInput(f"Unknown constraint type {kind!r} (expected one of: {known})")
    return parser(raw)


def _field(raw: Dict[str, Any], name: str) -> Attribute:
    if name not in raw:
        raise InvalidPuzzleInput(f"{raw.get('type')} constraint is missing '{name}': {raw!r}")
    return parse_attribute(raw[name])


def _parse_values(values: Any, key: str) -> List[str]:
    if isinstance(values, (str, bytes)) or not hasattr(values, "__iter__"):
        raise InvalidPuzzleInput(f"'{key}' must be a list of values")
    return [str(v).strip() for v in values]

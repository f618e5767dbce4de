"""Puzzle data structures: attributes, constraints, inputs and results."""

from dataclasses import dataclass, field
from typing import Dict, List, Union


@dataclass(frozen=True)
class Attribute:
    """A value of one category, e.g. Attribute("Color", "red")."""

    category: str
    value: str

    def __str__(self) -> str:
        return f"{self.category}({self.value})"


@dataclass(frozen=True)
class SameHouse:
    """Both attributes belong to the same house."""

    first: Attribute
    second: Attribute


@dataclass(frozen=True)
class NextTo:
    """The two attributes live in adjacent houses, in either order."""

    first: Attribute
    second: Attribute


@dataclass(frozen=True)
class PositionIs:
    """The attribute lives in the house at `position` (1-based)."""

    attribute: Attribute
    position: int


@dataclass(frozen=True)
class RightOf:
    """`right` lives in the house immediately to the right of `left`."""

    left: Attribute
    right: Attribute


Constraint = Union[SameHouse, NextTo, PositionIs, RightOf]


def constraint_attributes(constraint: Constraint) -> List[Attribute]:
    """Return the attributes a constraint mentions, in declaration order."""
    if isinstance(constraint, (SameHouse, NextTo)):
        return [constraint.first, constraint.second]
    if isinstance(constraint, PositionIs):
        return [constraint.attribute]
    if isinstance(constraint, RightOf):
        return [constraint.left, constraint.right]
    raise TypeError(f"Unsupported constraint: {constraint!r}")


def describe(constraint: Constraint) -> str:
    """Human-readable one-liner used in logs, traces and error messages."""
    if isinstance(constraint, SameHouse):
        return f"SameHouse: {constraint.first}, {constraint.second}"
    if isinstance(constraint, NextTo):
        return f"NextTo: {constraint.first}, {constraint.second}"
    if isinstance(constraint, PositionIs):
        return f"PositionIs: {constraint.attribute} @ {constraint.position}"
    if isinstance(constraint, RightOf):
        return f"RightOf: {constraint.left} < {constraint.right}"
    raise TypeError(f"Unsupported constraint: {constraint!r}")


@dataclass
class PuzzleInput:
    """
    Categories (ordered name -> universe) plus the constraint list.
    The number of houses is the size of the first category's universe.
    """

    categories: Dict[str, List[str]] = field(default_factory=dict)
    constraints: List[Constraint] = field(default_factory=list)

    @property
    def houses(self) -> int:
        for values in self.categories.values():
            return len(values)
        return 0


@dataclass
class House:
    position: int
    values: Dict[str, str] = field(default_factory=dict)

    def value_of(self, category: str) -> str:
        return self.values[category]


@dataclass
class PuzzleResult:
    houses: List[House] = field(default_factory=list)

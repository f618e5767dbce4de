"""Candidate domain store: which values are still possible per house and category."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from .errors import DomainContradiction
from .model import Attribute, House, PuzzleInput
from src.utils.config import UNKNOWN_VALUE
from src.utils.trace import Tracer, get_tracer


@dataclass
class HouseCandidate:
    position: int
    domains: Dict[str, Set[str]] = field(default_factory=dict)

    def candidates(self, category: str) -> Set[str]:
        return self.domains[category]

    def value_of(self, category: str) -> Optional[str]:
        """The resolved value for `category`, or None while several remain."""
        values = self.domains[category]
        if len(values) == 1:
            return next(iter(values))
        return None

    def is_resolved(self, category: str) -> bool:
        return len(self.domains[category]) == 1

    def has(self, attribute: Attribute) -> bool:
        return attribute.value in self.domains[attribute.category]

    def copy(self) -> "HouseCandidate":
        return HouseCandidate(
            position=self.position,
            domains={cat: set(values) for cat, values in self.domains.items()},
        )

    def to_house(self) -> House:
        return House(
            position=self.position,
            values={
                cat: _or_unknown(self.value_of(cat))
                for cat in self.domains
            },
        )


def _or_unknown(value: Optional[str]) -> str:
    return UNKNOWN_VALUE if value is None else value


class DomainStore:
    """
    Per-house candidate sets for every category.

    Mutations keep two invariants: a value resolved on one house is removed
    from every other house of the same category, and no candidate set is ever
    left empty (a DomainContradiction is raised instead).
    """

    def __init__(
        self,
        categories: Dict[str, List[str]],
        houses: Optional[List[HouseCandidate]] = None,
        tracer: Optional[Tracer] = None,
    ) -> None:
        self.categories = categories
        self.tracer = tracer or get_tracer()
        if houses is None:
            count = len(next(iter(categories.values()), []))
            houses = [
                HouseCandidate(
                    position=pos,
                    domains={cat: set(values) for cat, values in categories.items()},
                )
                for pos in range(1, count + 1)
            ]
        self.houses = houses

    @classmethod
    def from_input(cls, puzzle: PuzzleInput, tracer: Optional[Tracer] = None) -> "DomainStore":
        return cls(categories=puzzle.categories, tracer=tracer)

    @property
    def house_count(self) -> int:
        return len(self.houses)

    def fork(self) -> "DomainStore":
        """Independent deep copy; later changes on either side are not shared."""
        return DomainStore(
            categories=self.categories,
            houses=[house.copy() for house in self.houses],
            tracer=self.tracer,
        )

    def house(self, position: int) -> HouseCandidate:
        return self.houses[position - 1]

    def resolved_house_for(self, attribute: Attribute) -> Optional[HouseCandidate]:
        """The house resolved to exactly this attribute, if any."""
        for house in self.houses:
            if house.value_of(attribute.category) == attribute.value:
                return house
        return None

    def assign(self, attribute: Attribute, house: HouseCandidate) -> None:
        current = house.value_of(attribute.category)
        if current is not None:
            if current != attribute.value:
                self._contradiction(
                    f"House {house.position} already has {attribute.category} "
                    f"'{current}', cannot set {attribute}",
                    attribute,
                    house,
                )
            return

        if not house.has(attribute):
            self._contradiction(
                f"House {house.position} cannot have {attribute}: "
                f"value already eliminated",
                attribute,
                house,
            )

        house.domains[attribute.category] = {attribute.value}
        self.tracer.log_assign(attribute, house.position)

        for other in self.houses:
            if other.position != house.position:
                self.remove(attribute, other)

    def remove(self, attribute: Attribute, house: HouseCandidate) -> bool:
        values = house.candidates(attribute.category)
        if attribute.value not in values:
            return False

        if len(values) == 1:
            self._contradiction(
                f"House {house.position} cannot have empty attribute: {attribute}",
                attribute,
                house,
            )

        values.discard(attribute.value)
        self.tracer.log_domain_reduction(attribute, house.position, len(values))

        # A single survivor is resolved here, so it is impossible everywhere else.
        if len(values) == 1:
            survivor = Attribute(attribute.category, next(iter(values)))
            for other in self.houses:
                if other.position != house.position:
                    self.remove(survivor, other)
        return True

    def is_solved(self) -> bool:
        return all(
            house.is_resolved(cat)
            for house in self.houses
            for cat in self.categories
        )

    def candidate_houses(self, first: Attribute, second: Attribute) -> List[HouseCandidate]:
        """Houses that can still hold both attributes."""
        return [
            house for house in self.houses
            if house.has(first) and house.has(second)
        ]

    def materialize(self) -> List[House]:
        return [house.to_house() for house in self.houses]

    def _contradiction(self, message: str, attribute: Attribute, house: HouseCandidate) -> None:
        self.tracer.log_contradiction(message, attribute=attribute, house=house.position)
        raise DomainContradiction(message)

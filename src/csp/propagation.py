"""Deterministic constraint propagation over a DomainStore.

Each constraint has an `apply` rule, which resolves it completely once enough
of the store is known, and a weaker `prune` rule, which only removes
impossible candidates. `propagate` runs passes over the constraint list until a
pass changes nothing and returns the constraints that were not discharged.
"""

from typing import List, Tuple

from .domains import DomainStore, HouseCandidate
from .errors import DomainContradiction
from .model import (
    Attribute,
    Constraint,
    NextTo,
    PositionIs,
    RightOf,
    SameHouse,
    describe,
)
from src.utils.logging_utils import get_logger

logger = get_logger()


def propagate(constraints: List[Constraint], store: DomainStore, depth: int = 0) -> List[Constraint]:
    """Apply and prune until a fixed point; return the constraints still open."""
    remaining = list(constraints)
    passes = 0
    while True:
        remaining, changes = propagation_pass(remaining, store)
        passes += 1
        store.tracer.log_propagation_pass(len(remaining), changes, depth=depth)
        if changes == 0:
            break
    logger.debug(
        "Propagation settled after %d passes at depth %d, %d constraints left",
        passes,
        depth,
        len(remaining),
    )
    return remaining


def propagation_pass(constraints: List[Constraint], store: DomainStore) -> Tuple[List[Constraint], int]:
    """
    One pass over the list. A discharged constraint counts as a change, as
    does every candidate removed by a prune rule.
    """
    remaining: List[Constraint] = []
    changes = 0
    for constraint in constraints:
        if apply_constraint(constraint, store):
            changes += 1
            continue
        changes += prune_constraint(constraint, store)
        remaining.append(constraint)
    return remaining, changes


def apply_constraint(constraint: Constraint, store: DomainStore) -> bool:
    if isinstance(constraint, SameHouse):
        return _apply_same_house(constraint, store)
    if isinstance(constraint, NextTo):
        return _apply_next_to(constraint, store)
    if isinstance(constraint, PositionIs):
        _apply_position_is(constraint, store)
        return True
    if isinstance(constraint, RightOf):
        return _apply_right_of(constraint, store)
    raise TypeError(f"Unsupported constraint: {constraint!r}")


def prune_constraint(constraint: Constraint, store: DomainStore) -> int:
    if isinstance(constraint, SameHouse):
        return _prune_same_house(constraint, store)
    if isinstance(constraint, NextTo):
        return _prune_next_to(constraint, store)
    if isinstance(constraint, PositionIs):
        return 0
    if isinstance(constraint, RightOf):
        return _prune_right_of(constraint, store)
    raise TypeError(f"Unsupported constraint: {constraint!r}")


# ---- SameHouse -------------------------------------------------------------

def _apply_same_house(constraint: SameHouse, store: DomainStore) -> bool:
    house1 = store.resolved_house_for(constraint.first)
    house2 = store.resolved_house_for(constraint.second)

    if house1 is None and house2 is None:
        return False

    if house1 is not None and house2 is not None:
        if house1.position != house2.position:
            _fail(
                store,
                "Attributes must be in the same house "
                f"(position: {house1.position} != {house2.position}), "
                f"constraint: {describe(constraint)}",
            )
    elif house1 is not None:
        store.assign(constraint.second, house1)
    else:
        store.assign(constraint.first, house2)
    return True


def _prune_same_house(constraint: SameHouse, store: DomainStore) -> int:
    return (
        _remove_where_other_value(store, constraint.first, constraint.second)
        + _remove_where_other_value(store, constraint.second, constraint.first)
    )


def _remove_where_other_value(store: DomainStore, attribute: Attribute, to_remove: Attribute) -> int:
    """Houses resolved to a different value of `attribute`'s category cannot hold `to_remove`."""
    removed = 0
    for house in store.houses:
        if _resolved_to_other(house, attribute):
            if store.remove(to_remove, house):
                removed += 1
    return removed


# ---- NextTo ----------------------------------------------------------------

def _apply_next_to(constraint: NextTo, store: DomainStore) -> bool:
    house1 = store.resolved_house_for(constraint.first)
    house2 = store.resolved_house_for(constraint.second)

    if house1 is None and house2 is None:
        return False

    if house1 is not None and house2 is not None:
        if abs(house1.position - house2.position) != 1:
            _fail(
                store,
                "Attributes must be next to each other "
                f"(positions: {house1.position} and {house2.position}), "
                f"constraint: {describe(constraint)}",
            )
        return True

    if house1 is not None:
        return _place_beside(store, house1, constraint.second, constraint)
    return _place_beside(store, house2, constraint.first, constraint)


def _place_beside(store: DomainStore, anchor: HouseCandidate, attribute: Attribute, constraint: NextTo) -> bool:
    """Assign `attribute` next to `anchor` when exactly one neighbor can take it."""
    targets = [
        neighbor
        for neighbor in _neighbors(store, anchor.position)
        if not neighbor.is_resolved(attribute.category)
    ]
    if not targets:
        _fail(
            store,
            f"No free neighbor of house {anchor.position} for {attribute}, "
            f"constraint: {describe(constraint)}",
        )
    if len(targets) > 1:
        return False
    store.assign(attribute, targets[0])
    return True


def _prune_next_to(constraint: NextTo, store: DomainStore) -> int:
    changes = _prune_next_to_edges(store, constraint.first, constraint.second)
    changes += _prune_next_to_edges(store, constraint.second, constraint.first)

    house1 = store.resolved_house_for(constraint.first)
    house2 = store.resolved_house_for(constraint.second)
    if house1 is not None and house2 is None:
        changes += _remove_outside_neighborhood(store, house1.position, constraint.second)
    elif house2 is not None and house1 is None:
        changes += _remove_outside_neighborhood(store, house2.position, constraint.first)
    return changes


def _prune_next_to_edges(store: DomainStore, first: Attribute, second: Attribute) -> int:
    """An end house has one neighbor: `first` can only sit there if that neighbor may hold `second`."""
    removed = 0
    last = store.house_count
    for edge, inner in ((1, 2), (last, last - 1)):
        if _resolved_to_other(store.house(inner), second):
            if store.remove(first, store.house(edge)):
                removed += 1
    return removed


def _remove_outside_neighborhood(store: DomainStore, position: int, attribute: Attribute) -> int:
    removed = 0
    for house in store.houses:
        if abs(house.position - position) <= 1:
            continue
        if store.remove(attribute, house):
            removed += 1
    return removed


# ---- PositionIs ------------------------------------------------------------

def _apply_position_is(constraint: PositionIs, store: DomainStore) -> None:
    target = store.house(constraint.position)
    current = store.resolved_house_for(constraint.attribute)

    if current is not None:
        if current.position != constraint.position:
            _fail(
                store,
                "Attributes must be in the same house "
                f"(position: {constraint.position} != {current.position}), "
                f"constraint: {describe(constraint)}",
            )
        return
    store.assign(constraint.attribute, target)


# ---- RightOf ---------------------------------------------------------------

def _apply_right_of(constraint: RightOf, store: DomainStore) -> bool:
    left_house = store.resolved_house_for(constraint.left)
    right_house = store.resolved_house_for(constraint.right)

    if left_house is None and right_house is None:
        return False

    if left_house is not None and right_house is not None:
        if left_house.position + 1 != right_house.position:
            _fail(
                store,
                "Attributes must be next to each other "
                f"(positions: {left_house.position} and {right_house.position}), "
                f"constraint: {describe(constraint)}",
            )
    elif left_house is not None:
        store.assign(constraint.right, _house_at(store, left_house.position + 1, constraint))
    else:
        store.assign(constraint.left, _house_at(store, right_house.position - 1, constraint))
    return True


def _prune_right_of(constraint: RightOf, store: DomainStore) -> int:
    last = store.house_count
    removed = 0
    if store.remove(constraint.right, store.house(1)):
        removed += 1
    if store.remove(constraint.left, store.house(last)):
        removed += 1

    # A house that is not `right` rules out `left` on its left neighbor; a house
    # that is not `left` rules out `right` on its right neighbor.
    for house in store.houses:
        if house.position > 1 and _resolved_to_other(house, constraint.right):
            if store.remove(constraint.left, store.house(house.position - 1)):
                removed += 1
        if house.position < last and _resolved_to_other(house, constraint.left):
            if store.remove(constraint.right, store.house(house.position + 1)):
                removed += 1
    return removed


def _resolved_to_other(house: HouseCandidate, attribute: Attribute) -> bool:
    current = house.value_of(attribute.category)
    return current is not None and current != attribute.value


# ---- helpers ---------------------------------------------------------------

def _neighbors(store: DomainStore, position: int) -> List[HouseCandidate]:
    return [
        store.house(pos)
        for pos in (position - 1, position + 1)
        if 1 <= pos <= store.house_count
    ]


def _house_at(store: DomainStore, position: int, constraint: Constraint) -> HouseCandidate:
    if not 1 <= position <= store.house_count:
        _fail(store, f"No house at position {position}, constraint: {describe(constraint)}")
    return store.house(position)


def _fail(store: DomainStore, message: str) -> None:
    store.tracer.log_contradiction(message)
    raise DomainContradiction(message)

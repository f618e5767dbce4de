"""Unit tests for the apply/prune rules and the propagation fixed point."""

import pytest

from src.csp import propagation
from src.csp.domains import DomainStore
from src.csp.errors import DomainContradiction
from src.csp.model import (
    Attribute,
    NextTo,
    PositionIs,
    PuzzleInput,
    RightOf,
    SameHouse,
)

RED = Attribute("Color", "red")
GREEN = Attribute("Color", "green")
BLUE = Attribute("Color", "blue")
IVORY = Attribute("Color", "ivory")
ENGLISHMAN = Attribute("Nationality", "Englishman")
SPANIARD = Attribute("Nationality", "Spaniard")
NORWEGIAN = Attribute("Nationality", "Norwegian")


def _store(houses=4):
    colors = ["red", "green", "blue", "ivory"][:houses]
    nationalities = ["Englishman", "Spaniard", "Norwegian", "Japanese"][:houses]
    puzzle = PuzzleInput(categories={"Color": colors, "Nationality": nationalities})
    return DomainStore.from_input(puzzle)


# ---- SameHouse -------------------------------------------------------------

def test_same_house_not_applicable_when_nothing_resolved():
    store = _store()
    assert not propagation.apply_constraint(SameHouse(ENGLISHMAN, RED), store)


def test_same_house_assigns_partner_of_resolved_attribute():
    store = _store()
    store.assign(ENGLISHMAN, store.house(2))

    assert propagation.apply_constraint(SameHouse(ENGLISHMAN, RED), store)
    assert store.house(2).value_of("Color") == "red"
    assert not store.house(1).has(RED)


def test_same_house_conflicting_positions_raise():
    store = _store()
    store.assign(ENGLISHMAN, store.house(1))
    store.assign(RED, store.house(2))

    with pytest.raises(DomainContradiction):
        propagation.apply_constraint(SameHouse(ENGLISHMAN, RED), store)


def test_same_house_prune_removes_partner_from_other_valued_houses():
    store = _store()
    store.assign(BLUE, store.house(1))

    removed = propagation.prune_constraint(SameHouse(ENGLISHMAN, RED), store)

    assert removed == 1
    assert not store.house(1).has(ENGLISHMAN)
    assert store.house(2).has(ENGLISHMAN)


# ---- NextTo ----------------------------------------------------------------

def test_next_to_from_edge_house_has_single_neighbor():
    store = _store()
    store.assign(NORWEGIAN, store.house(1))

    assert propagation.apply_constraint(NextTo(NORWEGIAN, BLUE), store)
    assert store.house(2).value_of("Color") == "blue"


def test_next_to_picks_only_unresolved_neighbor():
    store = _store()
    store.assign(NORWEGIAN, store.house(2))
    store.assign(RED, store.house(1))

    assert propagation.apply_constraint(NextTo(BLUE, NORWEGIAN), store)
    assert store.house(3).value_of("Color") == "blue"


def test_next_to_ambiguous_prunes_far_houses():
    store = _store()
    store.assign(NORWEGIAN, store.house(2))
    constraint = NextTo(NORWEGIAN, BLUE)

    assert not propagation.apply_constraint(constraint, store)
    assert propagation.prune_constraint(constraint, store) == 1
    assert store.house(1).has(BLUE)
    assert store.house(3).has(BLUE)
    assert not store.house(4).has(BLUE)


def test_next_to_prune_excludes_edge_house_without_partner_neighbor():
    store = _store()
    store.assign(RED, store.house(2))

    # The Norwegian in house 1 would need blue in house 2.
    assert propagation.prune_constraint(NextTo(NORWEGIAN, BLUE), store) == 1
    assert not store.house(1).has(NORWEGIAN)
    assert store.house(1).has(BLUE)


def test_next_to_not_adjacent_raises():
    store = _store()
    store.assign(NORWEGIAN, store.house(1))
    store.assign(BLUE, store.house(3))

    with pytest.raises(DomainContradiction):
        propagation.apply_constraint(NextTo(NORWEGIAN, BLUE), store)


def test_next_to_without_free_neighbor_raises():
    store = _store()
    store.assign(NORWEGIAN, store.house(2))
    store.assign(RED, store.house(1))
    store.assign(GREEN, store.house(3))

    with pytest.raises(DomainContradiction):
        propagation.apply_constraint(NextTo(NORWEGIAN, BLUE), store)


# ---- PositionIs ------------------------------------------------------------

def test_position_is_assigns_house():
    store = _store()
    assert propagation.apply_constraint(PositionIs(RED, 3), store)
    assert store.house(3).value_of("Color") == "red"


def test_position_is_already_satisfied():
    store = _store()
    store.assign(RED, store.house(3))
    assert propagation.apply_constraint(PositionIs(RED, 3), store)


def test_conflicting_positions_raise():
    store = _store()
    propagation.apply_constraint(PositionIs(RED, 2), store)
    with pytest.raises(DomainContradiction):
        propagation.apply_constraint(PositionIs(RED, 3), store)


# ---- RightOf ---------------------------------------------------------------

def test_right_of_places_right_after_left():
    store = _store()
    store.assign(IVORY, store.house(2))

    assert propagation.apply_constraint(RightOf(IVORY, GREEN), store)
    assert store.house(3).value_of("Color") == "green"


def test_right_of_places_left_before_right():
    store = _store()
    store.assign(GREEN, store.house(4))

    assert propagation.apply_constraint(RightOf(IVORY, GREEN), store)
    assert store.house(3).value_of("Color") == "ivory"


def test_right_of_left_in_last_house_raises():
    store = _store()
    store.assign(IVORY, store.house(4))

    with pytest.raises(DomainContradiction):
        propagation.apply_constraint(RightOf(IVORY, GREEN), store)


def test_right_of_wrong_order_raises():
    store = _store()
    store.assign(IVORY, store.house(3))
    store.assign(GREEN, store.house(2))

    with pytest.raises(DomainContradiction):
        propagation.apply_constraint(RightOf(IVORY, GREEN), store)


def test_right_of_prune_removes_edges():
    store = _store()
    constraint = RightOf(IVORY, GREEN)

    assert propagation.prune_constraint(constraint, store) == 2
    assert not store.house(1).has(GREEN)
    assert not store.house(4).has(IVORY)
    # Second prune finds nothing new.
    assert propagation.prune_constraint(constraint, store) == 0


def test_right_of_prune_keeps_pair_found_by_cascade():
    store = _store()
    store.assign(RED, store.house(2))
    constraint = RightOf(IVORY, GREEN)

    propagation.prune_constraint(constraint, store)

    # Elimination leaves blue, red, ivory, green from left to right.
    assert [store.house(p).value_of("Color") for p in range(1, 5)] == [
        "blue", "red", "ivory", "green"
    ]


# ---- propagate -------------------------------------------------------------

def test_propagate_discharges_resolved_constraints():
    store = _store()
    constraints = [
        SameHouse(ENGLISHMAN, RED),
        PositionIs(ENGLISHMAN, 1),
        NextTo(ENGLISHMAN, BLUE),
    ]

    remaining = propagation.propagate(constraints, store)

    assert remaining == []
    assert store.house(1).value_of("Color") == "red"
    assert store.house(2).value_of("Color") == "blue"


def test_propagate_is_idempotent_at_fixed_point():
    store = _store()
    constraints = [
        SameHouse(SPANIARD, GREEN),
        NextTo(NORWEGIAN, BLUE),
        RightOf(IVORY, GREEN),
    ]

    remaining = propagation.propagate(constraints, store)
    assert remaining == constraints
    snapshot = [
        {cat: set(values) for cat, values in house.domains.items()}
        for house in store.houses
    ]

    again, changes = propagation.propagation_pass(remaining, store)

    assert changes == 0
    assert again == remaining
    assert propagation.propagate(remaining, store) == remaining
    assert [house.domains for house in store.houses] == snapshot


def test_unknown_constraint_type_is_rejected():
    store = _store()
    with pytest.raises(TypeError):
        propagation.apply_constraint("not a constraint", store)

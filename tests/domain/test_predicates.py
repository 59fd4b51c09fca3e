"""Tests for predicate building and in-memory evaluation."""

from __future__ import annotations

from decimal import Decimal

from car_market.domain.car import Car, CarCategory, CarType
from car_market.domain.criteria import CatalogFilters, NumericRange
from car_market.domain.predicates import (
    SEARCHABLE_FIELDS,
    AnyOf,
    Operator,
    Predicate,
    build_predicates,
    matches,
)


def _car(**overrides: object) -> Car:
    values: dict[str, object] = {
        "id": 1,
        "make": "Toyota",
        "model": "Camry",
        "year": 2020,
        "price": Decimal("25000.00"),
        "title": "Toyota Camry Hybrid",
        "category": CarCategory.SEDAN,
    }
    values.update(overrides)
    return Car(**values)  # type: ignore[arg-type]


# ==============================================================================
# build_predicates
# ==============================================================================


def test_unset_filters_emit_nothing() -> None:
    assert build_predicates(CatalogFilters()) == []


def test_scalar_filters_become_equality() -> None:
    criteria = build_predicates(CatalogFilters(make="Toyota", doors=4))

    assert criteria == [
        Predicate("make", Operator.EQ, "Toyota"),
        Predicate("doors", Operator.EQ, 4),
    ]


def test_enum_filters_compare_by_value() -> None:
    criteria = build_predicates(CatalogFilters(type=CarType.NEW, category=CarCategory.SUV))

    assert criteria == [
        Predicate("type", Operator.EQ, "NEW"),
        Predicate("category", Operator.EQ, "SUV"),
    ]


def test_ranges_become_inclusive_pairs() -> None:
    criteria = build_predicates(
        CatalogFilters(
            year_range=NumericRange(2018, 2022),
            price_range=NumericRange(Decimal("10000"), Decimal("20000")),
        )
    )

    assert criteria == [
        Predicate("year", Operator.GTE, 2018),
        Predicate("year", Operator.LTE, 2022),
        Predicate("price", Operator.GTE, Decimal("10000")),
        Predicate("price", Operator.LTE, Decimal("20000")),
    ]


def test_search_text_becomes_single_any_of_group() -> None:
    criteria = build_predicates(CatalogFilters(search_text="camry"))

    assert len(criteria) == 1
    group = criteria[0]
    assert isinstance(group, AnyOf)
    assert [p.field for p in group.predicates] == list(SEARCHABLE_FIELDS)
    assert {p.op for p in group.predicates} == {Operator.ICONTAINS}
    assert {p.value for p in group.predicates} == {"camry"}


def test_exclude_id_and_featured() -> None:
    criteria = build_predicates(CatalogFilters(exclude_id=10, is_featured=True))

    assert Predicate("id", Operator.NE, 10) in criteria
    assert Predicate("is_featured", Operator.EQ, True) in criteria


# ==============================================================================
# matches
# ==============================================================================


def test_all_criteria_must_match() -> None:
    criteria = build_predicates(CatalogFilters(make="Toyota", model="Corolla"))

    assert not matches(_car(), criteria)
    assert matches(_car(model="Corolla"), criteria)


def test_range_bounds_are_inclusive() -> None:
    criteria = build_predicates(
        CatalogFilters(price_range=NumericRange(Decimal("25000.00"), Decimal("30000")))
    )

    assert matches(_car(price=Decimal("25000.00")), criteria)
    assert matches(_car(price=Decimal("30000")), criteria)
    assert not matches(_car(price=Decimal("30000.01")), criteria)


def test_inverted_range_matches_nothing() -> None:
    criteria = build_predicates(CatalogFilters(year_range=NumericRange(2022, 2018)))

    assert not matches(_car(year=2020), criteria)


def test_search_text_is_case_insensitive_across_fields() -> None:
    criteria = build_predicates(CatalogFilters(search_text="HYBRID"))

    assert matches(_car(), criteria)
    assert matches(_car(title="Sedan", fuel="hybrid"), criteria)
    assert not matches(_car(title="Sedan"), criteria)


def test_missing_value_never_matches() -> None:
    """A car without fuel is neither equal nor unequal to any fuel."""
    assert not matches(_car(fuel=None), [Predicate("fuel", Operator.EQ, "Diesel")])
    assert not matches(_car(fuel=None), [Predicate("fuel", Operator.NE, "Diesel")])


def test_exclude_id_skips_reference() -> None:
    criteria = build_predicates(CatalogFilters(exclude_id=1))

    assert not matches(_car(id=1), criteria)
    assert matches(_car(id=2), criteria)

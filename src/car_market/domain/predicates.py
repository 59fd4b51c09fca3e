"""Predicate building for catalog queries.

Translates a normalized ``CatalogFilters`` into a flat list of column-level
criteria. Top-level criteria are AND-ed; the free-text search becomes a single
``AnyOf`` group whose members are OR-ed. Nothing here executes a query:
storage adapters compile the criteria (SQL) or evaluate them (in memory).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Union

from car_market.domain.car import Car
from car_market.domain.criteria import CatalogFilters

SEARCHABLE_FIELDS: tuple[str, ...] = (
    "title",
    "description",
    "make",
    "model",
    "fuel",
    "transmission",
    "drive_type",
    "engine_size",
    "exterior_color",
    "origin",
    "vin",
)

# Scalar filters that map 1:1 to an equality predicate on the same-named field
_EQUALITY_FIELDS: tuple[str, ...] = (
    "type",
    "category",
    "make",
    "model",
    "year",
    "fuel",
    "transmission",
    "drive_type",
    "doors",
    "origin",
    "is_featured",
)


class Operator(str, Enum):
    EQ = "eq"
    NE = "ne"
    GTE = "gte"
    LTE = "lte"
    ICONTAINS = "icontains"


@dataclass(frozen=True, slots=True)
class Predicate:
    field: str
    op: Operator
    value: Any


@dataclass(frozen=True, slots=True)
class AnyOf:
    """Matches when at least one member predicate matches."""

    predicates: tuple[Predicate, ...]


Criterion = Union[Predicate, AnyOf]


def build_predicates(filters: CatalogFilters) -> list[Criterion]:
    """Build the AND-ed criteria for ``filters``; unset fields emit nothing."""
    criteria: list[Criterion] = []

    for field in _EQUALITY_FIELDS:
        value = getattr(filters, field)
        if value is None:
            continue
        if isinstance(value, Enum):
            value = value.value
        criteria.append(Predicate(field, Operator.EQ, value))

    if filters.year_range is not None:
        criteria.append(Predicate("year", Operator.GTE, filters.year_range.min))
        criteria.append(Predicate("year", Operator.LTE, filters.year_range.max))

    if filters.price_range is not None:
        criteria.append(Predicate("price", Operator.GTE, filters.price_range.min))
        criteria.append(Predicate("price", Operator.LTE, filters.price_range.max))

    if filters.search_text is not None:
        criteria.append(
            AnyOf(
                tuple(
                    Predicate(field, Operator.ICONTAINS, filters.search_text)
                    for field in SEARCHABLE_FIELDS
                )
            )
        )

    if filters.exclude_id is not None:
        criteria.append(Predicate("id", Operator.NE, filters.exclude_id))

    return criteria


def matches(car: Car, criteria: Iterable[Criterion]) -> bool:
    """Evaluate criteria against an in-memory listing with SQL-like semantics."""
    return all(_matches_one(car, criterion) for criterion in criteria)


def _matches_one(car: Car, criterion: Criterion) -> bool:
    if isinstance(criterion, AnyOf):
        return any(_matches_one(car, member) for member in criterion.predicates)

    actual = getattr(car, criterion.field)
    expected = criterion.value

    # NULL never satisfies a comparison
    if actual is None:
        return False

    if criterion.op is Operator.EQ:
        return actual == expected
    if criterion.op is Operator.NE:
        return actual != expected
    if criterion.op is Operator.GTE:
        return actual >= expected
    if criterion.op is Operator.LTE:
        return actual <= expected
    if criterion.op is Operator.ICONTAINS:
        return str(expected).casefold() in str(actual).casefold()

    raise ValueError(f"Unsupported operator: {criterion.op}")

"""Ordering policy for catalog queries.

Maps the public ``order_by`` token to a concrete sort specification. Every
ordering ends with ``id`` ascending so ties are broken the same way on every
page, whatever the storage engine does with equal keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True, slots=True)
class SortKey:
    field: str
    direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True, slots=True)
class Ordering:
    primary: SortKey
    tie_breaker: SortKey = SortKey("id", SortDirection.ASC)

    @property
    def keys(self) -> tuple[SortKey, ...]:
        return (self.primary, self.tie_breaker)


DEFAULT_ORDERING = Ordering(SortKey("created_at", SortDirection.DESC))
FEATURED_ORDERING = Ordering(SortKey("updated_at", SortDirection.DESC))
MOST_VIEWED_ORDERING = Ordering(SortKey("views", SortDirection.DESC))

ORDERINGS: dict[str, Ordering] = {
    "price_asc": Ordering(SortKey("price", SortDirection.ASC)),
    "price_desc": Ordering(SortKey("price", SortDirection.DESC)),
    "year_asc": Ordering(SortKey("year", SortDirection.ASC)),
    "year_desc": Ordering(SortKey("year", SortDirection.DESC)),
    "views_desc": MOST_VIEWED_ORDERING,
}


def resolve_ordering(token: str | None) -> Ordering:
    """Return the ordering for ``token``; unknown or missing tokens mean newest first."""
    if token is None:
        return DEFAULT_ORDERING
    return ORDERINGS.get(token.strip().lower(), DEFAULT_ORDERING)

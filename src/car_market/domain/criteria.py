"""Search criteria normalization.

Turns loosely-typed caller input (query-string values) into a typed
``CatalogFilters`` object. All coercion lives here: malformed values are
dropped instead of raised, so a bad parameter never constrains or breaks a
search, and it never leaks into a query as a NaN or a half-parsed number.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

from car_market.domain.car import MIN_MODEL_YEAR, CarCategory, CarType
from car_market.domain.pagination import ALL_ROWS_LIMIT, DEFAULT_PAGE_LIMIT, Paging

logger = logging.getLogger(__name__)

# Largest integer a JSON number can carry exactly (2**53 - 1)
MAX_SAFE_INTEGER = Decimal(9007199254740991)

# Integer columns are 32-bit; larger filter values cannot be bound
MIN_INT32 = -(2**31)
MAX_INT32 = 2**31 - 1

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_DECIMAL_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")

T = TypeVar("T", int, Decimal)
E = TypeVar("E", bound=Enum)


@dataclass(frozen=True, slots=True)
class NumericRange(Generic[T]):
    """Inclusive numeric range."""

    min: T
    max: T


@dataclass(frozen=True, slots=True)
class RawCriteria:
    """Search input exactly as received from the caller; every field optional."""

    search_text: Any = None
    type: Any = None
    category: Any = None
    make: Any = None
    brand_id: Any = None
    model: Any = None
    year: Any = None
    year_min: Any = None
    year_max: Any = None
    price_min: Any = None
    price_max: Any = None
    fuel: Any = None
    transmission: Any = None
    drive_type: Any = None
    doors: Any = None
    origin: Any = None
    order_by: Any = None


@dataclass(frozen=True, slots=True)
class RawPaging:
    page: Any = None
    limit: Any = None


@dataclass(frozen=True, slots=True)
class CatalogFilters:
    """
    Normalized search filter.

    A ``None`` field means "not supplied" and must not constrain the query.
    ``exclude_id`` and ``is_featured`` are never read from caller input; they
    are set by use cases (similarity search, featured listings).
    """

    type: CarType | None = None
    category: CarCategory | None = None
    make: str | None = None
    model: str | None = None
    year: int | None = None
    fuel: str | None = None
    transmission: str | None = None
    drive_type: str | None = None
    doors: int | None = None
    origin: str | None = None
    year_range: NumericRange[int] | None = None
    price_range: NumericRange[Decimal] | None = None
    search_text: str | None = None
    exclude_id: int | None = None
    is_featured: bool | None = None
    order_by: str | None = None


@dataclass(frozen=True, slots=True)
class SearchDefaults:
    """
    Defaults applied while normalizing criteria.

    ``current_year`` is injected so tests can pin "now"; the open upper bound
    of a year range is one model year ahead of it.
    """

    current_year: int
    min_year: int = MIN_MODEL_YEAR
    min_price: Decimal = Decimal(0)
    max_price: Decimal = MAX_SAFE_INTEGER
    default_limit: int = DEFAULT_PAGE_LIMIT
    all_rows_limit: int = ALL_ROWS_LIMIT

    @property
    def max_year(self) -> int:
        return self.current_year + 1

    @classmethod
    def for_year(cls, year: int) -> SearchDefaults:
        return cls(current_year=year)

    @classmethod
    def today(cls, clock: Callable[[], date] = date.today) -> SearchDefaults:
        return cls.for_year(clock().year)


class FilterNormalizer:
    """Parses raw criteria and paging input into typed domain objects."""

    def __init__(self, defaults: SearchDefaults) -> None:
        self._defaults = defaults

    @property
    def defaults(self) -> SearchDefaults:
        return self._defaults

    def normalize(self, raw: RawCriteria) -> CatalogFilters:
        year_range = self._year_range(raw)
        price_range = self._price_range(raw)

        # An exact year only applies when no year range is requested
        year = None if year_range is not None else _parse_int("year", raw.year)

        return CatalogFilters(
            type=_parse_enum("type", raw.type, CarType),
            category=_parse_enum("category", raw.category, CarCategory),
            make=_text(raw.make) or _text(raw.brand_id),
            model=_text(raw.model),
            year=year,
            fuel=_text(raw.fuel),
            transmission=_text(raw.transmission),
            drive_type=_text(raw.drive_type),
            doors=_parse_int("doors", raw.doors),
            origin=_text(raw.origin),
            year_range=year_range,
            price_range=price_range,
            search_text=_text(raw.search_text),
            order_by=_text(raw.order_by),
        )

    def normalize_paging(self, raw: RawPaging, default_limit: int | None = None) -> Paging:
        """
        Parse page/limit, falling back to defaults for missing or malformed values.

        Well-formed but out-of-range values (e.g. ``limit=0``) are kept so that
        ``Paging.validate`` can reject them.
        """
        page = _parse_int("page", raw.page)
        limit = _parse_int("limit", raw.limit)

        return Paging(
            page=1 if page is None else page,
            limit=(default_limit or self._defaults.default_limit) if limit is None else limit,
        )

    def _year_range(self, raw: RawCriteria) -> NumericRange[int] | None:
        year_min = _parse_int("year_min", raw.year_min)
        year_max = _parse_int("year_max", raw.year_max)

        if year_min is None and year_max is None:
            return None

        return NumericRange(
            min=self._defaults.min_year if year_min is None else year_min,
            max=self._defaults.max_year if year_max is None else year_max,
        )

    def _price_range(self, raw: RawCriteria) -> NumericRange[Decimal] | None:
        price_min = _parse_decimal("price_min", raw.price_min)
        price_max = _parse_decimal("price_max", raw.price_max)

        if price_min is None and price_max is None:
            return None

        return NumericRange(
            min=self._defaults.min_price if price_min is None else price_min,
            max=self._defaults.max_price if price_max is None else price_max,
        )


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _text(value: Any) -> str | None:
    if _is_blank(value):
        return None
    return value if isinstance(value, str) else str(value)


def _parse_int(field: str, value: Any) -> int | None:
    if _is_blank(value):
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        parsed = value
    else:
        text = str(value).strip()
        if not _INT_PATTERN.fullmatch(text):
            _log_dropped(field, value)
            return None
        parsed = int(text)

    if not MIN_INT32 <= parsed <= MAX_INT32:
        _log_dropped(field, value)
        return None
    return parsed


def _parse_decimal(field: str, value: Any) -> Decimal | None:
    if _is_blank(value):
        return None
    if isinstance(value, bool):
        _log_dropped(field, value)
        return None
    text = str(value).strip()
    if not _DECIMAL_PATTERN.fullmatch(text):
        _log_dropped(field, value)
        return None

    try:
        parsed = Decimal(text)
    except InvalidOperation:
        _log_dropped(field, value)
        return None

    if not parsed.is_finite() or parsed.copy_abs() > MAX_SAFE_INTEGER:
        _log_dropped(field, value)
        return None
    return parsed


def _parse_enum(field: str, value: Any, enum_type: type[E]) -> E | None:
    if _is_blank(value):
        return None
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(str(value).strip().upper())
    except ValueError:
        _log_dropped(field, value)
        return None


def _log_dropped(field: str, value: Any) -> None:
    logger.debug("Ignoring malformed search parameter", extra={"field": field, "value": value})

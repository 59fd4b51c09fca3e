"""Similar listings for a reference car."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from car_market.domain.car import Car
from car_market.domain.criteria import CatalogFilters, NumericRange
from car_market.domain.errors import NotFoundError
from car_market.domain.ordering import DEFAULT_ORDERING
from car_market.domain.pagination import Paging
from car_market.domain.predicates import build_predicates
from car_market.ports.car_repository import CarRepository

DEFAULT_SIMILAR_LIMIT = 6
PRICE_BAND_LOWER = Decimal("0.8")
PRICE_BAND_UPPER = Decimal("1.2")


@dataclass(frozen=True, slots=True)
class FindSimilarCarsRequest:
    car_id: int
    limit: int = DEFAULT_SIMILAR_LIMIT


class FindSimilarCars:
    """
    Listings comparable to a reference listing.

    A candidate is similar when it shares category and make, is priced within
    [0.8x, 1.2x] of the reference (inclusive, exact decimal arithmetic) and,
    when the reference has them, shares fuel and transmission. The reference
    itself is never returned.
    """

    def __init__(self, car_repository: CarRepository) -> None:
        self._repository = car_repository

    def execute(self, request: FindSimilarCarsRequest) -> list[Car]:
        """
        Raises:
            PagingValidationError: If limit is out of range
            NotFoundError: If the reference listing doesn't exist
        """
        paging = Paging(page=1, limit=request.limit)
        paging.validate()

        reference = self._repository.get_by_id(request.car_id)
        if reference is None:
            raise NotFoundError(resource="Car", identifier=request.car_id)

        filters = self.filters_for(reference)

        return self._repository.find_many(
            build_predicates(filters),
            DEFAULT_ORDERING,
            offset=paging.offset,
            limit=paging.limit,
        )

    @staticmethod
    def filters_for(reference: Car) -> CatalogFilters:
        """Similarity filter derived from ``reference``."""
        return CatalogFilters(
            category=reference.category,
            make=reference.make,
            fuel=_known(reference.fuel),
            transmission=_known(reference.transmission),
            price_range=NumericRange(
                min=reference.price * PRICE_BAND_LOWER,
                max=reference.price * PRICE_BAND_UPPER,
            ),
            exclude_id=reference.id,
        )


def _known(value: str | None) -> str | None:
    # Blank attributes are unknown and must not constrain the match
    if value is None or not value.strip():
        return None
    return value

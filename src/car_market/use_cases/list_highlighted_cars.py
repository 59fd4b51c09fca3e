"""Featured and most-viewed listing views."""

from __future__ import annotations

from dataclasses import dataclass

from car_market.domain.car import Car
from car_market.domain.criteria import CatalogFilters
from car_market.domain.ordering import FEATURED_ORDERING, MOST_VIEWED_ORDERING
from car_market.domain.pagination import DEFAULT_PAGE_LIMIT, Paging
from car_market.domain.predicates import build_predicates
from car_market.ports.car_repository import CarRepository


@dataclass(frozen=True, slots=True)
class HighlightedCarsRequest:
    limit: int = DEFAULT_PAGE_LIMIT


class GetFeaturedCars:
    """Listings flagged as featured, most recently updated first."""

    def __init__(self, car_repository: CarRepository) -> None:
        self._repository = car_repository

    def execute(self, request: HighlightedCarsRequest) -> list[Car]:
        paging = Paging(page=1, limit=request.limit)
        paging.validate()

        return self._repository.find_many(
            build_predicates(CatalogFilters(is_featured=True)),
            FEATURED_ORDERING,
            offset=0,
            limit=paging.limit,
        )


class GetMostViewedCars:
    """Listings with the most detail views first."""

    def __init__(self, car_repository: CarRepository) -> None:
        self._repository = car_repository

    def execute(self, request: HighlightedCarsRequest) -> list[Car]:
        paging = Paging(page=1, limit=request.limit)
        paging.validate()

        return self._repository.find_many(
            [],
            MOST_VIEWED_ORDERING,
            offset=0,
            limit=paging.limit,
        )

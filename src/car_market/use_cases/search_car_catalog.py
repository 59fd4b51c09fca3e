from __future__ import annotations

from dataclasses import dataclass

from car_market.domain.car import Car
from car_market.domain.criteria import FilterNormalizer, RawCriteria, RawPaging
from car_market.domain.ordering import resolve_ordering
from car_market.domain.pagination import PaginationInfo
from car_market.domain.predicates import build_predicates
from car_market.ports.car_repository import CarRepository


@dataclass(frozen=True, slots=True)
class SearchCarCatalogRequest:
    criteria: RawCriteria
    paging: RawPaging
    default_limit: int | None = None  # None means the normalizer's default page size


@dataclass(frozen=True, slots=True)
class SearchCarCatalogResponse:
    cars: list[Car]
    pagination: PaginationInfo


class SearchCarCatalog:
    """
    Car search catalog with filters, ordering and pagination.

    Raw input is normalized here, then the use case validates paging and
    delegates filtering to the repository adapter. Malformed filter values are
    dropped by the normalizer; only invalid paging is an error.
    """

    def __init__(self, car_repository: CarRepository, normalizer: FilterNormalizer) -> None:
        self._repository = car_repository
        self._normalizer = normalizer

    def execute(self, request: SearchCarCatalogRequest) -> SearchCarCatalogResponse:
        """
        Execute catalog search.

        Args:
            request: Raw criteria and paging as received from the caller

        Returns:
            Response containing one page of cars and its pagination metadata

        Raises:
            PagingValidationError: If paging parameters are out of range
        """
        filters = self._normalizer.normalize(request.criteria)
        paging = self._normalizer.normalize_paging(request.paging, request.default_limit)

        # Validate inputs (UseCase responsibility per contract)
        paging.validate()

        criteria = build_predicates(filters)
        ordering = resolve_ordering(filters.order_by)

        total = self._repository.count(criteria)
        cars = self._repository.find_many(
            criteria,
            ordering,
            offset=paging.offset,
            limit=paging.limit,
        )

        return SearchCarCatalogResponse(
            cars=cars,
            pagination=PaginationInfo.compute(total, paging),
        )

"""
Test suite for CatalogSearchMapper.

The mapper only translates:
- Query params are copied into RawCriteria/RawPaging untouched (parsing
  belongs to FilterNormalizer)
- Domain results become response DTOs with Decimal → str at the boundary
"""

from __future__ import annotations

from decimal import Decimal

from car_market.domain.car import Car
from car_market.domain.criteria import RawCriteria, RawPaging
from car_market.domain.pagination import PaginationInfo, Paging
from car_market.entrypoints.http.dtos.catalog_search import (
    CarsSearchQueryDTO,
    CatalogSearchResponseDTO,
)
from car_market.entrypoints.http.mappers.catalog_search_mapper import CatalogSearchMapper
from car_market.use_cases.search_car_catalog import (
    SearchCarCatalogRequest,
    SearchCarCatalogResponse,
)


# ==============================================================================
# to_raw_criteria() / to_domain_request() - DTO → Domain Request
# ==============================================================================


def test_to_raw_criteria_copies_values_verbatim() -> None:
    """Malformed values pass through; the normalizer decides what to drop."""
    dto = CarsSearchQueryDTO(
        search_text="camry",
        category="sedan",
        brand_id="Toyota",
        year_min="2018",
        price_max="not-a-number",
        order_by="price_asc",
    )

    result = CatalogSearchMapper.to_raw_criteria(dto)

    assert result == RawCriteria(
        search_text="camry",
        category="sedan",
        brand_id="Toyota",
        year_min="2018",
        price_max="not-a-number",
        order_by="price_asc",
    )


def test_to_domain_request_carries_paging_and_default_limit() -> None:
    dto = CarsSearchQueryDTO(page="3", limit="25")

    result = CatalogSearchMapper.to_domain_request(dto, default_limit=1000)

    assert isinstance(result, SearchCarCatalogRequest)
    assert result.paging == RawPaging(page="3", limit="25")
    assert result.default_limit == 1000


def test_to_domain_request_without_params() -> None:
    result = CatalogSearchMapper.to_domain_request(CarsSearchQueryDTO())

    assert result.criteria == RawCriteria()
    assert result.paging == RawPaging()
    assert result.default_limit is None


# ==============================================================================
# to_response() - Domain Response → DTO
# ==============================================================================


def test_to_response_maps_cars_and_pagination() -> None:
    car = Car(id=7, make="Honda", model="Civic", year=2021, price=Decimal("19999.99"))
    result = SearchCarCatalogResponse(
        cars=[car],
        pagination=PaginationInfo.compute(total=21, paging=Paging(page=2, limit=10)),
    )

    response = CatalogSearchMapper.to_response(result)

    assert isinstance(response, CatalogSearchResponseDTO)
    assert response.data[0].id == 7
    assert response.data[0].price == "19999.99"
    assert response.pagination.model_dump() == {
        "total": 21,
        "page": 2,
        "limit": 10,
        "total_pages": 3,
        "has_next_page": True,
        "has_prev_page": True,
    }


def test_to_response_with_no_results() -> None:
    result = SearchCarCatalogResponse(
        cars=[], pagination=PaginationInfo.compute(total=0, paging=Paging(page=1, limit=10))
    )

    response = CatalogSearchMapper.to_response(result)

    assert response.data == []
    assert response.pagination.total_pages == 0
    assert response.pagination.has_next_page is False

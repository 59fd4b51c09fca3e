from __future__ import annotations

from car_market.domain.criteria import RawCriteria, RawPaging
from car_market.domain.pagination import PaginationInfo
from car_market.entrypoints.http.dtos.catalog_search import (
    CarsSearchQueryDTO,
    CatalogSearchResponseDTO,
    PaginationDTO,
)
from car_market.entrypoints.http.mappers.car_mapper import CarMapper
from car_market.use_cases.search_car_catalog import (
    SearchCarCatalogRequest,
    SearchCarCatalogResponse,
)


class CatalogSearchMapper:
    """Maps between REST DTOs and domain models for catalog search."""

    @staticmethod
    def to_raw_criteria(dto: CarsSearchQueryDTO) -> RawCriteria:
        """
        Copies query params into raw criteria without interpreting them.

        Parsing and defaults belong to FilterNormalizer.
        """
        return RawCriteria(
            search_text=dto.search_text,
            type=dto.type,
            category=dto.category,
            make=dto.make,
            brand_id=dto.brand_id,
            model=dto.model,
            year=dto.year,
            year_min=dto.year_min,
            year_max=dto.year_max,
            price_min=dto.price_min,
            price_max=dto.price_max,
            fuel=dto.fuel,
            transmission=dto.transmission,
            drive_type=dto.drive_type,
            doors=dto.doors,
            origin=dto.origin,
            order_by=dto.order_by,
        )

    @staticmethod
    def to_domain_request(
        dto: CarsSearchQueryDTO, default_limit: int | None = None
    ) -> SearchCarCatalogRequest:
        """
        Builds complete domain request from DTO.

        Args:
            dto: The data transfer object containing search query parameters
            default_limit: Page size used when the caller sends no valid limit

        Returns:
            SearchCarCatalogRequest: Raw criteria and paging for the use case
        """
        return SearchCarCatalogRequest(
            criteria=CatalogSearchMapper.to_raw_criteria(dto),
            paging=RawPaging(page=dto.page, limit=dto.limit),
            default_limit=default_limit,
        )

    @staticmethod
    def to_pagination(info: PaginationInfo) -> PaginationDTO:
        return PaginationDTO(
            total=info.total,
            page=info.page,
            limit=info.limit,
            total_pages=info.total_pages,
            has_next_page=info.has_next_page,
            has_prev_page=info.has_prev_page,
        )

    @staticmethod
    def to_response(result: SearchCarCatalogResponse) -> CatalogSearchResponseDTO:
        """Converts domain search result to REST response with pagination metadata."""
        return CatalogSearchResponseDTO(
            data=[CarMapper.to_response(car) for car in result.cars],
            pagination=CatalogSearchMapper.to_pagination(result.pagination),
        )

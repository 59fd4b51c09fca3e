from fastapi import APIRouter, Depends, Query

from car_market.domain.pagination import ALL_ROWS_LIMIT, DEFAULT_PAGE_LIMIT
from car_market.entrypoints.http.dependencies import (
    get_car_by_id_use_case,
    get_featured_cars_use_case,
    get_find_similar_cars_use_case,
    get_most_viewed_cars_use_case,
    get_search_catalog_use_case,
)
from car_market.entrypoints.http.dtos.car import CarListResponseDTO, CarResponseDTO
from car_market.entrypoints.http.dtos.catalog_search import (
    CarsSearchQueryDTO,
    CatalogSearchResponseDTO,
)
from car_market.entrypoints.http.error_responses import (
    NOT_FOUND_RESPONSE,
    SERVER_ERROR_RESPONSE,
    VALIDATION_ERROR_RESPONSE,
)
from car_market.entrypoints.http.mappers.car_mapper import CarMapper
from car_market.entrypoints.http.mappers.catalog_search_mapper import CatalogSearchMapper
from car_market.use_cases.find_similar_cars import (
    DEFAULT_SIMILAR_LIMIT,
    FindSimilarCars,
    FindSimilarCarsRequest,
)
from car_market.use_cases.get_car_by_id import GetCarById, GetCarByIdRequest
from car_market.use_cases.list_highlighted_cars import (
    GetFeaturedCars,
    GetMostViewedCars,
    HighlightedCarsRequest,
)
from car_market.use_cases.search_car_catalog import SearchCarCatalog


router = APIRouter(tags=["Cars"])

_SEARCH_RESPONSES = {
    200: {
        "description": "Successful response",
        "content": {
            "application/json": {
                "example": {
                    "data": [
                        {
                            "id": 12,
                            "title": "Toyota Camry 2020",
                            "make": "Toyota",
                            "model": "Camry",
                            "year": 2020,
                            "price": "25000.00",
                        }
                    ],
                    "pagination": {
                        "total": 42,
                        "page": 1,
                        "limit": 10,
                        "total_pages": 5,
                        "has_next_page": True,
                        "has_prev_page": False,
                    },
                }
            }
        },
    },
    422: VALIDATION_ERROR_RESPONSE,
    500: SERVER_ERROR_RESPONSE,
}


@router.get(
    "/cars",
    response_model=CatalogSearchResponseDTO,
    summary="Browse car catalog",
    description="""
    List cars with optional filters. Same parameters as `/cars/search`, but
    returns every matching row by default (limit 1000).

    ## Example
    ```
    GET /v1/cars?category=SUV&order_by=year_desc
    ```
    """,
    responses=_SEARCH_RESPONSES,
)
def get_cars(
    query: CarsSearchQueryDTO = Depends(),
    use_case: SearchCarCatalog = Depends(get_search_catalog_use_case),
) -> CatalogSearchResponseDTO:
    """Browse cars endpoint following parse → execute → map → return pattern."""
    # 1. Map to domain request
    request = CatalogSearchMapper.to_domain_request(query, default_limit=ALL_ROWS_LIMIT)

    # 2. Execute use case
    result = use_case.execute(request)

    # 3. Map to response
    return CatalogSearchMapper.to_response(result)


@router.get(
    "/cars/search",
    response_model=CatalogSearchResponseDTO,
    summary="Search car catalog",
    description="""
    Search for cars in the catalog with optional filters and pagination.

    ## Filters
    - All filters use AND semantics
    - `search_text`: case-insensitive substring over title, description, make,
      model, fuel, transmission, drive type, engine size, color, origin and VIN
    - Year/price: inclusive ranges; a missing bound is open
    - `year` is ignored when a year range is given
    - Malformed values are ignored, never rejected

    ## Ordering
    `order_by`: `price_asc`, `price_desc`, `year_asc`, `year_desc`,
    `views_desc`; anything else lists newest first.

    ## Pagination
    - Default limit: 10
    - Max limit: 1000
    - `page` is 1-based

    ## Example
    ```
    GET /v1/cars/search?search_text=camry&price_max=30000&order_by=price_asc&page=2
    ```
    """,
    responses=_SEARCH_RESPONSES,
)
def search_cars(
    query: CarsSearchQueryDTO = Depends(),
    use_case: SearchCarCatalog = Depends(get_search_catalog_use_case),
) -> CatalogSearchResponseDTO:
    request = CatalogSearchMapper.to_domain_request(query, default_limit=DEFAULT_PAGE_LIMIT)
    result = use_case.execute(request)
    return CatalogSearchMapper.to_response(result)


@router.get(
    "/cars/featured",
    response_model=CarListResponseDTO,
    summary="Featured cars",
    description="Cars flagged as featured, most recently updated first.",
    responses={422: VALIDATION_ERROR_RESPONSE, 500: SERVER_ERROR_RESPONSE},
)
def get_featured_cars(
    limit: int = Query(default=DEFAULT_PAGE_LIMIT, description="Maximum number of cars"),
    use_case: GetFeaturedCars = Depends(get_featured_cars_use_case),
) -> CarListResponseDTO:
    cars = use_case.execute(HighlightedCarsRequest(limit=limit))
    return CarMapper.to_list_response(cars)


@router.get(
    "/cars/most-viewed",
    response_model=CarListResponseDTO,
    summary="Most viewed cars",
    description="Cars with the most detail views first.",
    responses={422: VALIDATION_ERROR_RESPONSE, 500: SERVER_ERROR_RESPONSE},
)
def get_most_viewed_cars(
    limit: int = Query(default=DEFAULT_PAGE_LIMIT, description="Maximum number of cars"),
    use_case: GetMostViewedCars = Depends(get_most_viewed_cars_use_case),
) -> CarListResponseDTO:
    cars = use_case.execute(HighlightedCarsRequest(limit=limit))
    return CarMapper.to_list_response(cars)


@router.get(
    "/cars/{car_id}",
    response_model=CarResponseDTO,
    summary="Get car details",
    description="Returns one car with its images and specifications. Each call counts as a view.",
    responses={
        404: NOT_FOUND_RESPONSE,
        422: VALIDATION_ERROR_RESPONSE,
        500: SERVER_ERROR_RESPONSE,
    },
)
def get_car(
    car_id: int,
    use_case: GetCarById = Depends(get_car_by_id_use_case),
) -> CarResponseDTO:
    result = use_case.execute(GetCarByIdRequest(car_id=car_id))
    return CarMapper.to_response(result.car)


@router.get(
    "/cars/{car_id}/similar",
    response_model=CarListResponseDTO,
    summary="Similar cars",
    description="""
    Cars of the same category and make priced within 20% of the given car,
    also matching its fuel and transmission when those are known. The car
    itself is never included.
    """,
    responses={
        404: NOT_FOUND_RESPONSE,
        422: VALIDATION_ERROR_RESPONSE,
        500: SERVER_ERROR_RESPONSE,
    },
)
def get_similar_cars(
    car_id: int,
    limit: int = Query(default=DEFAULT_SIMILAR_LIMIT, description="Maximum number of cars"),
    use_case: FindSimilarCars = Depends(get_find_similar_cars_use_case),
) -> CarListResponseDTO:
    cars = use_case.execute(FindSimilarCarsRequest(car_id=car_id, limit=limit))
    return CarMapper.to_list_response(cars)

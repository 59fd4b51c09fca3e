from pydantic import BaseModel, ConfigDict, Field

from car_market.entrypoints.http.dtos.car import CarResponseDTO


class CarsSearchQueryDTO(BaseModel):
    """
    Query parameters for browsing and searching the catalog.

    Every parameter is accepted as a string: malformed values are ignored by
    the search instead of failing the request.
    """

    search_text: str | None = Field(
        default=None,
        description="Case-insensitive substring matched against title, description, make, model and other text fields",
        examples=["camry"],
    )
    type: str | None = Field(default=None, description="NEW or USED", examples=["USED"])
    category: str | None = Field(
        default=None,
        description="LUXURY, ECONOMY, SUV, SPORTS, SEDAN or OTHER",
        examples=["SEDAN"],
    )
    make: str | None = Field(default=None, description="Exact make", examples=["Toyota"])
    brand_id: str | None = Field(
        default=None, description="Alias of make; ignored when make is given"
    )
    model: str | None = Field(default=None, description="Exact model", examples=["Camry"])
    year: str | None = Field(
        default=None,
        description="Exact model year; ignored when year_min or year_max is given",
        examples=["2020"],
    )
    year_min: str | None = Field(default=None, description="Minimum year (inclusive)", examples=["2018"])
    year_max: str | None = Field(default=None, description="Maximum year (inclusive)", examples=["2023"])
    price_min: str | None = Field(
        default=None, description="Minimum price (inclusive)", examples=["20000.00"]
    )
    price_max: str | None = Field(
        default=None, description="Maximum price (inclusive)", examples=["35000.00"]
    )
    fuel: str | None = None
    transmission: str | None = None
    drive_type: str | None = None
    doors: str | None = None
    origin: str | None = None
    order_by: str | None = Field(
        default=None,
        description="price_asc, price_desc, year_asc, year_desc or views_desc; newest first otherwise",
        examples=["price_asc"],
    )
    page: str | None = Field(default=None, description="1-based page number", examples=["1"])
    limit: str | None = Field(
        default=None, description="Page size (1-1000)", examples=["10"]
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "search_text": "camry",
                "category": "SEDAN",
                "year_min": "2018",
                "price_max": "35000.00",
                "order_by": "price_asc",
                "page": "1",
                "limit": "10",
            }
        }
    )


class PaginationDTO(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool


class CatalogSearchResponseDTO(BaseModel):
    data: list[CarResponseDTO]
    pagination: PaginationDTO

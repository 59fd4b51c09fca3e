from pydantic import BaseModel, ConfigDict, Field

# Matches the NUMERIC(12, 2) price column and NUMERIC(8, 2) dimension columns
DECIMAL_PATTERN = r"^\d{1,10}(\.\d{1,2})?$"
DIMENSION_PATTERN = r"^\d{1,6}(\.\d{1,2})?$"

# Upper bound of the INTEGER columns
MAX_INT = 2_147_483_647


class DimensionsInputDTO(BaseModel):
    length: str | None = Field(default=None, pattern=DIMENSION_PATTERN)
    width: str | None = Field(default=None, pattern=DIMENSION_PATTERN)
    height: str | None = Field(default=None, pattern=DIMENSION_PATTERN)


class CarSpecificationInputDTO(BaseModel):
    key: str = Field(description="Specification name", examples=["Sunroof"], max_length=100)
    value: str = Field(description="Specification value", examples=["Yes"], max_length=255)


class CarCreateDTO(BaseModel):
    """Request payload for creating a listing."""

    title: str = Field(max_length=200)
    description: str
    type: str = Field(description="NEW or USED", examples=["USED"])
    category: str = Field(
        description="LUXURY, ECONOMY, SUV, SPORTS, SEDAN or OTHER", examples=["SEDAN"]
    )
    make: str = Field(max_length=50)
    model: str = Field(max_length=50)
    year: int = Field(le=MAX_INT)
    mileage: int | None = Field(default=None, le=MAX_INT)
    price: str = Field(
        description="Price as decimal string",
        examples=["25000.00"],
        pattern=DECIMAL_PATTERN,
    )
    location: str | None = Field(default=None, max_length=100)
    contact_number: str = Field(max_length=30)

    fuel: str | None = Field(default=None, max_length=30)
    transmission: str | None = Field(default=None, max_length=30)
    drive_type: str | None = Field(default=None, max_length=30)
    doors: int | None = Field(default=None, le=MAX_INT)
    passengers: int | None = Field(default=None, le=MAX_INT)
    exterior_color: str | None = Field(default=None, max_length=30)
    interior_color: str | None = Field(default=None, max_length=30)
    engine_size: str | None = Field(default=None, max_length=20)
    dimensions: DimensionsInputDTO | None = None
    vin: str | None = Field(default=None, max_length=50)
    origin: str | None = Field(default=None, max_length=50)
    is_featured: bool = False

    specifications: list[CarSpecificationInputDTO] = []

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Toyota Camry 2020, one owner",
                "description": "Full service history.",
                "type": "USED",
                "category": "SEDAN",
                "make": "Toyota",
                "model": "Camry",
                "year": 2020,
                "mileage": 42000,
                "price": "25000.00",
                "contact_number": "+966500000000",
                "specifications": [{"key": "Sunroof", "value": "Yes"}],
            }
        }
    )


class CarUpdateDTO(BaseModel):
    """
    Partial update of a listing.

    Only the fields present in the payload are changed. ``specifications``,
    when present, replaces the listing's whole specification set.
    """

    title: str | None = Field(default=None, max_length=200)
    description: str | None = None
    type: str | None = None
    category: str | None = None
    make: str | None = Field(default=None, max_length=50)
    model: str | None = Field(default=None, max_length=50)
    year: int | None = Field(default=None, le=MAX_INT)
    mileage: int | None = Field(default=None, le=MAX_INT)
    price: str | None = Field(default=None, pattern=DECIMAL_PATTERN)
    location: str | None = Field(default=None, max_length=100)
    contact_number: str | None = Field(default=None, max_length=30)

    fuel: str | None = Field(default=None, max_length=30)
    transmission: str | None = Field(default=None, max_length=30)
    drive_type: str | None = Field(default=None, max_length=30)
    doors: int | None = Field(default=None, le=MAX_INT)
    passengers: int | None = Field(default=None, le=MAX_INT)
    exterior_color: str | None = Field(default=None, max_length=30)
    interior_color: str | None = Field(default=None, max_length=30)
    engine_size: str | None = Field(default=None, max_length=20)
    dimensions: DimensionsInputDTO | None = None
    vin: str | None = Field(default=None, max_length=50)
    origin: str | None = Field(default=None, max_length=50)
    is_featured: bool | None = None

    specifications: list[CarSpecificationInputDTO] | None = None

    model_config = ConfigDict(
        json_schema_extra={"example": {"price": "23500.00", "is_featured": True}}
    )

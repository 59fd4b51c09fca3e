from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DimensionsDTO(BaseModel):
    length: str | None = None
    width: str | None = None
    height: str | None = None


class CarImageDTO(BaseModel):
    id: int
    car_id: int
    url: str
    is_main: bool
    is_360_view: bool


class CarSpecificationDTO(BaseModel):
    id: int
    car_id: int
    key: str
    value: str


class CarResponseDTO(BaseModel):
    """A listing as returned by every read and write endpoint."""

    id: int
    title: str
    description: str
    type: str
    category: str
    make: str
    model: str
    year: int
    mileage: int | None = None
    price: str = Field(description="Price as decimal string", examples=["25000.00"])
    location: str | None = None
    contact_number: str

    fuel: str | None = None
    transmission: str | None = None
    drive_type: str | None = None
    doors: int | None = None
    passengers: int | None = None
    exterior_color: str | None = None
    interior_color: str | None = None
    engine_size: str | None = None
    dimensions: DimensionsDTO | None = None
    vin: str | None = None
    origin: str | None = None

    views: int
    is_featured: bool
    images: list[CarImageDTO] = []
    specifications: list[CarSpecificationDTO] = []

    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 12,
                "title": "Toyota Camry 2020, one owner",
                "description": "Full service history.",
                "type": "USED",
                "category": "SEDAN",
                "make": "Toyota",
                "model": "Camry",
                "year": 2020,
                "mileage": 42000,
                "price": "25000.00",
                "location": "Riyadh",
                "contact_number": "+966500000000",
                "fuel": "Gasoline",
                "transmission": "Automatic",
                "views": 128,
                "is_featured": False,
                "images": [
                    {
                        "id": 3,
                        "car_id": 12,
                        "url": "/uploads/car-images/1718000000000_front.jpg",
                        "is_main": True,
                        "is_360_view": False,
                    }
                ],
                "specifications": [
                    {"id": 7, "car_id": 12, "key": "Sunroof", "value": "Yes"}
                ],
            }
        }
    )


class CarListResponseDTO(BaseModel):
    data: list[CarResponseDTO]

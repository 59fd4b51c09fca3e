from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from car_market.domain.errors import ValidationError

MIN_MODEL_YEAR = 1900


class CarType(str, Enum):
    NEW = "NEW"
    USED = "USED"


class CarCategory(str, Enum):
    LUXURY = "LUXURY"
    ECONOMY = "ECONOMY"
    SUV = "SUV"
    SPORTS = "SPORTS"
    SEDAN = "SEDAN"
    OTHER = "OTHER"


@dataclass(frozen=True, slots=True)
class Dimensions:
    length: Decimal | None = None
    width: Decimal | None = None
    height: Decimal | None = None

    def is_empty(self) -> bool:
        return self.length is None and self.width is None and self.height is None


@dataclass(frozen=True, slots=True)
class CarImage:
    url: str
    is_main: bool = False
    is_360_view: bool = False
    id: int | None = None
    car_id: int | None = None


@dataclass(frozen=True, slots=True)
class CarSpecification:
    key: str
    value: str
    id: int | None = None
    car_id: int | None = None


@dataclass(frozen=True)
class Car:
    """
    A listing: one car offered for sale.

    ``views`` only ever grows and is incremented by the persistence layer,
    never by read-modify-write here. Images and specifications are owned by
    the listing and are removed with it.
    """

    id: int | None
    make: str
    model: str
    year: int
    price: Decimal
    title: str = ""
    description: str = ""
    type: CarType = CarType.USED
    category: CarCategory = CarCategory.OTHER
    mileage: int | None = None
    location: str | None = None
    contact_number: str = ""

    fuel: str | None = None
    transmission: str | None = None
    drive_type: str | None = None
    doors: int | None = None
    passengers: int | None = None
    exterior_color: str | None = None
    interior_color: str | None = None
    engine_size: str | None = None
    dimensions: Dimensions | None = None
    vin: str | None = None
    origin: str | None = None

    views: int = 0
    is_featured: bool = False
    images: tuple[CarImage, ...] = ()
    specifications: tuple[CarSpecification, ...] = ()

    created_at: datetime | None = None
    updated_at: datetime | None = None

    def validate(self, current_year: int) -> None:
        """
        Check the write-time invariants of a listing.

        Args:
            current_year: Calendar year used for the upper model-year bound
                (a listing may be at most one model year ahead)

        Raises:
            ValidationError: With one entry per failing field
        """
        errors: list[dict[str, str]] = []

        for field_name in ("title", "description", "make", "model", "contact_number"):
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value.strip():
                errors.append(_field_error(field_name, "Must not be blank", "REQUIRED"))

        if not isinstance(self.year, int) or isinstance(self.year, bool):
            errors.append(_field_error("year", "Must be an integer", "INVALID_VALUE"))
        elif not MIN_MODEL_YEAR <= self.year <= current_year + 1:
            errors.append(
                _field_error(
                    "year",
                    f"Must be between {MIN_MODEL_YEAR} and {current_year + 1}",
                    "OUT_OF_RANGE",
                )
            )

        # Guardrail: prevent float leakage past the boundary
        if not isinstance(self.price, Decimal) or not self.price.is_finite():
            errors.append(_field_error("price", "Must be a Decimal", "INVALID_DECIMAL"))
        elif self.price <= 0:
            errors.append(_field_error("price", "Must be greater than 0", "INVALID_VALUE"))

        if not isinstance(self.type, CarType):
            allowed = ", ".join(t.value for t in CarType)
            errors.append(_field_error("type", f"Must be one of {allowed}", "INVALID_VALUE"))

        if not isinstance(self.category, CarCategory):
            allowed = ", ".join(c.value for c in CarCategory)
            errors.append(
                _field_error("category", f"Must be one of {allowed}", "INVALID_VALUE")
            )

        for field_name in ("doors", "passengers"):
            value = getattr(self, field_name)
            if value is not None and value <= 0:
                errors.append(_field_error(field_name, "Must be greater than 0", "INVALID_VALUE"))

        if self.dimensions is not None:
            for axis in ("length", "width", "height"):
                value = getattr(self.dimensions, axis)
                if value is not None and value <= 0:
                    errors.append(
                        _field_error(
                            f"dimensions.{axis}", "Must be greater than 0", "INVALID_VALUE"
                        )
                    )

        if errors:
            raise ValidationError(errors=errors)


def _field_error(field: str, message: str, code: str) -> dict[str, str]:
    return {"field": field, "message": message, "code": code}

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, TypeVar

from car_market.domain.car import (
    Car,
    CarCategory,
    CarImage,
    CarSpecification,
    CarType,
    Dimensions,
)
from car_market.domain.errors import ValidationError
from car_market.entrypoints.http.dtos.car import (
    CarImageDTO,
    CarListResponseDTO,
    CarResponseDTO,
    CarSpecificationDTO,
    DimensionsDTO,
)
from car_market.entrypoints.http.dtos.car_admin import (
    CarCreateDTO,
    CarSpecificationInputDTO,
    CarUpdateDTO,
    DimensionsInputDTO,
)
from car_market.use_cases.manage_cars import UpdateCarRequest

E = TypeVar("E", bound=Enum)

# Optional free-text attributes; blank input is stored as unknown
OPTIONAL_TEXT_FIELDS: tuple[str, ...] = (
    "location",
    "fuel",
    "transmission",
    "drive_type",
    "exterior_color",
    "interior_color",
    "engine_size",
    "vin",
    "origin",
)


class CarMapper:
    """Maps between REST DTOs and the Car domain entity."""

    @staticmethod
    def to_domain(dto: CarCreateDTO) -> Car:
        """
        Converts a create payload to a new (unsaved) Car.

        Handles string → Decimal and string → enum conversion at the boundary.

        Raises:
            ValidationError: If price, type or category cannot be converted
        """
        errors: list[dict[str, str]] = []

        price = _to_decimal("price", dto.price, errors)
        car_type = _to_enum("type", dto.type, CarType, errors)
        category = _to_enum("category", dto.category, CarCategory, errors)

        if errors:
            raise ValidationError(errors=errors)

        return Car(
            id=None,
            title=dto.title,
            description=dto.description,
            type=car_type,
            category=category,
            make=dto.make,
            model=dto.model,
            year=dto.year,
            mileage=dto.mileage,
            price=price,
            location=_optional_text(dto.location),
            contact_number=dto.contact_number,
            fuel=_optional_text(dto.fuel),
            transmission=_optional_text(dto.transmission),
            drive_type=_optional_text(dto.drive_type),
            doors=dto.doors,
            passengers=dto.passengers,
            exterior_color=_optional_text(dto.exterior_color),
            interior_color=_optional_text(dto.interior_color),
            engine_size=_optional_text(dto.engine_size),
            dimensions=_to_dimensions(dto.dimensions),
            vin=_optional_text(dto.vin),
            origin=_optional_text(dto.origin),
            is_featured=dto.is_featured,
            specifications=CarMapper.to_domain_specifications(dto.specifications),
        )

    @staticmethod
    def to_update_request(car_id: int, dto: CarUpdateDTO) -> UpdateCarRequest:
        """
        Builds a partial update from the fields present in the payload.

        Raises:
            ValidationError: If price, type or category cannot be converted
        """
        supplied: dict[str, Any] = {
            name: getattr(dto, name) for name in dto.model_fields_set
        }
        specifications = supplied.pop("specifications", None)

        errors: list[dict[str, str]] = []
        changes: dict[str, Any] = dict(supplied)

        if supplied.get("price") is not None:
            changes["price"] = _to_decimal("price", supplied["price"], errors)
        if supplied.get("type") is not None:
            changes["type"] = _to_enum("type", supplied["type"], CarType, errors)
        if supplied.get("category") is not None:
            changes["category"] = _to_enum("category", supplied["category"], CarCategory, errors)
        if "dimensions" in supplied:
            changes["dimensions"] = _to_dimensions(supplied["dimensions"])
        for name in OPTIONAL_TEXT_FIELDS:
            if name in supplied:
                changes[name] = _optional_text(supplied[name])

        if errors:
            raise ValidationError(errors=errors)

        return UpdateCarRequest(
            car_id=car_id,
            changes=changes,
            specifications=(
                None
                if specifications is None
                else CarMapper.to_domain_specifications(specifications)
            ),
        )

    @staticmethod
    def to_domain_specifications(
        dtos: list[CarSpecificationInputDTO],
    ) -> tuple[CarSpecification, ...]:
        return tuple(CarSpecification(key=spec.key, value=spec.value) for spec in dtos)

    @staticmethod
    def to_response(car: Car) -> CarResponseDTO:
        """
        Converts domain Car entity to REST response DTO.

        Handles Decimal → str conversion at the boundary.
        """
        return CarResponseDTO(
            id=car.id,
            title=car.title,
            description=car.description,
            type=car.type.value,
            category=car.category.value,
            make=car.make,
            model=car.model,
            year=car.year,
            mileage=car.mileage,
            price=str(car.price),  # Decimal → str at boundary
            location=car.location,
            contact_number=car.contact_number,
            fuel=car.fuel,
            transmission=car.transmission,
            drive_type=car.drive_type,
            doors=car.doors,
            passengers=car.passengers,
            exterior_color=car.exterior_color,
            interior_color=car.interior_color,
            engine_size=car.engine_size,
            dimensions=_dimensions_response(car.dimensions),
            vin=car.vin,
            origin=car.origin,
            views=car.views,
            is_featured=car.is_featured,
            images=[CarMapper.to_image_response(image) for image in car.images],
            specifications=[CarMapper.to_specification_response(spec) for spec in car.specifications],
            created_at=car.created_at,
            updated_at=car.updated_at,
        )

    @staticmethod
    def to_list_response(cars: list[Car]) -> CarListResponseDTO:
        return CarListResponseDTO(data=[CarMapper.to_response(car) for car in cars])

    @staticmethod
    def to_image_response(image: CarImage) -> CarImageDTO:
        return CarImageDTO(
            id=image.id,
            car_id=image.car_id,
            url=image.url,
            is_main=image.is_main,
            is_360_view=image.is_360_view,
        )

    @staticmethod
    def to_specification_response(spec: CarSpecification) -> CarSpecificationDTO:
        return CarSpecificationDTO(id=spec.id, car_id=spec.car_id, key=spec.key, value=spec.value)


def _to_decimal(field: str, value: str, errors: list[dict[str, str]]) -> Decimal:
    try:
        return Decimal(value)
    except (InvalidOperation, ValueError):
        errors.append(
            {
                "field": field,
                "message": f"Must be a valid decimal: {value}",
                "code": "INVALID_DECIMAL",
            }
        )
        return Decimal("0")  # Placeholder to continue validation


def _to_enum(
    field: str, value: str, enum_type: type[E], errors: list[dict[str, str]]
) -> E | None:
    try:
        return enum_type(value.strip().upper())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        errors.append(
            {"field": field, "message": f"Must be one of {allowed}", "code": "INVALID_VALUE"}
        )
        return None


def _optional_text(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


def _to_dimensions(dto: DimensionsInputDTO | None) -> Dimensions | None:
    if dto is None:
        return None

    dimensions = Dimensions(
        length=Decimal(dto.length) if dto.length else None,
        width=Decimal(dto.width) if dto.width else None,
        height=Decimal(dto.height) if dto.height else None,
    )
    return None if dimensions.is_empty() else dimensions


def _dimensions_response(dimensions: Dimensions | None) -> DimensionsDTO | None:
    if dimensions is None:
        return None

    return DimensionsDTO(
        length=None if dimensions.length is None else str(dimensions.length),
        width=None if dimensions.width is None else str(dimensions.width),
        height=None if dimensions.height is None else str(dimensions.height),
    )

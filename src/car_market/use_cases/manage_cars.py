"""Listing create / update / delete use cases."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from datetime import date
from typing import Any, Callable, Mapping, Sequence

from car_market.domain.car import Car, CarSpecification
from car_market.domain.errors import NotFoundError, ValidationError
from car_market.ports.car_repository import CarRepository
from car_market.ports.file_storage import FileStorage

logger = logging.getLogger(__name__)

# Fields maintained by persistence; never changed through an update
_READ_ONLY_FIELDS = frozenset(
    {"id", "views", "images", "specifications", "created_at", "updated_at"}
)

UPDATABLE_FIELDS: frozenset[str] = (
    frozenset(field.name for field in fields(Car)) - _READ_ONLY_FIELDS
)


@dataclass(frozen=True, slots=True)
class CreateCarRequest:
    car: Car


@dataclass(frozen=True, slots=True)
class UpdateCarRequest:
    """
    Partial update of a listing.

    ``changes`` holds only the fields the caller supplied. ``specifications``
    replaces the whole set when not ``None``; an empty sequence clears it.
    """

    car_id: int
    changes: Mapping[str, Any]
    specifications: Sequence[CarSpecification] | None = None


@dataclass(frozen=True, slots=True)
class DeleteCarRequest:
    car_id: int


class CreateCar:
    def __init__(
        self,
        car_repository: CarRepository,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._repository = car_repository
        self._clock = clock

    def execute(self, request: CreateCarRequest) -> Car:
        """
        Validate and persist a new listing.

        Raises:
            ValidationError: If the listing breaks a write-time invariant
        """
        car = replace(request.car, id=None, views=0)
        car.validate(current_year=self._clock().year)

        created = self._repository.create(car)

        logger.info("Car listing created", extra={"car_id": created.id})
        return created


class UpdateCar:
    def __init__(
        self,
        car_repository: CarRepository,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._repository = car_repository
        self._clock = clock

    def execute(self, request: UpdateCarRequest) -> Car:
        """
        Merge the supplied changes into the stored listing.

        Raises:
            NotFoundError: If the listing doesn't exist
            ValidationError: If a change targets a read-only field or the
                merged listing breaks a write-time invariant
        """
        unknown = sorted(set(request.changes) - UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(
                errors=[
                    {"field": name, "message": "Field cannot be updated", "code": "READ_ONLY"}
                    for name in unknown
                ]
            )

        existing = self._repository.get_by_id(request.car_id)
        if existing is None:
            raise NotFoundError(resource="Car", identifier=request.car_id)

        merged = replace(existing, **request.changes)
        merged.validate(current_year=self._clock().year)

        if request.specifications is not None:
            _validate_specifications(request.specifications)

        updated = self._repository.update(merged)

        if request.specifications is not None:
            self._repository.replace_specifications(request.car_id, request.specifications)
            # Re-read so the response carries the new specification ids
            updated = self._repository.get_by_id(request.car_id) or updated

        logger.info(
            "Car listing updated",
            extra={"car_id": request.car_id, "fields": sorted(request.changes)},
        )
        return updated


class DeleteCar:
    """
    Remove a listing together with its images and specifications.

    Image files are deleted from storage before the row so a storage failure
    leaves the listing intact.
    """

    def __init__(self, car_repository: CarRepository, file_storage: FileStorage) -> None:
        self._repository = car_repository
        self._storage = file_storage

    def execute(self, request: DeleteCarRequest) -> None:
        car = self._repository.get_by_id(request.car_id)
        if car is None:
            raise NotFoundError(resource="Car", identifier=request.car_id)

        for image in car.images:
            self._storage.delete(image.url)

        if not self._repository.delete(request.car_id):
            raise NotFoundError(resource="Car", identifier=request.car_id)

        logger.info(
            "Car listing deleted",
            extra={"car_id": request.car_id, "image_count": len(car.images)},
        )


def _validate_specifications(specifications: Sequence[CarSpecification]) -> None:
    errors = [
        {
            "field": f"specifications[{index}]",
            "message": "Key and value are required",
            "code": "REQUIRED",
        }
        for index, spec in enumerate(specifications)
        if not spec.key.strip() or not spec.value.strip()
    ]
    if errors:
        raise ValidationError(errors=errors)

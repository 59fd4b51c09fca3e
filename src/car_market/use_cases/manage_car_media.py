"""Image and specification management for a listing."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from car_market.domain.car import CarImage, CarSpecification
from car_market.domain.errors import DomainError, NotFoundError, ValidationError
from car_market.ports.car_repository import CarRepository
from car_market.ports.file_storage import FileStorage

logger = logging.getLogger(__name__)

CAR_IMAGES_SUBDIRECTORY = "car-images"

ALLOWED_IMAGE_TYPES: frozenset[str] = frozenset(
    {
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/webp",
        "application/octet-stream",
    }
)


@dataclass(frozen=True, slots=True)
class AddCarImageRequest:
    car_id: int
    filename: str
    content: bytes
    content_type: str | None = None
    is_main: bool = False
    is_360_view: bool = False


@dataclass(frozen=True, slots=True)
class DeleteCarImageRequest:
    image_id: int


@dataclass(frozen=True, slots=True)
class AddCarSpecificationRequest:
    car_id: int
    key: str
    value: str


@dataclass(frozen=True, slots=True)
class DeleteCarSpecificationRequest:
    spec_id: int


class AddCarImage:
    """
    Store an uploaded image file and attach it to a listing.

    Responsibilities:
    - Reject empty, oversized or non-image uploads
    - Write the file under ``car-images`` through FileStorage
    - Persist the image row; the file is removed again if that fails
    """

    def __init__(
        self,
        car_repository: CarRepository,
        file_storage: FileStorage,
        max_bytes: int,
    ) -> None:
        self._repository = car_repository
        self._storage = file_storage
        self._max_bytes = max_bytes

    def execute(self, request: AddCarImageRequest) -> CarImage:
        """
        Raises:
            ValidationError: If the upload is missing, too large or not an image
            NotFoundError: If the listing doesn't exist
        """
        self._validate_upload(request)

        if self._repository.get_by_id(request.car_id) is None:
            raise NotFoundError(resource="Car", identifier=request.car_id)

        stored = self._storage.save(
            request.filename,
            request.content,
            subdirectory=CAR_IMAGES_SUBDIRECTORY,
            content_type=request.content_type,
        )

        try:
            image = self._repository.add_image(
                request.car_id,
                CarImage(
                    url=stored.url,
                    is_main=request.is_main,
                    is_360_view=request.is_360_view,
                ),
            )
        except DomainError:
            self._storage.delete(stored.url)
            raise

        logger.info(
            "Car image added",
            extra={"car_id": request.car_id, "image_id": image.id, "url": image.url},
        )
        return image

    def _validate_upload(self, request: AddCarImageRequest) -> None:
        if not request.content:
            raise ValidationError(
                errors=[{"field": "file", "message": "No image file uploaded", "code": "REQUIRED"}]
            )
        if len(request.content) > self._max_bytes:
            raise ValidationError(
                errors=[
                    {
                        "field": "file",
                        "message": f"File exceeds maximum size of {self._max_bytes} bytes",
                        "code": "FILE_TOO_LARGE",
                    }
                ]
            )
        if request.content_type is not None and request.content_type not in ALLOWED_IMAGE_TYPES:
            allowed = ", ".join(sorted(ALLOWED_IMAGE_TYPES))
            raise ValidationError(
                errors=[
                    {
                        "field": "file",
                        "message": f"Unsupported file type; allowed: {allowed}",
                        "code": "UNSUPPORTED_MEDIA_TYPE",
                    }
                ]
            )


class DeleteCarImage:
    def __init__(self, car_repository: CarRepository, file_storage: FileStorage) -> None:
        self._repository = car_repository
        self._storage = file_storage

    def execute(self, request: DeleteCarImageRequest) -> None:
        image = self._repository.get_image(request.image_id)
        if image is None:
            raise NotFoundError(resource="CarImage", identifier=request.image_id)

        self._storage.delete(image.url)
        self._repository.delete_image(request.image_id)

        logger.info("Car image deleted", extra={"image_id": request.image_id, "url": image.url})


class AddCarSpecification:
    def __init__(self, car_repository: CarRepository) -> None:
        self._repository = car_repository

    def execute(self, request: AddCarSpecificationRequest) -> CarSpecification:
        """
        Raises:
            ValidationError: If key or value is blank
            NotFoundError: If the listing doesn't exist
        """
        errors = [
            {"field": name, "message": "Must not be blank", "code": "REQUIRED"}
            for name in ("key", "value")
            if not getattr(request, name).strip()
        ]
        if errors:
            raise ValidationError(errors=errors)

        if self._repository.get_by_id(request.car_id) is None:
            raise NotFoundError(resource="Car", identifier=request.car_id)

        spec = self._repository.add_specification(
            request.car_id,
            CarSpecification(key=request.key.strip(), value=request.value.strip()),
        )

        logger.info(
            "Car specification added",
            extra={"car_id": request.car_id, "spec_id": spec.id, "key": spec.key},
        )
        return spec


class DeleteCarSpecification:
    def __init__(self, car_repository: CarRepository) -> None:
        self._repository = car_repository

    def execute(self, request: DeleteCarSpecificationRequest) -> None:
        if not self._repository.delete_specification(request.spec_id):
            raise NotFoundError(resource="CarSpecification", identifier=request.spec_id)

        logger.info("Car specification deleted", extra={"spec_id": request.spec_id})

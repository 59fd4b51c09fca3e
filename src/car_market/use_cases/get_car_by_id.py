"""Get car by ID use case."""

from __future__ import annotations

from dataclasses import dataclass

from car_market.domain.car import Car
from car_market.domain.errors import NotFoundError
from car_market.ports.car_repository import CarRepository


@dataclass(frozen=True, slots=True)
class GetCarByIdRequest:
    """Request to get a car by ID."""

    car_id: int


@dataclass(frozen=True, slots=True)
class GetCarByIdResponse:
    """Response containing the requested car."""

    car: Car


class GetCarById:
    """
    Use case for showing a single listing.

    Responsibilities:
    - Count the visit with an atomic views increment
    - Load the listing with its images and specifications
    - Raise NotFoundError if the listing doesn't exist
    """

    def __init__(self, car_repository: CarRepository) -> None:
        self._repository = car_repository

    def execute(self, request: GetCarByIdRequest) -> GetCarByIdResponse:
        """
        Execute the get car by ID use case.

        Raises:
            NotFoundError: If car with given ID doesn't exist
        """
        if not self._repository.increment_views(request.car_id):
            raise NotFoundError(resource="Car", identifier=request.car_id)

        car = self._repository.get_by_id(request.car_id)

        # Deleted between the increment and the read
        if car is None:
            raise NotFoundError(resource="Car", identifier=request.car_id)

        return GetCarByIdResponse(car=car)

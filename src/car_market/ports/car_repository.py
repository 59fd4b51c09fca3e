from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from car_market.domain.car import Car, CarImage, CarSpecification
from car_market.domain.ordering import Ordering
from car_market.domain.predicates import Criterion


class CarRepository(ABC):
    """
    Port for listing persistence.

    Search is split into ``count`` and ``find_many`` so pagination metadata is
    computed by the caller; adapters only translate criteria and ordering.

    Contract (Preconditions):
        - criteria, ordering, offset and limit are built and validated by the
          caller (UseCase); implementations do not re-validate
        - ``increment_views`` must be a single atomic column increment, never
          a read-modify-write
    """

    @abstractmethod
    def count(self, criteria: Sequence[Criterion]) -> int:
        """Number of listings matching all criteria."""
        ...

    @abstractmethod
    def find_many(
        self,
        criteria: Sequence[Criterion],
        ordering: Ordering,
        offset: int,
        limit: int,
    ) -> list[Car]:
        """
        Listings matching all criteria, ordered, then sliced by offset/limit.

        Args:
            criteria: AND-ed criteria - pre-built
            ordering: Sort keys applied in order
            offset: Rows to skip
            limit: Maximum rows to return

        Returns:
            Listings with their images and specifications loaded
        """
        ...

    @abstractmethod
    def get_by_id(self, car_id: int) -> Car | None: ...

    @abstractmethod
    def increment_views(self, car_id: int) -> bool:
        """Atomically add one to ``views``. Returns False when the listing does not exist."""
        ...

    @abstractmethod
    def create(self, car: Car) -> Car:
        """Persist a new listing (with its images and specifications) and return it with ids."""
        ...

    @abstractmethod
    def update(self, car: Car) -> Car:
        """Overwrite the scalar fields of an existing listing. Owned collections are untouched."""
        ...

    @abstractmethod
    def replace_specifications(
        self, car_id: int, specifications: Sequence[CarSpecification]
    ) -> None: ...

    @abstractmethod
    def delete(self, car_id: int) -> bool:
        """Delete a listing and, by cascade, its images and specifications."""
        ...

    @abstractmethod
    def add_image(self, car_id: int, image: CarImage) -> CarImage: ...

    @abstractmethod
    def get_image(self, image_id: int) -> CarImage | None: ...

    @abstractmethod
    def delete_image(self, image_id: int) -> bool: ...

    @abstractmethod
    def add_specification(self, car_id: int, specification: CarSpecification) -> CarSpecification: ...

    @abstractmethod
    def delete_specification(self, spec_id: int) -> bool: ...

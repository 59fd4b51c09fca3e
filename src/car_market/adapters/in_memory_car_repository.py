from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from itertools import count
from typing import Any, Callable, Iterable, Sequence

from car_market.domain.car import Car, CarImage, CarSpecification
from car_market.domain.ordering import Ordering, SortDirection
from car_market.domain.predicates import Criterion, matches
from car_market.ports.car_repository import CarRepository


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryCarRepository(CarRepository):
    """
    Canonical contract implementation for tests.

    - Stores cars in insertion order, assigning ids from 1 when missing
    - Applies AND-semantics filtering via ``predicates.matches``
    - Sorts by every ordering key (stable), then slices offset/limit
    """

    def __init__(
        self,
        cars: Iterable[Car] = (),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._clock = clock
        self._cars: dict[int, Car] = {}
        self._car_ids = count(1)
        self._image_ids = count(1)
        self._spec_ids = count(1)

        for car in cars:
            if car.id is None:
                self.create(car)
            else:
                self._cars[car.id] = car
                self._car_ids = count(max(self._cars) + 1)
                self._image_ids = count(_next_id(self._image_ids, car.images))
                self._spec_ids = count(_next_id(self._spec_ids, car.specifications))

    def count(self, criteria: Sequence[Criterion]) -> int:
        return sum(1 for car in self._cars.values() if matches(car, criteria))

    def find_many(
        self,
        criteria: Sequence[Criterion],
        ordering: Ordering,
        offset: int,
        limit: int,
    ) -> list[Car]:
        found = [car for car in self._cars.values() if matches(car, criteria)]

        # Sort by the least significant key first; list.sort is stable
        for key in reversed(ordering.keys):
            found.sort(
                key=lambda car, field=key.field: _sort_value(getattr(car, field)),
                reverse=key.direction is SortDirection.DESC,
            )

        return found[offset : offset + limit]

    def get_by_id(self, car_id: int) -> Car | None:
        return self._cars.get(car_id)

    def increment_views(self, car_id: int) -> bool:
        car = self._cars.get(car_id)
        if car is None:
            return False
        self._cars[car_id] = replace(car, views=car.views + 1)
        return True

    def create(self, car: Car) -> Car:
        car_id = next(self._car_ids)
        now = self._clock()
        stored = replace(
            car,
            id=car_id,
            images=tuple(self._with_image_id(car_id, image) for image in car.images),
            specifications=tuple(
                self._with_spec_id(car_id, spec) for spec in car.specifications
            ),
            created_at=car.created_at or now,
            updated_at=now,
        )
        self._cars[car_id] = stored
        return stored

    def update(self, car: Car) -> Car:
        if car.id is None:
            raise ValueError("Cannot update a car without an id")
        existing = self._cars[car.id]
        stored = replace(
            car,
            views=existing.views,
            images=existing.images,
            specifications=existing.specifications,
            created_at=existing.created_at,
            updated_at=self._clock(),
        )
        self._cars[car.id] = stored
        return stored

    def replace_specifications(
        self, car_id: int, specifications: Sequence[CarSpecification]
    ) -> None:
        car = self._cars[car_id]
        self._cars[car_id] = replace(
            car,
            specifications=tuple(self._with_spec_id(car_id, spec) for spec in specifications),
        )

    def delete(self, car_id: int) -> bool:
        return self._cars.pop(car_id, None) is not None

    def add_image(self, car_id: int, image: CarImage) -> CarImage:
        car = self._cars[car_id]
        stored = self._with_image_id(car_id, image)
        self._cars[car_id] = replace(car, images=car.images + (stored,))
        return stored

    def get_image(self, image_id: int) -> CarImage | None:
        for car in self._cars.values():
            for image in car.images:
                if image.id == image_id:
                    return image
        return None

    def delete_image(self, image_id: int) -> bool:
        image = self.get_image(image_id)
        if image is None or image.car_id is None:
            return False
        car = self._cars[image.car_id]
        self._cars[image.car_id] = replace(
            car, images=tuple(i for i in car.images if i.id != image_id)
        )
        return True

    def add_specification(self, car_id: int, specification: CarSpecification) -> CarSpecification:
        car = self._cars[car_id]
        stored = self._with_spec_id(car_id, specification)
        self._cars[car_id] = replace(car, specifications=car.specifications + (stored,))
        return stored

    def delete_specification(self, spec_id: int) -> bool:
        for car_id, car in self._cars.items():
            remaining = tuple(s for s in car.specifications if s.id != spec_id)
            if len(remaining) != len(car.specifications):
                self._cars[car_id] = replace(car, specifications=remaining)
                return True
        return False

    def _with_image_id(self, car_id: int, image: CarImage) -> CarImage:
        return replace(image, id=next(self._image_ids), car_id=car_id)

    def _with_spec_id(self, car_id: int, spec: CarSpecification) -> CarSpecification:
        return replace(spec, id=next(self._spec_ids), car_id=car_id)


def _next_id(ids: count, children: Iterable[CarImage] | Iterable[CarSpecification]) -> int:
    # Consumes one value from ids; seeded children may already hold higher ids
    return max([next(ids), *((child.id or 0) + 1 for child in children)])


def _sort_value(value: Any) -> tuple[bool, Any]:
    # NULLs sort before any value
    return (value is not None, value)

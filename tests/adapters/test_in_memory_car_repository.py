"""Contract tests for InMemoryCarRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from car_market.adapters.in_memory_car_repository import InMemoryCarRepository
from car_market.domain.car import Car, CarImage, CarSpecification
from car_market.domain.criteria import CatalogFilters, NumericRange
from car_market.domain.ordering import DEFAULT_ORDERING, MOST_VIEWED_ORDERING, resolve_ordering
from car_market.domain.predicates import build_predicates

FIXED_NOW = datetime(2025, 1, 1, 12, 0, 0)


def _car(car_id: int | None, price: str, **overrides: object) -> Car:
    values: dict[str, object] = {
        "id": car_id,
        "make": "Toyota",
        "model": "Camry",
        "year": 2020,
        "price": Decimal(price),
    }
    values.update(overrides)
    return Car(**values)  # type: ignore[arg-type]


@pytest.fixture()
def repository() -> InMemoryCarRepository:
    return InMemoryCarRepository(
        cars=[
            _car(1, "30000", created_at=datetime(2024, 1, 1), views=5),
            _car(2, "10000", created_at=datetime(2024, 3, 1), views=50, model="Corolla"),
            _car(3, "20000", created_at=datetime(2024, 2, 1), views=5, make="Honda"),
        ],
        clock=lambda: FIXED_NOW,
    )


# ==============================================================================
# Search
# ==============================================================================


def test_count_and_find_apply_all_criteria(repository: InMemoryCarRepository) -> None:
    criteria = build_predicates(CatalogFilters(make="Toyota"))

    assert repository.count(criteria) == 2
    found = repository.find_many(criteria, DEFAULT_ORDERING, offset=0, limit=10)
    assert [car.id for car in found] == [2, 1]


def test_price_asc_ordering(repository: InMemoryCarRepository) -> None:
    found = repository.find_many([], resolve_ordering("price_asc"), offset=0, limit=10)

    assert [car.price for car in found] == [Decimal("10000"), Decimal("20000"), Decimal("30000")]


def test_default_ordering_is_newest_first(repository: InMemoryCarRepository) -> None:
    found = repository.find_many([], resolve_ordering("bogus"), offset=0, limit=10)

    assert [car.id for car in found] == [2, 3, 1]


def test_ties_are_broken_by_id(repository: InMemoryCarRepository) -> None:
    found = repository.find_many([], MOST_VIEWED_ORDERING, offset=0, limit=10)

    assert [car.id for car in found] == [2, 1, 3]


def test_offset_and_limit_slice_after_ordering(repository: InMemoryCarRepository) -> None:
    found = repository.find_many([], resolve_ordering("price_asc"), offset=1, limit=1)

    assert [car.id for car in found] == [3]


def test_page_past_the_end_is_empty(repository: InMemoryCarRepository) -> None:
    assert repository.find_many([], DEFAULT_ORDERING, offset=30, limit=10) == []


def test_price_range_filter(repository: InMemoryCarRepository) -> None:
    criteria = build_predicates(
        CatalogFilters(price_range=NumericRange(Decimal("15000"), Decimal("30000")))
    )

    assert repository.count(criteria) == 2


# ==============================================================================
# Views
# ==============================================================================


def test_increment_views(repository: InMemoryCarRepository) -> None:
    assert repository.increment_views(1) is True

    car = repository.get_by_id(1)
    assert car is not None
    assert car.views == 6


def test_increment_views_unknown_car(repository: InMemoryCarRepository) -> None:
    assert repository.increment_views(999) is False


# ==============================================================================
# Writes
# ==============================================================================


def test_create_assigns_ids_and_timestamps(repository: InMemoryCarRepository) -> None:
    created = repository.create(
        _car(
            None,
            "15000",
            images=(CarImage(url="/uploads/car-images/a.jpg"),),
            specifications=(CarSpecification(key="Sunroof", value="Yes"),),
        )
    )

    assert created.id == 4
    assert created.created_at == FIXED_NOW
    assert created.updated_at == FIXED_NOW
    assert created.images[0].id is not None
    assert created.images[0].car_id == 4
    assert created.specifications[0].car_id == 4


def test_update_keeps_counters_and_collections(repository: InMemoryCarRepository) -> None:
    repository.add_specification(1, CarSpecification(key="Sunroof", value="Yes"))
    existing = repository.get_by_id(1)
    assert existing is not None

    updated = repository.update(_car(1, "28000", views=0))

    assert updated.price == Decimal("28000")
    assert updated.views == 5
    assert updated.specifications == existing.specifications
    assert updated.created_at == existing.created_at


def test_replace_specifications(repository: InMemoryCarRepository) -> None:
    repository.add_specification(1, CarSpecification(key="Sunroof", value="Yes"))

    repository.replace_specifications(1, [CarSpecification(key="Seats", value="Leather")])

    car = repository.get_by_id(1)
    assert car is not None
    assert [(s.key, s.value) for s in car.specifications] == [("Seats", "Leather")]


def test_delete(repository: InMemoryCarRepository) -> None:
    assert repository.delete(1) is True
    assert repository.get_by_id(1) is None
    assert repository.delete(1) is False


def test_images_lifecycle(repository: InMemoryCarRepository) -> None:
    image = repository.add_image(2, CarImage(url="/uploads/car-images/b.jpg", is_main=True))

    assert repository.get_image(image.id) == image  # type: ignore[arg-type]
    assert repository.delete_image(image.id) is True  # type: ignore[arg-type]
    assert repository.get_image(image.id) is None  # type: ignore[arg-type]
    assert repository.delete_image(image.id) is False  # type: ignore[arg-type]


def test_delete_specification(repository: InMemoryCarRepository) -> None:
    spec = repository.add_specification(3, CarSpecification(key="Color", value="Red"))

    assert repository.delete_specification(spec.id) is True  # type: ignore[arg-type]
    assert repository.delete_specification(spec.id) is False  # type: ignore[arg-type]

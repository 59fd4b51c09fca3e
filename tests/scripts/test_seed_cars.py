"""Tests for the development seed data generator (no database needed)."""

from __future__ import annotations

import importlib.util
import random
from pathlib import Path
from types import ModuleType

import pytest

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "seed_cars.py"
CURRENT_YEAR = 2025


@pytest.fixture(scope="module")
def seed_module() -> ModuleType:
    spec = importlib.util.spec_from_file_location("seed_cars", SCRIPT)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_generated_cars_pass_write_validation(seed_module: ModuleType) -> None:
    random.seed(7)

    for _ in range(100):
        car = seed_module.generate_car(CURRENT_YEAR)
        car.validate(CURRENT_YEAR)
        assert car.id is None


def test_generation_is_deterministic(seed_module: ModuleType) -> None:
    random.seed(42)
    first = [seed_module.generate_car(CURRENT_YEAR) for _ in range(5)]
    random.seed(42)
    second = [seed_module.generate_car(CURRENT_YEAR) for _ in range(5)]

    assert first == second


def test_premium_cars_cost_more_than_economy_on_average(seed_module: ModuleType) -> None:
    random.seed(3)

    def average(make: str) -> float:
        prices = [seed_module.calculate_price(make, CURRENT_YEAR, CURRENT_YEAR) for _ in range(50)]
        return float(sum(prices) / len(prices))

    assert average("Porsche") > average("Kia")


def test_price_never_drops_below_floor(seed_module: ModuleType) -> None:
    random.seed(1)

    price = seed_module.calculate_price("Kia", CURRENT_YEAR - 30, CURRENT_YEAR)

    assert price >= 3000

#!/usr/bin/env python3
"""
Seed the listings tables with deterministic random data.

Features:
- Deterministic: fixed seed → same dataset every run
- Idempotent: safe to run multiple times (clears before seeding)
- Realism-lite: prices correlated with year + make band
- Listings go through the repository, so write-time validation applies

Usage:
    python scripts/seed_cars.py
"""

from __future__ import annotations

import random
import sys
from datetime import date
from decimal import Decimal

from sqlalchemy import delete

from car_market.adapters.sqlalchemy_car_repository import SqlAlchemyCarRepository
from car_market.domain.car import Car, CarCategory, CarSpecification, CarType, Dimensions
from car_market.infra.db.models.car import CarRow
from car_market.infra.db.session import get_session


# ==============================================================================
# Configuration
# ==============================================================================

RANDOM_SEED = 42
NUM_CARS = 50
FEATURED_SHARE = 0.2


# ==============================================================================
# Market Data
# ==============================================================================

MAKES = {
    "economy": {
        "makes": ["Nissan", "Kia", "Hyundai", "Suzuki"],
        "base_price_min": Decimal("12000"),
        "base_price_max": Decimal("22000"),
    },
    "mid_range": {
        "makes": ["Toyota", "Honda", "Mazda", "Ford"],
        "base_price_min": Decimal("22000"),
        "base_price_max": Decimal("40000"),
    },
    "premium": {
        "makes": ["BMW", "Mercedes-Benz", "Lexus", "Porsche"],
        "base_price_min": Decimal("45000"),
        "base_price_max": Decimal("120000"),
    },
}

# (model, category, doors, passengers)
MODELS_BY_MAKE = {
    "Nissan": [("Sunny", CarCategory.ECONOMY, 4, 5), ("Patrol", CarCategory.SUV, 5, 8)],
    "Kia": [("Rio", CarCategory.ECONOMY, 4, 5), ("Sportage", CarCategory.SUV, 5, 5)],
    "Hyundai": [("Accent", CarCategory.ECONOMY, 4, 5), ("Tucson", CarCategory.SUV, 5, 5)],
    "Suzuki": [("Swift", CarCategory.ECONOMY, 5, 5), ("Jimny", CarCategory.SUV, 3, 4)],
    "Toyota": [("Camry", CarCategory.SEDAN, 4, 5), ("Land Cruiser", CarCategory.SUV, 5, 8)],
    "Honda": [("Accord", CarCategory.SEDAN, 4, 5), ("CR-V", CarCategory.SUV, 5, 5)],
    "Mazda": [("Mazda6", CarCategory.SEDAN, 4, 5), ("MX-5", CarCategory.SPORTS, 2, 2)],
    "Ford": [("Mustang", CarCategory.SPORTS, 2, 4), ("Explorer", CarCategory.SUV, 5, 7)],
    "BMW": [("5 Series", CarCategory.LUXURY, 4, 5), ("X5", CarCategory.SUV, 5, 5)],
    "Mercedes-Benz": [("S-Class", CarCategory.LUXURY, 4, 5), ("G-Class", CarCategory.SUV, 5, 5)],
    "Lexus": [("LS", CarCategory.LUXURY, 4, 5), ("LX", CarCategory.SUV, 5, 7)],
    "Porsche": [("911", CarCategory.SPORTS, 2, 4), ("Cayenne", CarCategory.SUV, 5, 5)],
}

TRANSMISSIONS = ["Manual", "Automatic", "CVT"]
FUEL_TYPES = ["Petrol", "Diesel", "Hybrid", "Electric"]
DRIVE_TYPES = ["FWD", "RWD", "AWD", "4WD"]
COLORS = ["White", "Black", "Silver", "Grey", "Blue", "Red"]
ORIGINS = ["Japan", "Korea", "Germany", "USA"]
LOCATIONS = ["Riyadh", "Jeddah", "Dammam", "Mecca", "Medina", "Khobar"]
EXTRAS = ["Sunroof", "Leather seats", "Navigation", "Parking sensors", "Heated seats"]


# ==============================================================================
# Price Calculation with Realism
# ==============================================================================


def calculate_price(make: str, year: int, current_year: int) -> Decimal:
    """
    Calculate price based on make band and year.

    Logic:
    - Newer cars are more expensive
    - Premium brands cost more than economy
    - Price depreciates ~10% per year from base price, capped at 70%
    """
    band = next(
        (data for data in MAKES.values() if make in data["makes"]),
        MAKES["mid_range"],
    )

    base_price = Decimal(random.randint(int(band["base_price_min"]), int(band["base_price_max"])))

    years_old = max(0, current_year - year)
    depreciation = min(Decimal("0.10") * years_old, Decimal("0.70"))
    variance = Decimal(str(round(random.uniform(0.90, 1.10), 4)))

    price = base_price * (Decimal("1") - depreciation) * variance

    # Round to nearest 100, never below 3000
    return max((price / 100).quantize(Decimal("1")) * 100, Decimal("3000"))


# ==============================================================================
# Seed Generation
# ==============================================================================


def generate_car(current_year: int) -> Car:
    """Generate a single random listing with realistic data."""
    band = random.choice(list(MAKES))
    make = random.choice(MAKES[band]["makes"])
    model, category, doors, passengers = random.choice(MODELS_BY_MAKE[make])

    # Favor newer years
    years = range(current_year - 9, current_year + 1)
    year = random.choices(years, weights=[1, 1, 2, 2, 3, 3, 4, 5, 6, 7], k=1)[0]

    car_type = CarType.NEW if year >= current_year - 1 and random.random() < 0.6 else CarType.USED
    mileage = 0 if car_type is CarType.NEW else random.randint(5_000, 25_000) * (current_year - year + 1)

    if year >= current_year - 3:
        fuel = random.choices(FUEL_TYPES, weights=[5, 1, 2, 1], k=1)[0]
    else:
        fuel = random.choices(FUEL_TYPES, weights=[7, 2, 1, 0], k=1)[0]

    transmission = random.choices(TRANSMISSIONS, weights=[1, 5, 2], k=1)[0]
    drive_type = "4WD" if category is CarCategory.SUV and random.random() < 0.5 else random.choice(DRIVE_TYPES)

    specifications = tuple(
        CarSpecification(key=extra, value="Yes")
        for extra in random.sample(EXTRAS, k=random.randint(0, 3))
    )

    return Car(
        id=None,
        title=f"{make} {model} {year}",
        description=f"{car_type.value.title()} {make} {model} in {random.choice(COLORS).lower()}.",
        type=car_type,
        category=category,
        make=make,
        model=model,
        year=year,
        mileage=mileage,
        price=calculate_price(make, year, current_year),
        location=random.choice(LOCATIONS),
        contact_number=f"+9665{random.randint(0, 99_999_999):08d}",
        fuel=fuel,
        transmission=transmission,
        drive_type=drive_type,
        doors=doors,
        passengers=passengers,
        exterior_color=random.choice(COLORS),
        interior_color=random.choice(["Black", "Beige", "Grey"]),
        engine_size=f"{random.choice(['1.5', '2.0', '2.5', '3.5', '4.0'])}L",
        dimensions=Dimensions(
            length=Decimal(random.randint(400, 520)) / 100,
            width=Decimal(random.randint(170, 200)) / 100,
            height=Decimal(random.randint(140, 195)) / 100,
        ),
        origin=random.choice(ORIGINS),
        is_featured=random.random() < FEATURED_SHARE,
        specifications=specifications,
    )


def seed_cars(num_cars: int = NUM_CARS, seed: int = RANDOM_SEED) -> None:
    """
    Seed the database with random listings.

    Args:
        num_cars: Number of listings to generate
        seed: Random seed for deterministic results
    """
    random.seed(seed)
    current_year = date.today().year

    print(f"🌱 Seeding database with {num_cars} cars (seed={seed})...")

    with get_session() as session:
        # Images and specifications go with their listing (ON DELETE CASCADE)
        print("🗑️  Clearing existing cars...")
        deleted_count = session.execute(delete(CarRow)).rowcount  # type: ignore[attr-defined]
        print(f"   Deleted {deleted_count} existing cars")

        repository = SqlAlchemyCarRepository(session=session)

        print(f"🚗 Generating {num_cars} cars...")
        cars = []
        for _ in range(num_cars):
            car = generate_car(current_year)
            car.validate(current_year)
            cars.append(repository.create(car))

        print(f"✅ Successfully seeded {len(cars)} cars!")

        print("\n📊 Sample cars:")
        for i, car in enumerate(cars[:5], 1):
            print(
                f"   {i}. {car.title} - "
                f"${car.price:,.2f} ({car.category.value}, {car.fuel}, {car.transmission})"
            )

        if len(cars) > 5:
            print(f"   ... and {len(cars) - 5} more")


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    try:
        seed_cars()
    except Exception as e:
        print(f"❌ Error seeding database: {e}", file=sys.stderr)
        sys.exit(1)

"""
Dependency injection for FastAPI routes.

Key principle: Database sessions should be per-request, not cached.
Only stateless singletons should use lru_cache.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from car_market.adapters.local_file_storage import LocalFileStorage
from car_market.adapters.sqlalchemy_car_repository import SqlAlchemyCarRepository
from car_market.domain.criteria import FilterNormalizer, SearchDefaults
from car_market.infra.db.session import get_session
from car_market.infra.storage.config import max_upload_bytes, upload_dir
from car_market.ports.car_repository import CarRepository
from car_market.ports.file_storage import FileStorage
from car_market.use_cases.find_similar_cars import FindSimilarCars
from car_market.use_cases.get_car_by_id import GetCarById
from car_market.use_cases.list_highlighted_cars import GetFeaturedCars, GetMostViewedCars
from car_market.use_cases.manage_car_media import (
    AddCarImage,
    AddCarSpecification,
    DeleteCarImage,
    DeleteCarSpecification,
)
from car_market.use_cases.manage_cars import CreateCar, DeleteCar, UpdateCar
from car_market.use_cases.search_car_catalog import SearchCarCatalog


def get_db() -> Generator[Session, None, None]:
    """
    Provides a database session for a single request.

    The underlying get_session() is a context manager that handles:
    - Session creation
    - Auto-commit on success
    - Auto-rollback on exception
    - Session cleanup

    Yields:
        Session: SQLAlchemy database session (per-request)
    """
    with get_session() as session:
        yield session


def get_car_repository(db: Session = Depends(get_db)) -> CarRepository:
    return SqlAlchemyCarRepository(session=db)


@lru_cache
def get_file_storage() -> FileStorage:
    """Disk storage rooted at UPLOAD_DIR (stateless, safe to share)."""
    return LocalFileStorage(root=upload_dir())


def get_filter_normalizer() -> FilterNormalizer:
    # Built per request so the open year bound follows the calendar
    return FilterNormalizer(SearchDefaults.today())


def get_search_catalog_use_case(
    repository: CarRepository = Depends(get_car_repository),
    normalizer: FilterNormalizer = Depends(get_filter_normalizer),
) -> SearchCarCatalog:
    """
    Factory function that returns a configured SearchCarCatalog use case.

    This function is called per-request, ensuring each request gets:
    - Fresh repository instance
    - Fresh use case instance
    - Isolated database session
    """
    return SearchCarCatalog(car_repository=repository, normalizer=normalizer)


def get_car_by_id_use_case(
    repository: CarRepository = Depends(get_car_repository),
) -> GetCarById:
    return GetCarById(car_repository=repository)


def get_find_similar_cars_use_case(
    repository: CarRepository = Depends(get_car_repository),
) -> FindSimilarCars:
    return FindSimilarCars(car_repository=repository)


def get_featured_cars_use_case(
    repository: CarRepository = Depends(get_car_repository),
) -> GetFeaturedCars:
    return GetFeaturedCars(car_repository=repository)


def get_most_viewed_cars_use_case(
    repository: CarRepository = Depends(get_car_repository),
) -> GetMostViewedCars:
    return GetMostViewedCars(car_repository=repository)


def get_create_car_use_case(
    repository: CarRepository = Depends(get_car_repository),
) -> CreateCar:
    return CreateCar(car_repository=repository)


def get_update_car_use_case(
    repository: CarRepository = Depends(get_car_repository),
) -> UpdateCar:
    return UpdateCar(car_repository=repository)


def get_delete_car_use_case(
    repository: CarRepository = Depends(get_car_repository),
    storage: FileStorage = Depends(get_file_storage),
) -> DeleteCar:
    return DeleteCar(car_repository=repository, file_storage=storage)


def get_add_car_image_use_case(
    repository: CarRepository = Depends(get_car_repository),
    storage: FileStorage = Depends(get_file_storage),
) -> AddCarImage:
    return AddCarImage(
        car_repository=repository,
        file_storage=storage,
        max_bytes=max_upload_bytes(),
    )


def get_delete_car_image_use_case(
    repository: CarRepository = Depends(get_car_repository),
    storage: FileStorage = Depends(get_file_storage),
) -> DeleteCarImage:
    return DeleteCarImage(car_repository=repository, file_storage=storage)


def get_add_car_specification_use_case(
    repository: CarRepository = Depends(get_car_repository),
) -> AddCarSpecification:
    return AddCarSpecification(car_repository=repository)


def get_delete_car_specification_use_case(
    repository: CarRepository = Depends(get_car_repository),
) -> DeleteCarSpecification:
    return DeleteCarSpecification(car_repository=repository)

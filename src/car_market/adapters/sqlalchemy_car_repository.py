"""SQLAlchemy implementation of CarRepository."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator, Sequence

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from car_market.domain.car import (
    Car,
    CarCategory,
    CarImage,
    CarSpecification,
    CarType,
    Dimensions,
)
from car_market.domain.errors import PersistenceError
from car_market.domain.ordering import Ordering, SortDirection
from car_market.domain.predicates import AnyOf, Criterion, Operator, Predicate
from car_market.infra.db.models.car import CarImageRow, CarRow, CarSpecificationRow
from car_market.ports.car_repository import CarRepository

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement
    from sqlalchemy.sql import Select

# Domain fields stored 1:1 in a same-named column
_SCALAR_FIELDS: tuple[str, ...] = (
    "title",
    "description",
    "make",
    "model",
    "year",
    "mileage",
    "price",
    "location",
    "contact_number",
    "fuel",
    "transmission",
    "drive_type",
    "doors",
    "passengers",
    "exterior_color",
    "interior_color",
    "engine_size",
    "vin",
    "origin",
    "is_featured",
)


@contextmanager
def _persistence_errors(operation: str) -> Iterator[None]:
    """Re-raise driver/ORM failures as PersistenceError, keeping the cause."""
    try:
        yield
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Failed to {operation}", operation=operation) from exc


class SqlAlchemyCarRepository(CarRepository):
    """
    SQLAlchemy implementation of CarRepository.

    - Compiles domain criteria to SQL WHERE clauses
    - Returns total counts via COUNT(*) over the filtered query
    - Increments views with a single UPDATE ... SET views = views + 1
    - Converts CarRow (infrastructure) to Car (domain)

    Transactions are owned by the session provider (commit/rollback per
    request); this class only flushes.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self._session = session

    def count(self, criteria: Sequence[Criterion]) -> int:
        query = self._build_query(criteria)
        count_query = select(func.count()).select_from(query.subquery())

        with _persistence_errors("count cars"):
            return self._session.execute(count_query).scalar() or 0

    def find_many(
        self,
        criteria: Sequence[Criterion],
        ordering: Ordering,
        offset: int,
        limit: int,
    ) -> list[Car]:
        """
        Fetch one ordered page of matching listings.

        Note:
            Assumes inputs are validated by UseCase (contract programming).
        """
        query = (
            self._build_query(criteria)
            .options(selectinload(CarRow.images), selectinload(CarRow.specifications))
            .order_by(*self._order_by(ordering))
            .offset(offset)
            .limit(limit)
        )

        with _persistence_errors("search cars"):
            rows = self._session.execute(query).scalars().all()
            return [self._to_domain(row) for row in rows]

    def get_by_id(self, car_id: int) -> Car | None:
        with _persistence_errors("get car"):
            row = self._get_row(car_id)
            return self._to_domain(row) if row else None

    def increment_views(self, car_id: int) -> bool:
        statement = (
            update(CarRow)
            .where(CarRow.id == car_id)
            .values(views=CarRow.views + 1)
            .execution_options(synchronize_session=False)
        )

        with _persistence_errors("increment car views"):
            result = self._session.execute(statement)
            return bool(result.rowcount)  # type: ignore[attr-defined]

    def create(self, car: Car) -> Car:
        row = CarRow(**self._row_values(car))
        if car.created_at is not None:
            row.created_at = car.created_at
        row.images = [self._image_row(image) for image in car.images]
        row.specifications = [self._spec_row(spec) for spec in car.specifications]

        with _persistence_errors("create car"):
            self._session.add(row)
            self._session.flush()
            self._session.refresh(row)
            return self._to_domain(row)

    def update(self, car: Car) -> Car:
        with _persistence_errors("update car"):
            row = self._require_row(car.id)

            for column, value in self._row_values(car).items():
                setattr(row, column, value)

            self._session.flush()
            self._session.refresh(row)
            return self._to_domain(row)

    def replace_specifications(
        self, car_id: int, specifications: Sequence[CarSpecification]
    ) -> None:
        with _persistence_errors("replace car specifications"):
            row = self._require_row(car_id)

            # delete-orphan cascade removes the previous rows
            row.specifications = [self._spec_row(spec) for spec in specifications]
            self._session.flush()

    def delete(self, car_id: int) -> bool:
        with _persistence_errors("delete car"):
            row = self._get_row(car_id)
            if row is None:
                return False

            self._session.delete(row)
            self._session.flush()
            return True

    def add_image(self, car_id: int, image: CarImage) -> CarImage:
        row = self._image_row(image)

        with _persistence_errors("add car image"):
            # Appended through the parent so its loaded collection stays current
            self._require_row(car_id).images.append(row)
            self._session.flush()
            return self._image_to_domain(row)

    def get_image(self, image_id: int) -> CarImage | None:
        with _persistence_errors("get car image"):
            row = self._session.get(CarImageRow, image_id)
            return self._image_to_domain(row) if row else None

    def delete_image(self, image_id: int) -> bool:
        statement = delete(CarImageRow).where(CarImageRow.id == image_id)

        with _persistence_errors("delete car image"):
            result = self._session.execute(statement)
            return bool(result.rowcount)  # type: ignore[attr-defined]

    def add_specification(self, car_id: int, specification: CarSpecification) -> CarSpecification:
        row = self._spec_row(specification)

        with _persistence_errors("add car specification"):
            self._require_row(car_id).specifications.append(row)
            self._session.flush()
            return self._spec_to_domain(row)

    def delete_specification(self, spec_id: int) -> bool:
        statement = delete(CarSpecificationRow).where(CarSpecificationRow.id == spec_id)

        with _persistence_errors("delete car specification"):
            result = self._session.execute(statement)
            return bool(result.rowcount)  # type: ignore[attr-defined]

    def _get_row(self, car_id: int) -> CarRow | None:
        query = (
            select(CarRow)
            .where(CarRow.id == car_id)
            .options(selectinload(CarRow.images), selectinload(CarRow.specifications))
            .execution_options(populate_existing=True)
        )
        return self._session.execute(query).scalar_one_or_none()

    def _require_row(self, car_id: int | None) -> CarRow:
        row = self._get_row(car_id) if car_id is not None else None
        if row is None:
            # Existence is checked by the use case; reaching here means a concurrent delete
            raise PersistenceError("Car row not found", car_id=car_id)
        return row

    def _build_query(self, criteria: Sequence[Criterion]) -> Select[tuple[CarRow]]:
        """
        Build SQLAlchemy query with criteria applied.

        Args:
            criteria: AND-ed criteria; AnyOf groups become a single OR clause

        Returns:
            SQLAlchemy select statement with WHERE clauses
        """
        query = select(CarRow)
        for criterion in criteria:
            query = query.where(self._compile(criterion))
        return query

    def _compile(self, criterion: Criterion) -> ColumnElement[bool]:
        if isinstance(criterion, AnyOf):
            return or_(*(self._compile(member) for member in criterion.predicates))

        return self._compile_predicate(criterion)

    def _compile_predicate(self, predicate: Predicate) -> ColumnElement[bool]:
        column = self._column(predicate.field)
        value = predicate.value

        if predicate.op is Operator.EQ:
            return column == value
        if predicate.op is Operator.NE:
            return column != value
        if predicate.op is Operator.GTE:
            return column >= value
        if predicate.op is Operator.LTE:
            return column <= value
        if predicate.op is Operator.ICONTAINS:
            return column.icontains(value, autoescape=True)

        raise ValueError(f"Unsupported operator: {predicate.op}")

    def _order_by(self, ordering: Ordering) -> list[Any]:
        return [
            self._column(key.field).desc()
            if key.direction is SortDirection.DESC
            else self._column(key.field).asc()
            for key in ordering.keys
        ]

    def _column(self, field: str) -> Any:
        try:
            return CarRow.__table__.c[field]
        except KeyError:
            raise ValueError(f"Unknown car field: {field}") from None

    def _row_values(self, car: Car) -> dict[str, Any]:
        values: dict[str, Any] = {field: getattr(car, field) for field in _SCALAR_FIELDS}
        values["type"] = car.type.value
        values["category"] = car.category.value

        dimensions = car.dimensions or Dimensions()
        values["dimension_length"] = dimensions.length
        values["dimension_width"] = dimensions.width
        values["dimension_height"] = dimensions.height
        return values

    def _image_row(self, image: CarImage) -> CarImageRow:
        return CarImageRow(url=image.url, is_main=image.is_main, is_360_view=image.is_360_view)

    def _spec_row(self, spec: CarSpecification) -> CarSpecificationRow:
        return CarSpecificationRow(key=spec.key, value=spec.value)

    def _to_domain(self, row: CarRow) -> Car:
        """
        Convert database model (CarRow) to domain entity (Car).

        Args:
            row: SQLAlchemy CarRow model

        Returns:
            Car domain entity
        """
        dimensions = Dimensions(
            length=row.dimension_length,
            width=row.dimension_width,
            height=row.dimension_height,
        )

        return Car(
            id=row.id,
            title=row.title,
            description=row.description,
            type=CarType(row.type),
            category=CarCategory(row.category),
            make=row.make,
            model=row.model,
            year=row.year,
            mileage=row.mileage,
            price=row.price,  # Already Decimal from NUMERIC column
            location=row.location,
            contact_number=row.contact_number,
            fuel=row.fuel,
            transmission=row.transmission,
            drive_type=row.drive_type,
            doors=row.doors,
            passengers=row.passengers,
            exterior_color=row.exterior_color,
            interior_color=row.interior_color,
            engine_size=row.engine_size,
            dimensions=None if dimensions.is_empty() else dimensions,
            vin=row.vin,
            origin=row.origin,
            views=row.views,
            is_featured=row.is_featured,
            images=tuple(self._image_to_domain(image) for image in row.images),
            specifications=tuple(self._spec_to_domain(spec) for spec in row.specifications),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def _image_to_domain(self, row: CarImageRow) -> CarImage:
        return CarImage(
            id=row.id,
            car_id=row.car_id,
            url=row.url,
            is_main=row.is_main,
            is_360_view=row.is_360_view,
        )

    def _spec_to_domain(self, row: CarSpecificationRow) -> CarSpecification:
        return CarSpecification(id=row.id, car_id=row.car_id, key=row.key, value=row.value)

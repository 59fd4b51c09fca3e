from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text, false, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from car_market.infra.db.models.base import Base


class CarRow(Base):
    __tablename__ = "cars"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(10), nullable=False)  # NEW | USED
    category: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    make: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    model: Mapped[str] = mapped_column(String(50), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    mileage: Mapped[int | None] = mapped_column(Integer, nullable=True)
    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2), nullable=False
    )  # $9,999,999,999.99

    location: Mapped[str | None] = mapped_column(String(100), nullable=True)
    contact_number: Mapped[str] = mapped_column(String(30), nullable=False)

    fuel: Mapped[str | None] = mapped_column(String(30), nullable=True)
    transmission: Mapped[str | None] = mapped_column(String(30), nullable=True)
    drive_type: Mapped[str | None] = mapped_column(String(30), nullable=True)
    doors: Mapped[int | None] = mapped_column(Integer, nullable=True)
    passengers: Mapped[int | None] = mapped_column(Integer, nullable=True)
    exterior_color: Mapped[str | None] = mapped_column(String(30), nullable=True)
    interior_color: Mapped[str | None] = mapped_column(String(30), nullable=True)
    engine_size: Mapped[str | None] = mapped_column(String(20), nullable=True)
    dimension_length: Mapped[Decimal | None] = mapped_column(Numeric(8, 2), nullable=True)
    dimension_width: Mapped[Decimal | None] = mapped_column(Numeric(8, 2), nullable=True)
    dimension_height: Mapped[Decimal | None] = mapped_column(Numeric(8, 2), nullable=True)
    vin: Mapped[str | None] = mapped_column(String(50), nullable=True)
    origin: Mapped[str | None] = mapped_column(String(50), nullable=True)

    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    is_featured: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    images: Mapped[list[CarImageRow]] = relationship(
        back_populates="car",
        cascade="all, delete-orphan",
        order_by="CarImageRow.id",
    )
    specifications: Mapped[list[CarSpecificationRow]] = relationship(
        back_populates="car",
        cascade="all, delete-orphan",
        order_by="CarSpecificationRow.id",
    )


class CarImageRow(Base):
    __tablename__ = "car_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    car_id: Mapped[int] = mapped_column(
        ForeignKey("cars.id", ondelete="CASCADE"), nullable=False, index=True
    )
    url: Mapped[str] = mapped_column(Text, nullable=False)
    is_main: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_360_view: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    car: Mapped[CarRow] = relationship(back_populates="images")


class CarSpecificationRow(Base):
    __tablename__ = "car_specifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    car_id: Mapped[int] = mapped_column(
        ForeignKey("cars.id", ondelete="CASCADE"), nullable=False, index=True
    )
    key: Mapped[str] = mapped_column(String(100), nullable=False)
    value: Mapped[str] = mapped_column(String(255), nullable=False)

    car: Mapped[CarRow] = relationship(back_populates="specifications")

"""Create listing tables

Revision ID: 3c1e9a7b5d20
Revises:
Create Date: 2026-10-19 10:12:41.118302

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3c1e9a7b5d20"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "cars",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("type", sa.String(length=10), nullable=False),
        sa.Column("category", sa.String(length=20), nullable=False),
        sa.Column("make", sa.String(length=50), nullable=False),
        sa.Column("model", sa.String(length=50), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("mileage", sa.Integer(), nullable=True),
        sa.Column("price", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("location", sa.String(length=100), nullable=True),
        sa.Column("contact_number", sa.String(length=30), nullable=False),
        sa.Column("fuel", sa.String(length=30), nullable=True),
        sa.Column("transmission", sa.String(length=30), nullable=True),
        sa.Column("drive_type", sa.String(length=30), nullable=True),
        sa.Column("doors", sa.Integer(), nullable=True),
        sa.Column("passengers", sa.Integer(), nullable=True),
        sa.Column("exterior_color", sa.String(length=30), nullable=True),
        sa.Column("interior_color", sa.String(length=30), nullable=True),
        sa.Column("engine_size", sa.String(length=20), nullable=True),
        sa.Column("dimension_length", sa.Numeric(precision=8, scale=2), nullable=True),
        sa.Column("dimension_width", sa.Numeric(precision=8, scale=2), nullable=True),
        sa.Column("dimension_height", sa.Numeric(precision=8, scale=2), nullable=True),
        sa.Column("vin", sa.String(length=50), nullable=True),
        sa.Column("origin", sa.String(length=50), nullable=True),
        sa.Column("views", sa.Integer(), server_default="0", nullable=False),
        sa.Column("is_featured", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_cars_category"), "cars", ["category"], unique=False)
    op.create_index(op.f("ix_cars_make"), "cars", ["make"], unique=False)

    op.create_table(
        "car_images",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("car_id", sa.Integer(), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("is_main", sa.Boolean(), nullable=False),
        sa.Column("is_360_view", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["car_id"], ["cars.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_car_images_car_id"), "car_images", ["car_id"], unique=False)

    op.create_table(
        "car_specifications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("car_id", sa.Integer(), nullable=False),
        sa.Column("key", sa.String(length=100), nullable=False),
        sa.Column("value", sa.String(length=255), nullable=False),
        sa.ForeignKeyConstraint(["car_id"], ["cars.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_car_specifications_car_id"), "car_specifications", ["car_id"], unique=False
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f("ix_car_specifications_car_id"), table_name="car_specifications")
    op.drop_table("car_specifications")
    op.drop_index(op.f("ix_car_images_car_id"), table_name="car_images")
    op.drop_table("car_images")
    op.drop_index(op.f("ix_cars_make"), table_name="cars")
    op.drop_index(op.f("ix_cars_category"), table_name="cars")
    op.drop_table("cars")

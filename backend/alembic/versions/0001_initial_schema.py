"""Initial schema: users, roles, engines, cars, motorcycles."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _vehicle_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("brand", sa.String(length=120), nullable=False),
        sa.Column("model", sa.String(length=120), nullable=False),
        sa.Column("year", sa.String(length=16), nullable=True),
        sa.Column("color", sa.String(length=64), nullable=True),
        sa.Column("fuel_type", sa.String(length=64), nullable=True),
        sa.Column("transmission", sa.String(length=64), nullable=True),
        sa.Column("mileage", sa.String(length=64), nullable=True),
        sa.Column("price", sa.String(length=64), nullable=True),
        sa.Column(
            "engine_id",
            sa.Integer(),
            sa.ForeignKey("engines.id", ondelete="RESTRICT"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=64), nullable=False, unique=True),
    )
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("normalized_email", sa.String(length=320), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("email_confirmed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("security_stamp", sa.String(length=64), nullable=False),
        sa.Column("lockout_enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("access_failed_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("lockout_end", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_users_normalized_email", "users", ["normalized_email"], unique=True)
    op.create_table(
        "user_roles",
        sa.Column(
            "user_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "role_id",
            sa.Integer(),
            sa.ForeignKey("roles.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    op.create_table(
        "engines",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("brand", sa.String(length=120), nullable=False),
        sa.Column("fuel_type", sa.String(length=64), nullable=True),
        sa.Column("power", sa.String(length=64), nullable=True),
        sa.Column("torque", sa.String(length=64), nullable=True),
        sa.Column("displacement", sa.String(length=64), nullable=True),
    )
    op.create_table("cars", *_vehicle_columns())
    op.create_index("ix_cars_engine_id", "cars", ["engine_id"])
    op.create_table("motorcycles", *_vehicle_columns())
    op.create_index("ix_motorcycles_engine_id", "motorcycles", ["engine_id"])


def downgrade() -> None:
    op.drop_index("ix_motorcycles_engine_id", table_name="motorcycles")
    op.drop_table("motorcycles")
    op.drop_index("ix_cars_engine_id", table_name="cars")
    op.drop_table("cars")
    op.drop_table("engines")
    op.drop_table("user_roles")
    op.drop_index("ix_users_normalized_email", table_name="users")
    op.drop_table("users")
    op.drop_table("roles")

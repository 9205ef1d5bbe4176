"""Users, vehicles, vehicle status and rental orders.

Revision ID: 0001
Revises:
Create Date: 2026-10-17
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    user_role_enum = sa.Enum("admin", "customer", name="userrole")
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("phone_number", sa.String(length=32)),
        sa.Column("role", user_role_enum, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )

    op.create_table(
        "vehicles",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("plate_number", sa.String(length=32), nullable=False, unique=True),
        *_timestamps(),
    )

    op.create_table(
        "vehicle_status",
        sa.Column(
            "vehicle_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("vehicles.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("final_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("discounted_price", sa.Numeric(10, 2)),
        sa.Column(
            "availability", sa.Boolean(), nullable=False, server_default=sa.true()
        ),
        *_timestamps(),
    )

    order_status_enum = sa.Enum(
        "draft",
        "payment_pending",
        "completed",
        "canceled",
        "expired",
        name="orderstatus",
    )
    paid_status_enum = sa.Enum("unpaid", "pending", "paid", name="paidstatus")
    delivered_status_enum = sa.Enum(
        "not_delivered", "delivered", name="deliveredstatus"
    )
    payment_method_enum = sa.Enum("cod", "online", name="paymentmethod")
    op.create_table(
        "orders",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "vehicle_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("vehicles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("rent_start_date", sa.Date()),
        sa.Column("rent_end_date", sa.Date()),
        sa.Column("rental_days", sa.Integer()),
        sa.Column("terms", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("license_image", sa.String(length=512)),
        sa.Column("grand_total", sa.Numeric(10, 2)),
        sa.Column("status", order_status_enum, nullable=False),
        sa.Column("paid_status", paid_status_enum, nullable=False),
        sa.Column("delivered_status", delivered_status_enum, nullable=False),
        sa.Column("payment_method", payment_method_enum),
        sa.Column("transaction_reference", sa.String(length=128)),
        *_timestamps(),
    )
    op.create_index("ix_orders_vehicle_status", "orders", ["vehicle_id", "status"])


def downgrade() -> None:
    op.drop_index("ix_orders_vehicle_status", table_name="orders")
    op.drop_table("orders")
    sa.Enum(name="paymentmethod").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="deliveredstatus").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="paidstatus").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="orderstatus").drop(op.get_bind(), checkfirst=True)

    op.drop_table("vehicle_status")
    op.drop_table("vehicles")

    op.drop_table("users")
    sa.Enum(name="userrole").drop(op.get_bind(), checkfirst=True)

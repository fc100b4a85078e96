"""Initial schema: admin-managed vehicle pricing.

Revision ID: 001
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # ── vehicle_pricing ───────────────────────────────────────────────
    op.create_table(
        "vehicle_pricing",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "category",
            sa.Enum("auto", "car", "bus", name="vehiclecategory"),
            nullable=False,
        ),
        sa.Column("vehicle_type", sa.String(120), nullable=False),
        sa.Column("vehicle_model", sa.String(120), nullable=False),
        sa.Column(
            "trip_type",
            sa.Enum("one-way", "return", name="triptype"),
            default="one-way",
            nullable=False,
        ),
        sa.Column("auto_rate", sa.Float, default=0.0, nullable=False),
        sa.Column("rate_50km", sa.Float, nullable=True),
        sa.Column("rate_100km", sa.Float, nullable=True),
        sa.Column("rate_150km", sa.Float, nullable=True),
        sa.Column("rate_200km", sa.Float, nullable=True),
        sa.Column("base_price", sa.Float, default=0.0, nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("is_active", sa.Boolean, default=True, nullable=False),
        sa.Column("is_default", sa.Boolean, default=False, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.UniqueConstraint(
            "category",
            "vehicle_type",
            "vehicle_model",
            "trip_type",
            name="uq_vehicle_pricing_config",
        ),
    )
    op.create_index("idx_vehicle_pricing_active", "vehicle_pricing", ["is_active"])
    op.create_index(
        "idx_vehicle_pricing_type", "vehicle_pricing", ["category", "vehicle_type"]
    )


def downgrade() -> None:
    op.drop_table("vehicle_pricing")
    op.execute("DROP TYPE IF EXISTS triptype")
    op.execute("DROP TYPE IF EXISTS vehiclecategory")

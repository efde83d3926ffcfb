"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18 00:00:00
"""
from alembic import op
import sqlalchemy as sa


revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("user_name", sa.String(150), nullable=True),
        sa.Column("usertype", sa.String(50), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=True),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "suppliers",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("contact", sa.String(100), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("address", sa.Text, nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "purchase_lpo",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("lpo_number", sa.String(100), nullable=True),
        sa.Column("amount", sa.Numeric(14, 2), nullable=True),
        sa.Column("status", sa.String(20), nullable=True),
        sa.Column("supplier_id", sa.Integer, sa.ForeignKey("suppliers.id"), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_purchase_lpo_lpo_number", "purchase_lpo", ["lpo_number"], unique=True)

    op.create_table(
        "stock_items",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("grn_number", sa.String(100), nullable=True),
        sa.Column("lpo_id", sa.Integer, sa.ForeignKey("purchase_lpo.id"), nullable=True),
        sa.Column("supplier_id", sa.Integer, sa.ForeignKey("suppliers.id"), nullable=True),
        sa.Column("quantity", sa.Integer, nullable=False, server_default="0"),
        sa.Column("cost", sa.Numeric(14, 2), nullable=True),
        sa.Column("is_deleted", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "stock_out",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("stock_id", sa.Integer, sa.ForeignKey("stock_items.id"), nullable=True),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.Column("takenby", sa.String(150), nullable=True),
        sa.Column("issuedby", sa.String(150), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "system_logs",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("action", sa.String(100), nullable=True),
        sa.Column("details", sa.Text, nullable=True),
        sa.Column("created_by", sa.String(150), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "orders",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("item", sa.String(200), nullable=True),
        sa.Column("quantity", sa.Integer, nullable=True),
        sa.Column("status", sa.String(30), nullable=True),
        sa.Column("total_amount", sa.Numeric(14, 2), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "expenses",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("item", sa.String(200), nullable=True),
        sa.Column("amount", sa.Numeric(14, 2), nullable=True),
        sa.Column("spent_by", sa.String(150), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "vehicle_tracking",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("vehicle_number", sa.String(50), nullable=False),
        sa.Column("departure_time", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("arrival_time", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("destination", sa.String(150), nullable=False),
        sa.Column("route", sa.String(200), nullable=False),
        sa.Column("item", sa.String(200), nullable=True),
        sa.Column("fuel_used", sa.Numeric(10, 2), nullable=True),
        sa.Column("mileage", sa.Numeric(12, 2), nullable=True),
        sa.Column("comment", sa.Text, nullable=True),
        sa.Column("confirmation_status", sa.Boolean, nullable=True, server_default=sa.false()),
    )
    op.create_index("ix_vehicle_tracking_vehicle_number", "vehicle_tracking", ["vehicle_number"])

    op.create_table(
        "proofs",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("proof_url", sa.String(500), nullable=True),
        sa.Column("vehicle", sa.String(36),
                  sa.ForeignKey("vehicle_tracking.id", ondelete="CASCADE"), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "travel_comments",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("vehicle_id", sa.String(36),
                  sa.ForeignKey("vehicle_tracking.id", ondelete="CASCADE"), nullable=True),
        sa.Column("comment", sa.Text, nullable=True),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "vehicle_offences",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("vehicle_number", sa.String(50), nullable=False),
        sa.Column("date", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="Pending"),
        sa.Column("offence", sa.String(200), nullable=False),
        sa.Column("charge", sa.Numeric(14, 2), nullable=False),
        sa.Column("driver", sa.String(150), nullable=True),
        sa.Column("location", sa.String(200), nullable=True),
    )
    op.create_index("ix_vehicle_offences_vehicle_number", "vehicle_offences", ["vehicle_number"])

    op.create_table(
        "destination_standards",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("destination", sa.String(150), nullable=False),
        sa.Column("fuel", sa.Numeric(10, 2), nullable=False),
        sa.Column("hours", sa.Numeric(6, 2), nullable=False),
        sa.Column("cost", sa.Numeric(14, 2), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_destination_standards_destination", "destination_standards",
                    ["destination"], unique=True)


def downgrade() -> None:
    op.drop_table("destination_standards")
    op.drop_table("vehicle_offences")
    op.drop_table("travel_comments")
    op.drop_table("proofs")
    op.drop_table("vehicle_tracking")
    op.drop_table("expenses")
    op.drop_table("orders")
    op.drop_table("system_logs")
    op.drop_table("stock_out")
    op.drop_table("stock_items")
    op.drop_table("purchase_lpo")
    op.drop_table("suppliers")
    op.drop_table("users")

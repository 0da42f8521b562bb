"""create invoices, invoice_items and emi_installments

Revision ID: a1f0c2d3e4b5
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "a1f0c2d3e4b5"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "invoices",
        sa.Column("client_name", sa.String(255), nullable=False),
        sa.Column("account_number", sa.String(100), nullable=False),
        sa.Column("total_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("paid_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("remaining_amount", sa.Numeric(12, 2), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_invoices_id"), "invoices", ["id"], unique=False)

    op.create_table(
        "invoice_items",
        sa.Column("item_name", sa.String(255), nullable=False),
        sa.Column("hsn", sa.String(50), nullable=True),
        sa.Column("quantity", sa.Numeric(10, 2), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("invoice_id", sa.UUID(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["invoice_id"], ["invoices.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_invoice_items_id"), "invoice_items", ["id"], unique=False)
    op.create_index(op.f("ix_invoice_items_invoice_id"), "invoice_items", ["invoice_id"], unique=False)

    op.execute("CREATE TYPE emi_status AS ENUM ('pending', 'paid')")
    op.create_table(
        "emi_installments",
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column("status", postgresql.ENUM("pending", "paid", name="emi_status", create_type=False), nullable=False),
        sa.Column("invoice_id", sa.UUID(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["invoice_id"], ["invoices.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_emi_installments_id"), "emi_installments", ["id"], unique=False)
    op.create_index(op.f("ix_emi_installments_invoice_id"), "emi_installments", ["invoice_id"], unique=False)
    op.create_index(op.f("ix_emi_installments_status"), "emi_installments", ["status"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_emi_installments_status"), table_name="emi_installments")
    op.drop_index(op.f("ix_emi_installments_invoice_id"), table_name="emi_installments")
    op.drop_index(op.f("ix_emi_installments_id"), table_name="emi_installments")
    op.drop_table("emi_installments")
    op.execute("DROP TYPE emi_status")

    op.drop_index(op.f("ix_invoice_items_invoice_id"), table_name="invoice_items")
    op.drop_index(op.f("ix_invoice_items_id"), table_name="invoice_items")
    op.drop_table("invoice_items")

    op.drop_index(op.f("ix_invoices_id"), table_name="invoices")
    op.drop_table("invoices")

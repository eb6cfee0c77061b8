"""Initial schema — transactions collection.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from fxledger.config import get_settings

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    table = get_settings().transactions_table
    op.create_table(
        table,
        sa.Column("id", sa.String(24), primary_key=True),
        sa.Column("customer_id", sa.String(255), nullable=False),
        sa.Column("from_amount", sa.Float, nullable=False),
        sa.Column("from_currency", sa.String(3), nullable=False),
        sa.Column("to_amount", sa.Float, nullable=False),
        sa.Column("to_currency", sa.String(3), nullable=False),
        sa.Column("created", sa.String(19), nullable=False),
        sa.Column("created_timestamp", sa.BigInteger, nullable=False),
        sa.Column("updated", sa.String(19), nullable=False),
        sa.Column("updated_timestamp", sa.BigInteger, nullable=False),
    )
    op.create_index(f"ix_{table}_customer_id", table, ["customer_id"])
    op.create_index(f"ix_{table}_created_timestamp", table, ["created_timestamp"])


def downgrade() -> None:
    table = get_settings().transactions_table
    op.drop_index(f"ix_{table}_created_timestamp", table_name=table)
    op.drop_index(f"ix_{table}_customer_id", table_name=table)
    op.drop_table(table)

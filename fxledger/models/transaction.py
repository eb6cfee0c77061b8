"""Transaction ORM — persists one foreign-exchange conversion entry.

Invariants:
    - id is the 24-hex-character TransactionId string (primary key, never updated)
    - Amounts stored as floats already rounded to 2 decimals by the normalizer
    - Currencies are exactly 3 characters
    - created/created_timestamp written once; updated/updated_timestamp on every update

Design Decisions:
    - Table name comes from settings (TRANSACTIONS_TABLE) so deployments can share a database
    - Columns are snake_case; the store maps them to camelCase wire names
"""

from sqlalchemy import BigInteger, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from fxledger.config import get_settings
from fxledger.db.base import Base


class TransactionRecord(Base):
    """Persisted representation of a Transaction."""
    __tablename__ = get_settings().transactions_table

    id: Mapped[str] = mapped_column(String(24), primary_key=True)
    customer_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    from_amount: Mapped[float] = mapped_column(Float, nullable=False)
    from_currency: Mapped[str] = mapped_column(String(3), nullable=False)
    to_amount: Mapped[float] = mapped_column(Float, nullable=False)
    to_currency: Mapped[str] = mapped_column(String(3), nullable=False)
    created: Mapped[str] = mapped_column(String(19), nullable=False)
    created_timestamp: Mapped[int] = mapped_column(
        BigInteger, nullable=False, index=True,
    )
    updated: Mapped[str] = mapped_column(String(19), nullable=False)
    updated_timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)

"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Importing this package registers every table on Base.metadata

Design Decisions:
    - One file per entity for locality
"""

from fxledger.models.transaction import TransactionRecord  # noqa: F401

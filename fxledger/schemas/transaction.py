"""Transaction Schemas — the canonical record as exchanged between store, service and API.

Invariants:
    - Wire names are camelCase (customerId, fromAmount, createdTimestamp ...)
    - Transaction is immutable once built; updates produce a new instance
    - to_wire() is the only serialization used for response bodies
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Transaction(BaseModel):
    """A stored foreign-exchange conversion entry."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True,
    )

    id: str
    customer_id: str
    from_amount: float
    from_currency: str
    to_amount: float
    to_currency: str
    created: str
    created_timestamp: int
    updated: str
    updated_timestamp: int

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)

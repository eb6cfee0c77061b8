"""Pydantic Schemas — record shapes exchanged across layers.

Invariants:
    - Schemas describe the wire shape (camelCase) of persisted records

Design Decisions:
    - Payload validation is done by core/enforce_fields, not Pydantic: it must report every
      field at once with strict number typing and one message per field
"""

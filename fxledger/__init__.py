"""FX Ledger — CRUD service for foreign-exchange conversion transactions.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

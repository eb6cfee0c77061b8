"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services own IO orchestration (store calls, clock); core owns the rules
    - Services return tagged Results, routes map tags to HTTP statuses
"""

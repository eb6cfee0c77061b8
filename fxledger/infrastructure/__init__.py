"""Infrastructure Layer — persistence, access tokens and cross-cutting concerns.

Invariants:
    - All driver/library faults are mapped to the core error taxonomy here
    - Nothing in this package holds request state

Design Decisions:
    - Thin wrappers over SQLAlchemy and PyJWT so the service layer stays library-agnostic
"""

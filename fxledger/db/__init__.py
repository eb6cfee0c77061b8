"""Database Infrastructure — SQLAlchemy Base shared by models and migrations.

Invariants:
    - Single async engine per process (built by DatabaseSessionManager)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for local runs and tests
"""

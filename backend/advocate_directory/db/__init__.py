"""Database Package — SQLAlchemy Base and the fixed advocate fixture set.

Invariants:
    - One async engine per configured process (owned by DatabaseSessionManager)
    - Fixture records are the same data the seed endpoint inserts

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests and local runs
"""

"""ORM Models — SQLAlchemy declarative models for directory entries.

Invariants:
    - All models inherit from Base (db/base.py)
    - Advocate owns its AdvocateSpecialty rows (cascade delete)

Design Decisions:
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from advocate_directory.models.advocate import Advocate, AdvocateSpecialty  # noqa: F401

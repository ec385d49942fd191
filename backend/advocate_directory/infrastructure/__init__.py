"""Infrastructure Layer — database sessions, HTTP client, and logging.

Invariants:
    - Infrastructure depends on core only for error and record types
    - All external calls wrapped with error mapping

Design Decisions:
    - Thin wrappers over raw clients (single responsibility)
"""

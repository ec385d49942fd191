"""Services Layer — record providers, seeding, and the consumer-side search coordinator.

Invariants:
    - Services wire IO around pure core functions (matcher, search_state)
    - No service owns global state; dependencies arrive through constructors

Design Decisions:
    - One file per concern for locality
"""

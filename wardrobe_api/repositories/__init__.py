"""Repositories: async persistence for both stores, one class per aggregate.

Invariants:
    - Each call acquires its own short-lived session from the injected manager
    - Relational repositories return ORM rows; document repositories return dicts
    - Repositories never log activity and never apply reserved-wardrobe rules
"""

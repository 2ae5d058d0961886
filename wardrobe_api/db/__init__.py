"""Database Infrastructure: declarative bases for the two stores.

Invariants:
    - Relational and document tables live under separate metadata objects
    - All sessions are async (AsyncSession)
"""

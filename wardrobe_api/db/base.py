"""SQLAlchemy Declarative Bases: one per database.

Invariants:
    - Relational models inherit from Base; stored documents inherit from DocumentBase
    - The two metadata objects never share a table, so each store is created
      and migrated independently

Design Decisions:
    - Separate file for the bases: avoids circular imports between models
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for relational-store ORM models."""
    pass


class DocumentBase(DeclarativeBase):
    """Base class for the document store's tables."""
    pass

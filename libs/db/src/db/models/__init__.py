"""Shared SQLAlchemy models registry for the workspace database.

Currently includes the ``events`` table read and rewritten by
``transfer_migration``.
"""

from .events import Base, Event

__all__ = [
    "Base",
    "Event",
]

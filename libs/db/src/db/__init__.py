"""db: shared database library (SQLAlchemy).

Public exports
--------------
- ``Base`` and ``metadata`` for schema bootstrapping
- ORM models in ``db.models.events`` (re-exported for convenience)
- Engine/session helpers in ``db.client``
"""

from __future__ import annotations

from .models.events import Base, Event

metadata = Base.metadata

__all__ = [
    "Base",
    "metadata",
    "Event",
]

"""Fatal error taxonomy for a migration run.

Only infrastructure-level problems are exceptions. Ambiguous groups are
reported through :class:`~transfer_migration.models.PlanStats` and per-action
failures through :class:`~transfer_migration.models.ExecutionResult`.
"""

from __future__ import annotations


class TransferMigrationError(RuntimeError):
    """Base class for errors that abort the whole run."""


class ConfigurationError(TransferMigrationError):
    """The run cannot start: store location missing or malformed."""


class StoreConnectionError(TransferMigrationError):
    """The event store could not be reached."""


__all__ = [
    "TransferMigrationError",
    "ConfigurationError",
    "StoreConnectionError",
]

"""Data models for the transfer-pair migration.

Everything here is an immutable, in-memory view. The ``events`` table owned by
``libs/db`` stays the only source of truth; these objects live for the
duration of one run.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from typing import Any, NamedTuple

# ---------------------------------------------------------------------------
# Records and grouping
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TransferCandidate:
    """Projection of one ``events`` row carrying a transfer group id.

    Only the columns the migration reads are kept. Anything else stored on the
    row is intentionally not carried.
    """

    id: str
    user_id: str
    transfer_group_id: str
    type: str | None = None
    is_transfer: bool = False
    amount: Decimal | None = None
    # Single-sided references (legacy leg shape)
    account_id: str | None = None
    company_id: str | None = None
    individual_id: str | None = None
    contractor_id: str | None = None
    counterparty_individual_id: str | None = None
    # Directional references (canonical shape)
    from_account_id: str | None = None
    to_account_id: str | None = None
    from_company_id: str | None = None
    to_company_id: str | None = None
    from_individual_id: str | None = None
    to_individual_id: str | None = None
    category_id: str | None = None
    description: str | None = None
    cell_index: int | None = None
    transfer_purpose: str | None = None
    transfer_reason: str | None = None
    created_at: datetime | None = None

    @property
    def is_modern(self) -> bool:
        """True for a record already in the single-row transfer shape."""

        return self.is_transfer is True or self.type == "transfer"


class GroupKey(NamedTuple):
    """Composite ``(owner, group)`` key.

    Kept as a pair rather than a joined string so identifiers containing the
    display separator cannot collide.
    """

    owner_id: str
    group_id: str

    def __str__(self) -> str:
        return f"{self.owner_id}::{self.group_id}"


type GroupMap = dict[GroupKey, list[TransferCandidate]]
"""Groups in first-seen order; members in load order."""


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


class Disposition(StrEnum):
    ALREADY_MODERN = "already_modern"
    CONVERT_PAIR = "convert_pair"
    CLEANUP_PARTIAL = "cleanup_partial"
    SKIPPED_AMBIGUOUS = "skipped_ambiguous"


@dataclass(frozen=True, slots=True)
class GroupClassification:
    """Outcome of classifying one group, with the legs that decided it.

    ``incoming``/``outgoing`` are set for ``convert_pair`` and, when the legacy
    leg qualifies, for ``cleanup_partial``. ``modern`` is the single modern
    record for ``already_modern``/``cleanup_partial``.
    """

    disposition: Disposition
    modern_items: tuple[TransferCandidate, ...] = ()
    legacy_items: tuple[TransferCandidate, ...] = ()
    incoming: TransferCandidate | None = None
    outgoing: TransferCandidate | None = None
    modern: TransferCandidate | None = None


# ---------------------------------------------------------------------------
# Merge payload and plan
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MergedTransfer:
    """Canonical single-row transfer written onto the keeper record."""

    amount: Decimal
    transfer_purpose: str
    transfer_reason: str | None
    from_account_id: str | None
    to_account_id: str | None
    from_company_id: str | None
    to_company_id: str | None
    from_individual_id: str | None
    to_individual_id: str | None
    category_id: str | None
    description: str
    cell_index: int
    type: str = "transfer"
    is_transfer: bool = True
    # Single-sided references are always cleared on the canonical shape.
    account_id: None = None
    company_id: None = None
    individual_id: None = None
    contractor_id: None = None
    counterparty_individual_id: None = None

    def as_values(self) -> dict[str, Any]:
        """Return the ``events`` column -> value mapping for an UPDATE."""

        return asdict(self)


@dataclass(frozen=True, slots=True)
class Action:
    mode: Disposition
    group_key: GroupKey
    keeper_id: str
    delete_ids: tuple[str, ...]
    update: MergedTransfer


@dataclass(frozen=True, slots=True)
class PlanStats:
    total_groups: int = 0
    already_modern: int = 0
    convert_pair: int = 0
    cleanup_partial: int = 0
    skipped_ambiguous: int = 0
    planned_actions: int = 0


@dataclass(frozen=True, slots=True)
class MigrationPlan:
    actions: tuple[Action, ...]
    stats: PlanStats


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    attempted: int = 0
    updated: int = 0
    deleted: int = 0
    failed: int = 0


@dataclass(frozen=True, slots=True)
class RunOutcome:
    plan: MigrationPlan
    dry_run: bool
    result: ExecutionResult | None
    elapsed_seconds: float


__all__ = [
    "TransferCandidate",
    "GroupKey",
    "GroupMap",
    "Disposition",
    "GroupClassification",
    "MergedTransfer",
    "Action",
    "PlanStats",
    "MigrationPlan",
    "ExecutionResult",
    "RunOutcome",
]

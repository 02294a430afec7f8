"""Load transfer candidates from the ``events`` table.

Read-only. Connectivity and query errors propagate to the caller; retries are
an operational concern of whoever invokes the run.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from db.models.events import Event
from sqlalchemy import select
from sqlalchemy.orm import Session

from .logging_setup import get_logger
from .models import TransferCandidate

logger = get_logger("transfer_migration.loader")

# Columns projected onto ``TransferCandidate``; order matches the dataclass.
_PROJECTED_COLUMNS = (
    Event.id,
    Event.user_id,
    Event.transfer_group_id,
    Event.type,
    Event.is_transfer,
    Event.amount,
    Event.account_id,
    Event.company_id,
    Event.individual_id,
    Event.contractor_id,
    Event.counterparty_individual_id,
    Event.from_account_id,
    Event.to_account_id,
    Event.from_company_id,
    Event.to_company_id,
    Event.from_individual_id,
    Event.to_individual_id,
    Event.category_id,
    Event.description,
    Event.cell_index,
    Event.transfer_purpose,
    Event.transfer_reason,
    Event.created_at,
)


def _to_decimal(raw: Any) -> Decimal | None:
    if raw is None:
        return None
    if isinstance(raw, Decimal):
        return raw
    return Decimal(str(raw))


def _candidate_from_row(row: Any) -> TransferCandidate:
    values = row._asdict()
    values["user_id"] = values.get("user_id") or ""
    values["transfer_group_id"] = values.get("transfer_group_id") or ""
    values["is_transfer"] = bool(values.get("is_transfer"))
    values["amount"] = _to_decimal(values.get("amount"))
    return TransferCandidate(**values)


def load_candidates(session: Session, *, group_id: str | None = None) -> list[TransferCandidate]:
    """Return every event with a non-empty ``transfer_group_id``.

    When ``group_id`` is given, only that group's events are returned. Rows
    come back ordered by ``created_at`` then ``id`` so repeated runs see the
    same order.
    """

    stmt = select(*_PROJECTED_COLUMNS)
    if group_id:
        stmt = stmt.where(Event.transfer_group_id == group_id)
    else:
        stmt = stmt.where(Event.transfer_group_id.is_not(None)).where(
            Event.transfer_group_id != ""
        )
    stmt = stmt.order_by(Event.created_at, Event.id)

    candidates = [_candidate_from_row(row) for row in session.execute(stmt).all()]
    logger.info("Loaded %d events with a transfer group id", len(candidates))
    return candidates


__all__ = ["load_candidates"]

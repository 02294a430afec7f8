"""Build the canonical single-row transfer from up to three source records.

``build_merge`` is pure: the same ``(incoming, outgoing, modern)`` triple
always yields an equal :class:`~transfer_migration.models.MergedTransfer`, so a
dry run previews exactly what an execute run writes.

Precedence (first non-empty value wins)
---------------------------------------
- ``from_*``: outgoing side's single-sided id, then its ``from_*``, then the
  modern record's ``from_*``. The outgoing side falls back to the modern
  record when no outgoing leg exists. ``to_*`` mirrors this with the incoming
  side.
- ``category_id`` and ``description``: modern, incoming side, outgoing side.
- ``amount``: largest absolute amount across all three records.
- ``cell_index``: smallest non-negative index across the three sides.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from .models import MergedTransfer, TransferCandidate

DEFAULT_TRANSFER_PURPOSE = "inter_company"
DEFAULT_DESCRIPTION = "Inter-company transfer"


def _first(*values: Any) -> Any:
    for v in values:
        if v is not None and v != "":
            return v
    return None


def _attr(item: TransferCandidate | None, name: str) -> Any:
    return getattr(item, name) if item is not None else None


def _abs_amount(item: TransferCandidate | None) -> Decimal:
    if item is None or item.amount is None:
        return Decimal(0)
    return abs(item.amount)


def _min_cell_index(*items: TransferCandidate | None) -> int:
    valid = [
        it.cell_index
        for it in items
        if it is not None and it.cell_index is not None and it.cell_index >= 0
    ]
    return min(valid) if valid else 0


def _directional(
    side: TransferCandidate | None,
    modern: TransferCandidate | None,
    *,
    single: str,
    directional: str,
) -> Any:
    return _first(_attr(side, single), _attr(side, directional), _attr(modern, directional))


def build_merge(
    incoming: TransferCandidate | None,
    outgoing: TransferCandidate | None,
    modern: TransferCandidate | None,
) -> MergedTransfer:
    """Derive the merged transfer payload for one group."""

    source_in = incoming or modern
    source_out = outgoing or modern

    def from_(base: str) -> Any:
        return _directional(source_out, modern, single=f"{base}_id", directional=f"from_{base}_id")

    def to_(base: str) -> Any:
        return _directional(source_in, modern, single=f"{base}_id", directional=f"to_{base}_id")

    return MergedTransfer(
        amount=max(_abs_amount(incoming), _abs_amount(outgoing), _abs_amount(modern)),
        transfer_purpose=_attr(modern, "transfer_purpose") or DEFAULT_TRANSFER_PURPOSE,
        transfer_reason=_attr(modern, "transfer_reason") or None,
        from_account_id=from_("account"),
        to_account_id=to_("account"),
        from_company_id=from_("company"),
        to_company_id=to_("company"),
        from_individual_id=from_("individual"),
        to_individual_id=to_("individual"),
        category_id=_first(
            _attr(modern, "category_id"),
            _attr(source_in, "category_id"),
            _attr(source_out, "category_id"),
        ),
        description=_first(
            _attr(modern, "description"),
            _attr(source_in, "description"),
            _attr(source_out, "description"),
            DEFAULT_DESCRIPTION,
        ),
        cell_index=_min_cell_index(source_in, source_out, modern),
    )


__all__ = [
    "build_merge",
    "DEFAULT_DESCRIPTION",
    "DEFAULT_TRANSFER_PURPOSE",
]

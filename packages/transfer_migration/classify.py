"""Classify transfer groups by shape.

A group is either already a single canonical transfer, a legacy income/expense
pair to convert, a canonical transfer with a leftover legacy leg to retire, or
anything else. Anything else is left alone: a missed migration is acceptable,
a wrong merge is not.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from .models import Disposition, GroupClassification, TransferCandidate

_ZERO = Decimal(0)


def is_incoming_leg(item: TransferCandidate) -> bool:
    return (item.amount or _ZERO) > 0 or item.type == "income"


def is_outgoing_leg(item: TransferCandidate) -> bool:
    return (item.amount or _ZERO) < 0 or item.type == "expense"


def split_legs(
    legacy: Sequence[TransferCandidate],
) -> tuple[TransferCandidate | None, TransferCandidate | None]:
    """Split a legacy pair into ``(incoming, outgoing)``.

    Each role must be held by exactly one record, and the two roles must land
    on different records; otherwise ``(None, None)`` is returned.
    """

    incoming = [it for it in legacy if is_incoming_leg(it)]
    outgoing = [it for it in legacy if is_outgoing_leg(it)]
    if len(incoming) != 1 or len(outgoing) != 1:
        return None, None
    if incoming[0].id == outgoing[0].id:
        return None, None
    return incoming[0], outgoing[0]


def classify_group(items: Sequence[TransferCandidate]) -> GroupClassification:
    """Assign one :class:`Disposition` to a group. Pure; ``items`` is not modified."""

    modern = tuple(it for it in items if it.is_modern)
    legacy = tuple(it for it in items if not it.is_modern)

    if len(modern) == 1 and not legacy:
        return GroupClassification(
            Disposition.ALREADY_MODERN, modern, legacy, modern=modern[0]
        )

    if not modern and len(legacy) == 2:
        incoming, outgoing = split_legs(legacy)
        if incoming is None or outgoing is None:
            return GroupClassification(Disposition.SKIPPED_AMBIGUOUS, modern, legacy)
        return GroupClassification(
            Disposition.CONVERT_PAIR,
            modern,
            legacy,
            incoming=incoming,
            outgoing=outgoing,
        )

    if len(modern) == 1 and len(legacy) == 1:
        leg = legacy[0]
        # A lone leg may contribute to either side, both, or neither.
        return GroupClassification(
            Disposition.CLEANUP_PARTIAL,
            modern,
            legacy,
            incoming=leg if is_incoming_leg(leg) else None,
            outgoing=leg if is_outgoing_leg(leg) else None,
            modern=modern[0],
        )

    return GroupClassification(Disposition.SKIPPED_AMBIGUOUS, modern, legacy)


__all__ = [
    "classify_group",
    "split_legs",
    "is_incoming_leg",
    "is_outgoing_leg",
]

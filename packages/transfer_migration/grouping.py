"""In-memory partition of loaded candidates by ``(owner, group)``."""

from __future__ import annotations

from collections.abc import Iterable

from .models import GroupKey, GroupMap, TransferCandidate


def group_key_for(candidate: TransferCandidate) -> GroupKey:
    # Missing ids still group (under an empty component) rather than fail.
    return GroupKey(candidate.user_id or "", candidate.transfer_group_id or "")


def group_candidates(candidates: Iterable[TransferCandidate]) -> GroupMap:
    """Partition ``candidates`` preserving first-seen group and member order."""

    groups: GroupMap = {}
    for candidate in candidates:
        groups.setdefault(group_key_for(candidate), []).append(candidate)
    return groups


__all__ = ["group_candidates", "group_key_for"]

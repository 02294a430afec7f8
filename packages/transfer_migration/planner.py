"""Turn classified groups into an ordered list of executable actions.

The plan always covers every eligible group. An execution limit is applied
later by the executor so that plan statistics never depend on it.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .classify import classify_group
from .logging_setup import get_logger
from .merge import build_merge
from .models import (
    Action,
    Disposition,
    GroupClassification,
    GroupKey,
    MigrationPlan,
    PlanStats,
    TransferCandidate,
)

logger = get_logger("transfer_migration.planner")


def _selected(
    groups: Mapping[GroupKey, Sequence[TransferCandidate]], group_id: str | None
) -> list[tuple[GroupKey, Sequence[TransferCandidate]]]:
    return [(k, v) for k, v in groups.items() if not group_id or k.group_id == group_id]


def classify_groups(
    groups: Mapping[GroupKey, Sequence[TransferCandidate]],
    *,
    group_id: str | None = None,
) -> dict[GroupKey, Disposition]:
    """Return the disposition of every (selected) group, in group order."""

    return {key: classify_group(items).disposition for key, items in _selected(groups, group_id)}


def _action_for(key: GroupKey, c: GroupClassification) -> Action | None:
    if c.disposition is Disposition.CONVERT_PAIR:
        assert c.incoming is not None and c.outgoing is not None
        return Action(
            mode=Disposition.CONVERT_PAIR,
            group_key=key,
            keeper_id=c.incoming.id,
            delete_ids=(c.outgoing.id,),
            update=build_merge(c.incoming, c.outgoing, None),
        )
    if c.disposition is Disposition.CLEANUP_PARTIAL:
        assert c.modern is not None and len(c.legacy_items) == 1
        return Action(
            mode=Disposition.CLEANUP_PARTIAL,
            group_key=key,
            keeper_id=c.modern.id,
            delete_ids=(c.legacy_items[0].id,),
            update=build_merge(c.incoming, c.outgoing, c.modern),
        )
    return None


def create_action_plan(
    groups: Mapping[GroupKey, Sequence[TransferCandidate]],
    *,
    group_id: str | None = None,
) -> MigrationPlan:
    """Classify and merge every group, returning actions plus statistics.

    When ``group_id`` is given, groups with any other group id are ignored
    entirely (neither counted nor planned).
    """

    counts = {d: 0 for d in Disposition}
    actions: list[Action] = []
    selected = _selected(groups, group_id)

    for key, items in selected:
        classification = classify_group(items)
        counts[classification.disposition] += 1
        action = _action_for(key, classification)
        if action is not None:
            actions.append(action)
        elif classification.disposition is Disposition.SKIPPED_AMBIGUOUS:
            logger.debug(
                "Skipping ambiguous group %s (modern=%d legacy=%d)",
                key,
                len(classification.modern_items),
                len(classification.legacy_items),
            )

    stats = PlanStats(
        total_groups=len(selected),
        already_modern=counts[Disposition.ALREADY_MODERN],
        convert_pair=counts[Disposition.CONVERT_PAIR],
        cleanup_partial=counts[Disposition.CLEANUP_PARTIAL],
        skipped_ambiguous=counts[Disposition.SKIPPED_AMBIGUOUS],
        planned_actions=len(actions),
    )
    return MigrationPlan(actions=tuple(actions), stats=stats)


__all__ = [
    "create_action_plan",
    "classify_groups",
]

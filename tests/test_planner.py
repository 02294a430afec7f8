from __future__ import annotations

from decimal import Decimal

from tests.helpers.records import candidate, modern
from transfer_migration.grouping import group_candidates
from transfer_migration.models import Disposition, GroupKey, PlanStats
from transfer_migration.planner import classify_groups, create_action_plan


def _mixed_candidates():
    return [
        # g-pair: legacy pair to convert
        candidate("a", 5000, group="g-pair"),
        candidate("b", -5000, group="g-pair"),
        # g-done: already canonical
        modern("m1", 300, group="g-done"),
        # g-partial: canonical record plus a leftover legacy leg
        modern("m2", 5000, group="g-partial", category_id="rent"),
        candidate("l2", -5000, group="g-partial", type="expense"),
        # g-amb: two positive legs
        candidate("x", 10, group="g-amb"),
        candidate("y", 10, group="g-amb"),
    ]


def test_plan_stats_and_actions_for_mixed_groups():
    plan = create_action_plan(group_candidates(_mixed_candidates()))

    assert plan.stats == PlanStats(
        total_groups=4,
        already_modern=1,
        convert_pair=1,
        cleanup_partial=1,
        skipped_ambiguous=1,
        planned_actions=2,
    )
    assert [a.mode for a in plan.actions] == [
        Disposition.CONVERT_PAIR,
        Disposition.CLEANUP_PARTIAL,
    ]


def test_convert_pair_keeps_incoming_and_deletes_outgoing():
    plan = create_action_plan(group_candidates(_mixed_candidates()))
    action = plan.actions[0]

    assert action.group_key == GroupKey("u1", "g-pair")
    assert action.keeper_id == "a"
    assert action.delete_ids == ("b",)
    assert action.update.amount == Decimal("5000")


def test_cleanup_partial_keeps_modern_record():
    plan = create_action_plan(group_candidates(_mixed_candidates()))
    action = plan.actions[1]

    assert action.keeper_id == "m2"
    assert action.delete_ids == ("l2",)
    assert action.update.category_id == "rent"


def test_group_filter_restricts_planning():
    groups = group_candidates(_mixed_candidates())
    plan = create_action_plan(groups, group_id="g-partial")

    assert plan.stats.total_groups == 1
    assert plan.stats.cleanup_partial == 1
    assert [a.keeper_id for a in plan.actions] == ["m2"]
    assert classify_groups(groups, group_id="g-partial") == {
        GroupKey("u1", "g-partial"): Disposition.CLEANUP_PARTIAL
    }


def test_ambiguous_group_produces_no_action():
    plan = create_action_plan(
        group_candidates([candidate("a", 5000, group="g"), candidate("b", 5000, group="g")])
    )
    assert plan.actions == ()
    assert plan.stats.skipped_ambiguous == 1


def test_replanning_is_idempotent():
    items = _mixed_candidates()
    first = create_action_plan(group_candidates(items))
    second = create_action_plan(group_candidates(items))

    assert first == second
    assert classify_groups(group_candidates(items)) == classify_groups(group_candidates(items))


def test_same_group_id_under_different_owners_stays_separate():
    items = [
        candidate("a", 5, owner="u1", group="shared"),
        candidate("b", -5, owner="u1", group="shared"),
        candidate("c", 5, owner="u2", group="shared"),
    ]
    dispositions = classify_groups(group_candidates(items))
    assert dispositions == {
        GroupKey("u1", "shared"): Disposition.CONVERT_PAIR,
        GroupKey("u2", "shared"): Disposition.SKIPPED_AMBIGUOUS,
    }


def test_separator_inside_ids_keeps_groups_apart():
    items = [
        candidate("a", 5, owner="a::b", group="c"),
        candidate("b", -5, owner="a::b", group="c"),
        candidate("c", 7, owner="a", group="b::c"),
        candidate("d", -7, owner="a", group="b::c"),
    ]
    plan = create_action_plan(group_candidates(items))

    assert plan.stats.total_groups == 2
    assert plan.stats.convert_pair == 2
    assert [(a.group_key, a.keeper_id, a.delete_ids) for a in plan.actions] == [
        (GroupKey("a::b", "c"), "a", ("b",)),
        (GroupKey("a", "b::c"), "c", ("d",)),
    ]

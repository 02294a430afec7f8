from __future__ import annotations

from decimal import Decimal

from tests.helpers.db import fetch_events, seed_events
from transfer_migration.api import run_migration
from transfer_migration.config import MigrationConfig
from transfer_migration.models import PlanStats

_ROWS = [
    # Legacy pair created by the old two-row transfer endpoint.
    {"id": "in-1", "transfer_group_id": "tr_1", "type": "income", "amount": 5000,
     "account_id": "acc-B", "company_id": "co-B", "category_id": "inter",
     "description": "Inter-company transfer (incoming)", "cell_index": 4},
    {"id": "out-1", "transfer_group_id": "tr_1", "type": "expense", "amount": -5000,
     "account_id": "acc-A", "company_id": "co-A", "category_id": "inter",
     "description": "Inter-company transfer (outgoing)", "cell_index": 5},
    # Canonical transfer that still has its legacy expense leg.
    {"id": "mod-2", "transfer_group_id": "tr_2", "type": "transfer", "is_transfer": True,
     "amount": 5000, "category_id": "rent", "from_account_id": "acc-A",
     "to_account_id": "acc-C", "cell_index": 0},
    {"id": "leg-2", "transfer_group_id": "tr_2", "type": "expense", "amount": -5000,
     "account_id": "acc-A"},
    # Already canonical.
    {"id": "mod-3", "transfer_group_id": "tr_3", "type": "transfer", "is_transfer": True,
     "amount": 12},
    # Ambiguous: two positive legs.
    {"id": "amb-a", "transfer_group_id": "tr_4", "amount": 5000},
    {"id": "amb-b", "transfer_group_id": "tr_4", "amount": 5000},
    # Ordinary event without a transfer group.
    {"id": "plain", "transfer_group_id": None, "type": "expense", "amount": -1},
]


def _run(db_url: str, **kw):
    lines: list[str] = []
    outcome = run_migration(MigrationConfig(database_url=db_url, **kw), emit=lines.append)
    return outcome, "\n".join(lines)


def test_dry_run_then_execute_then_replan(db_url: str):
    seed_events(db_url, _ROWS)

    dry, dry_text = _run(db_url)
    assert dry.dry_run is True
    assert dry.result is None
    assert "Dry-run mode. No changes applied." in dry_text
    assert dry.plan.stats == PlanStats(
        total_groups=4,
        already_modern=1,
        convert_pair=1,
        cleanup_partial=1,
        skipped_ambiguous=1,
        planned_actions=2,
    )
    assert len(fetch_events(db_url)) == len(_ROWS)

    executed, exec_text = _run(db_url, execute=True)
    # What the dry run previewed is exactly what execute attempted.
    assert executed.plan == dry.plan
    assert executed.result is not None
    assert executed.result.attempted == 2
    assert executed.result.updated == 2
    assert executed.result.deleted == 2
    assert executed.result.failed == 0
    assert "=== Migration Result ===" in exec_text

    rows = fetch_events(db_url)
    assert sorted(rows) == ["amb-a", "amb-b", "in-1", "mod-2", "mod-3", "plain"]

    converted = rows["in-1"]
    assert converted.is_transfer is True
    assert converted.type == "transfer"
    assert converted.amount == Decimal("5000")
    assert (converted.from_account_id, converted.to_account_id) == ("acc-A", "acc-B")
    assert (converted.from_company_id, converted.to_company_id) == ("co-A", "co-B")
    assert converted.account_id is None and converted.company_id is None
    assert converted.description == "Inter-company transfer (incoming)"
    assert converted.cell_index == 4

    cleaned = rows["mod-2"]
    assert cleaned.category_id == "rent"
    assert cleaned.from_account_id == "acc-A"
    assert cleaned.to_account_id == "acc-C"

    # Ambiguous and unrelated rows are untouched.
    assert rows["amb-a"].type is None and rows["amb-a"].amount == Decimal("5000")
    assert rows["plain"].type == "expense"

    again, _ = _run(db_url, execute=True)
    assert again.plan.actions == ()
    assert again.plan.stats.already_modern == 3
    assert again.plan.stats.skipped_ambiguous == 1
    assert again.result is not None and again.result.attempted == 0


def test_group_filter_scopes_whole_run(db_url: str):
    seed_events(db_url, _ROWS)

    outcome, text = _run(db_url, execute=True, group_id="tr_2")

    assert outcome.plan.stats.total_groups == 1
    assert [a.keeper_id for a in outcome.plan.actions] == ["mod-2"]
    assert "group=tr_2 keeper=mod-2 delete=leg-2" in text
    rows = fetch_events(db_url)
    assert "leg-2" not in rows
    assert "out-1" in rows


def test_preview_is_bounded(db_url: str):
    rows = []
    for i in range(7):
        rows.append({"id": f"i{i}", "transfer_group_id": f"g{i}", "amount": 10})
        rows.append({"id": f"o{i}", "transfer_group_id": f"g{i}", "amount": -10})
    seed_events(db_url, rows)

    outcome, text = _run(db_url)

    assert len(outcome.plan.actions) == 7
    assert "  5. [convert_pair] group=g4 keeper=i4 delete=o4" in text
    assert "  6. " not in text
    assert "... and 2 more" in text

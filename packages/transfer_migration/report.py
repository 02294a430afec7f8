"""Human-readable rendering of a migration plan and its execution result."""

from __future__ import annotations

from .models import Action, ExecutionResult, MigrationPlan

PREVIEW_SIZE = 5


def _format_action(idx: int, action: Action) -> str:
    return (
        f"  {idx}. [{action.mode}] group={action.group_key.group_id} "
        f"keeper={action.keeper_id} delete={','.join(action.delete_ids)}"
    )


def render_plan(plan: MigrationPlan, *, preview: int = PREVIEW_SIZE) -> str:
    stats = plan.stats
    lines = [
        "",
        "=== Transfer Migration Plan ===",
        f"Groups scanned:        {stats.total_groups}",
        f"Already modern:        {stats.already_modern}",
        f"Convert legacy pairs:  {stats.convert_pair}",
        f"Cleanup partial pairs: {stats.cleanup_partial}",
        f"Skipped ambiguous:     {stats.skipped_ambiguous}",
        f"Planned actions:       {stats.planned_actions}",
        "",
    ]

    if plan.actions:
        shown = plan.actions[:preview]
        lines.append("Preview actions:")
        lines.extend(_format_action(i, a) for i, a in enumerate(shown, start=1))
        if len(plan.actions) > len(shown):
            lines.append(f"  ... and {len(plan.actions) - len(shown)} more")
        lines.append("")

    return "\n".join(lines)


def render_result(result: ExecutionResult, *, elapsed_seconds: float) -> str:
    return "\n".join(
        [
            "",
            "=== Migration Result ===",
            f"Actions attempted: {result.attempted}",
            f"Rows updated:      {result.updated}",
            f"Rows deleted:      {result.deleted}",
            f"Failures:          {result.failed}",
            f"Elapsed:           {round(elapsed_seconds)}s",
        ]
    )


__all__ = ["render_plan", "render_result", "PREVIEW_SIZE"]

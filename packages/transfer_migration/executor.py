"""Apply planned actions to the ``events`` table.

Each action is two separately committed statements: UPDATE the keeper with the
merged payload, then DELETE the superseded rows. The pair is deliberately not
wrapped in one transaction. The keeper update is idempotent, so a crash
between the two leaves a correct keeper plus a leftover leg that the next run
plans as ``cleanup_partial``.

Failures are isolated per action: the session is rolled back, the failure is
counted and logged with the group key, and the loop moves on. A keeper update
that committed is counted even when the delete after it fails.
"""

from __future__ import annotations

from collections.abc import Sequence

from db.models.events import Event
from sqlalchemy import delete, update
from sqlalchemy.orm import Session

from .logging_setup import get_logger
from .models import Action, ExecutionResult

logger = get_logger("transfer_migration.executor")


def runnable_actions(actions: Sequence[Action], limit: int | None) -> Sequence[Action]:
    """Return the leading ``limit`` actions (all of them when ``limit`` is None)."""

    if limit is None:
        return actions
    return actions[: max(0, limit)]


def update_keeper(session: Session, action: Action) -> int:
    """Write the merged payload onto the keeper; return the matched row count.

    Commits on a match and rolls back when the keeper no longer exists.
    """

    res = session.execute(
        update(Event)
        .where(Event.id == action.keeper_id)
        .values(**action.update.as_values())
        .execution_options(synchronize_session=False)
    )
    if res.rowcount == 0:
        session.rollback()
        return 0
    session.commit()
    return res.rowcount


def delete_superseded(session: Session, action: Action) -> int:
    """Delete the rows the keeper replaces; return how many were removed."""

    res = session.execute(
        delete(Event)
        .where(Event.id.in_(action.delete_ids))
        .execution_options(synchronize_session=False)
    )
    session.commit()
    return res.rowcount


def execute_plan(
    session: Session,
    actions: Sequence[Action],
    *,
    limit: int | None = None,
) -> ExecutionResult:
    """Apply ``actions`` sequentially, honoring ``limit``; never raises per action."""

    runnable = runnable_actions(actions, limit)
    updated = deleted = failed = 0

    for action in runnable:
        try:
            matched = update_keeper(session, action)
        except Exception as e:
            session.rollback()
            failed += 1
            logger.error("Failed group %s: keeper update: %s", action.group_key, e)
            continue
        if matched == 0:
            failed += 1
            logger.warning("Keeper %s not found for group %s", action.keeper_id, action.group_key)
            continue
        updated += matched

        try:
            deleted += delete_superseded(session, action)
        except Exception as e:
            session.rollback()
            failed += 1
            logger.error(
                "Failed group %s: keeper %s updated, delete of %s failed: %s",
                action.group_key,
                action.keeper_id,
                ",".join(action.delete_ids),
                e,
            )
            continue
        logger.debug(
            "Applied %s for group %s (keeper=%s)", action.mode, action.group_key, action.keeper_id
        )

    return ExecutionResult(
        attempted=len(runnable),
        updated=updated,
        deleted=deleted,
        failed=failed,
    )


__all__ = [
    "execute_plan",
    "update_keeper",
    "delete_superseded",
    "runnable_actions",
]

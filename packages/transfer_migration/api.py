"""Run orchestration for the transfer-pair migration.

``run_migration`` wires the stages together::

    load -> group -> classify/merge/plan -> report -> (execute) -> report

Dry-run and execute runs share everything up to the plan report; a dry run
stops there. Store access goes through ``db.client`` and the engine is
disposed when the run ends.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from db.client import dispose_engine, get_engine, session_scope
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import Session

from .config import MigrationConfig
from .errors import ConfigurationError, StoreConnectionError
from .executor import execute_plan, runnable_actions
from .grouping import group_candidates
from .loader import load_candidates
from .logging_setup import get_logger
from .models import MigrationPlan, RunOutcome
from .planner import create_action_plan
from .report import render_plan, render_result

logger = get_logger("transfer_migration.api")


def open_store(database_url: str) -> Engine:
    """Return the shared engine after a round-trip connectivity probe."""

    try:
        engine = get_engine(database_url=database_url)
    except ArgumentError as e:
        raise ConfigurationError(f"invalid database URL: {e}") from e

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise StoreConnectionError(f"cannot connect to the event store: {e}") from e
    return engine


def build_plan(session: Session, *, group_id: str | None = None) -> MigrationPlan:
    """Load, group and plan. Read-only; identical for dry-run and execute runs."""

    candidates = load_candidates(session, group_id=group_id)
    groups = group_candidates(candidates)
    plan = create_action_plan(groups, group_id=group_id)
    logger.info(
        "Planned %d actions across %d groups (%d ambiguous)",
        plan.stats.planned_actions,
        plan.stats.total_groups,
        plan.stats.skipped_ambiguous,
    )
    return plan


def run_migration(
    config: MigrationConfig,
    *,
    emit: Callable[[str], None] = print,
) -> RunOutcome:
    """Plan and (unless dry-run) apply the migration described by ``config``.

    Raises :class:`ConfigurationError` or :class:`StoreConnectionError` for
    problems that prevent the run from starting. Per-action failures are
    reported in the returned :class:`RunOutcome` instead.
    """

    started = time.perf_counter()
    try:
        logger.info("Connecting to the event store")
        open_store(config.database_url)
        logger.info("Connected")

        with session_scope(database_url=config.database_url) as session:
            plan = build_plan(session, group_id=config.group_id)
            emit(render_plan(plan))

            if config.is_dry_run:
                emit("Dry-run mode. No changes applied.")
                return RunOutcome(
                    plan=plan,
                    dry_run=True,
                    result=None,
                    elapsed_seconds=time.perf_counter() - started,
                )

            if config.limit is not None:
                runnable = runnable_actions(plan.actions, config.limit)
                emit(f"Execute limit applied: {len(runnable)}/{len(plan.actions)}")

            result = execute_plan(session, plan.actions, limit=config.limit)
            elapsed = time.perf_counter() - started
            emit(render_result(result, elapsed_seconds=elapsed))
            if result.failed:
                emit(f"{result.failed} of {result.attempted} actions failed.")
            return RunOutcome(plan=plan, dry_run=False, result=result, elapsed_seconds=elapsed)
    finally:
        dispose_engine()
        logger.info("Disconnected from the event store")


__all__ = [
    "build_plan",
    "open_store",
    "run_migration",
]

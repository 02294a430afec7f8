"""Typer console interface for the transfer-pair migration.

Environment variables (``DATABASE_URL``, or the older ``DB_URL``) are loaded
from a local ``.env`` using ``python-dotenv`` without overriding the existing
environment. Business logic lives in ``transfer_migration.api``.

Usage
-----
transfer-migration --dry-run
transfer-migration --execute [--limit=N] [--group=GROUP_ID]
"""

from __future__ import annotations

import typer

from .api import run_migration
from .config import load_config
from .errors import TransferMigrationError
from .logging_setup import configure_logging, get_logger, run_mode

logger = get_logger("transfer_migration.cli")

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
    help=(
        "Migration: legacy inter-company transfer pairs -> single transfer event. "
        "Runs as a dry run unless --execute is given."
    ),
)


@app.command()
def migrate(
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Plan and preview only (default when --execute is absent)."
    ),
    execute: bool = typer.Option(False, "--execute", help="Apply the planned actions."),
    limit: str | None = typer.Option(
        None,
        "--limit",
        metavar="N",
        help="Apply only the first N planned actions (execute mode). Non-integers are ignored.",
    ),
    group: str | None = typer.Option(
        None, "--group", metavar="GROUP_ID", help="Process only one transfer group id."
    ),
    database_url: str | None = typer.Option(
        None, "--database-url", help="Override DATABASE_URL (falls back to env var)."
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Override TRANSFER_MIGRATION_LOG_LEVEL (e.g. DEBUG)."
    ),
) -> None:
    """Plan the transfer-pair migration and optionally apply it."""

    configure_logging(log_level, mode=run_mode(execute=execute, dry_run=dry_run))

    try:
        config = load_config(
            database_url=database_url,
            execute=execute,
            dry_run=dry_run,
            limit=limit,
            group_id=group,
        )
    except TransferMigrationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    if limit is not None and config.limit is None:
        logger.warning("Ignoring --limit=%r: not a non-negative integer", limit)

    try:
        run_migration(config, emit=typer.echo)
    except TransferMigrationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    except Exception as e:
        logger.exception("Migration error")
        typer.echo(f"Error: migration failed: {e}", err=True)
        raise typer.Exit(1) from e


def main() -> None:
    """Console-script entry point."""

    app()


if __name__ == "__main__":  # pragma: no cover
    # Running as a module: `python -m transfer_migration.cli`
    main()

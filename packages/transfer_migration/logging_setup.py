"""Logging for migration runs.

Modules call ``get_logger("transfer_migration.<module>")`` and never attach
handlers themselves; until the CLI calls :func:`configure_logging` the package
logger only carries a ``NullHandler``.

Every configured record is stamped with the run mode (``dry-run`` or
``execute``), so log lines from a mutating run can be told apart from preview
runs when both end up in the same log stream.
"""

from __future__ import annotations

import logging
import os
import sys

_PKG_LOGGER_NAME = "transfer_migration"
_LEVEL_ENV = "TRANSFER_MIGRATION_LOG_LEVEL"
_FORMAT = "%(asctime)s %(levelname)s [%(run_mode)s] %(name)s %(message)s"
_CONFIGURED = False

DRY_RUN_MODE = "dry-run"
EXECUTE_MODE = "execute"


class _RunModeFilter(logging.Filter):
    def __init__(self, mode: str) -> None:
        super().__init__()
        self.mode = mode

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_mode = self.mode
        return True


def _level_from(value: int | str | None) -> int | None:
    if isinstance(value, int):
        return value
    if not value or not value.strip():
        return None
    name = value.strip().upper()
    if name.isdigit():
        return int(name)
    return logging.getLevelNamesMapping().get(name)


def resolve_level(level: int | str | None = None) -> int:
    """Explicit ``level``, else ``TRANSFER_MIGRATION_LOG_LEVEL``, else INFO.

    Unknown level names fall through to the next source.
    """

    for candidate in (level, os.getenv(_LEVEL_ENV)):
        resolved = _level_from(candidate)
        if resolved is not None:
            return resolved
    return logging.INFO


def run_mode(*, execute: bool, dry_run: bool) -> str:
    return EXECUTE_MODE if execute and not dry_run else DRY_RUN_MODE


def configure_logging(level: int | str | None = None, *, mode: str = DRY_RUN_MODE) -> None:
    """Attach one stderr handler, tagged with ``mode``, to the package logger.

    Only the first call has an effect.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = resolve_level(level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.addFilter(_RunModeFilter(mode))
    handler.setFormatter(logging.Formatter(_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)

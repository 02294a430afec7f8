"""Explicit run configuration for a migration pass.

The engine never reads process-wide state. Entrypoints build a
:class:`MigrationConfig` (usually via :func:`load_config`) and hand it to
:func:`transfer_migration.api.run_migration`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import ConfigurationError

# Checked in order; ``DB_URL`` is the name older deployments used.
_URL_ENV_VARS: tuple[str, ...] = ("DATABASE_URL", "DB_URL")


def parse_limit(raw: Any) -> int | None:
    """Return ``raw`` as a non-negative integer, or ``None`` when it is not one."""

    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw >= 0 else None
    s = str(raw).strip()
    if not (s.isascii() and s.isdigit()):
        return None
    return int(s)


class MigrationConfig(BaseModel):
    """Settings for one run.

    ``dry_run`` and ``execute`` mirror the two CLI flags. A run mutates the
    store only when ``execute`` is set and ``dry_run`` is not.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    database_url: str
    execute: bool = False
    dry_run: bool = False
    limit: int | None = None
    group_id: str | None = None

    @field_validator("database_url")
    @classmethod
    def _url_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("database_url must be non-empty")
        return v

    @field_validator("limit", mode="before")
    @classmethod
    def _normalize_limit(cls, v: Any) -> int | None:
        return parse_limit(v)

    @field_validator("group_id", mode="before")
    @classmethod
    def _normalize_group(cls, v: Any) -> str | None:
        if v is None:
            return None
        s = str(v).strip()
        return s or None

    @property
    def is_dry_run(self) -> bool:
        return self.dry_run or not self.execute


def resolve_database_url(override: str | None = None) -> str:
    """Pick the store URL from ``override`` or the environment.

    Raises :class:`ConfigurationError` when no candidate is set.
    """

    if override and override.strip():
        return override.strip()
    for name in _URL_ENV_VARS:
        val = os.getenv(name)
        if val and val.strip():
            return val.strip()
    raise ConfigurationError(
        "Missing database URL: pass --database-url or set DATABASE_URL in the environment"
    )


def load_config(
    *,
    database_url: str | None = None,
    execute: bool = False,
    dry_run: bool = False,
    limit: Any = None,
    group_id: str | None = None,
    dotenv_path: Path | None = None,
) -> MigrationConfig:
    """Build a :class:`MigrationConfig` from explicit values plus ``.env``.

    ``.env`` (from ``dotenv_path`` or the current directory) never overrides
    variables already present in the environment.
    """

    load_dotenv(dotenv_path=dotenv_path or Path.cwd() / ".env", override=False)
    url = resolve_database_url(database_url)
    try:
        return MigrationConfig(
            database_url=url,
            execute=execute,
            dry_run=dry_run,
            limit=limit,
            group_id=group_id,
        )
    except ValidationError as e:
        raise ConfigurationError(f"invalid migration settings: {e}") from e


__all__ = [
    "MigrationConfig",
    "load_config",
    "parse_limit",
    "resolve_database_url",
]

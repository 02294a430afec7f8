"""Pytest configuration for test isolation.

``db.client`` keeps one shared engine per process and refuses to rebind it to
a different URL. Each test bootstraps its own SQLite file, so the shared
engine is disposed after every test. Store URLs from the developer's
environment are removed so no test can reach a real database by accident.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from db.client import dispose_engine


@pytest.fixture(autouse=True)
def _isolate_store(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("DB_URL", raising=False)
    yield
    dispose_engine()


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    from tests.helpers.db import bootstrap_sqlite_db

    return bootstrap_sqlite_db(tmp_path / "events.db")

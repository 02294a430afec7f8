from __future__ import annotations

from pathlib import Path

import pytest
from db.client import dispose_engine, get_engine


def test_engine_ignores_database_url_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+pysqlite:///:memory:")

    with pytest.raises(TypeError):
        get_engine()  # type: ignore[call-arg]
    with pytest.raises(ValueError):
        get_engine(database_url="  ")


def test_engine_refuses_rebinding_until_disposed(tmp_path: Path):
    first = f"sqlite+pysqlite:///{tmp_path / 'one.db'}"
    second = f"sqlite+pysqlite:///{tmp_path / 'two.db'}"

    engine = get_engine(database_url=first)
    assert get_engine(database_url=first) is engine
    with pytest.raises(RuntimeError):
        get_engine(database_url=second)

    dispose_engine()
    assert get_engine(database_url=second).url.database == str(tmp_path / 'two.db')

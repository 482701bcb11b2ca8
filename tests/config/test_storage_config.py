from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest  # noqa: TC002

from tasktrail.config import StorageConfig, get_database_config, get_storage_config
from tasktrail.config.storage import DEFAULT_DB_FILENAME


def test_storage_config_prefers_explicit_env(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    custom = tmp_path / "custom-data"
    monkeypatch.setenv("TASKTRAIL_DATA_DIR", str(custom))

    config = get_storage_config()

    assert config.resolve_data_dir() == custom.resolve()


def test_storage_config_defaults_to_xdg_data_home(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.delenv("TASKTRAIL_DATA_DIR", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    config = get_storage_config()

    assert config.resolve_data_dir() == (tmp_path / "tasktrail").resolve()


def test_database_uri_uses_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite:///override.db")

    assert get_database_config().uri == "sqlite:///override.db"


def test_database_uri_creates_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)

    config = get_database_config(storage=StorageConfig(data_dir=tmp_path / "data-dir"))

    expected_path = (tmp_path / "data-dir" / DEFAULT_DB_FILENAME).resolve()
    assert config.uri == f"sqlite+pysqlite:///{expected_path}"
    assert expected_path.parent.exists()

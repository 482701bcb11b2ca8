from __future__ import annotations

import logging

import pytest

from tasktrail.config import configure_logging


@pytest.fixture
def basic_config_calls(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, object]]:
    calls: list[dict[str, object]] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    for name in ("alembic", "sqlalchemy.engine"):
        logger = logging.getLogger(name)
        monkeypatch.setattr(logger, "level", logger.level)
    return calls


def test_configure_logging_quiets_migration_loggers(
    basic_config_calls: list[dict[str, object]],
) -> None:
    configure_logging()

    assert basic_config_calls[0]["level"] == logging.INFO
    assert basic_config_calls[0]["force"] is False
    assert logging.getLogger("alembic").level == logging.WARNING
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_debug_logging_lets_migration_loggers_through(
    basic_config_calls: list[dict[str, object]],
) -> None:
    configure_logging(level=logging.DEBUG, force=True)

    assert basic_config_calls[0]["force"] is True
    assert logging.getLogger("alembic").level == logging.DEBUG

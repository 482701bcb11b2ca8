"""Utilities for managing Alembic migrations within the SQLAlchemy adapter."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Final

from alembic import command
from alembic.config import Config

from tasktrail.config import get_database_config

PROJECT_ROOT: Final[Path] = Path(__file__).resolve().parents[5]
PYPROJECT_PATH: Final[Path] = PROJECT_ROOT / "pyproject.toml"
MIGRATIONS_PATH: Final[Path] = Path(__file__).resolve().parent

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


def _load_pyproject_options() -> dict[str, str]:
    """Load Alembic configuration values from pyproject.toml, if it ships alongside."""

    try:
        with PYPROJECT_PATH.open("rb") as pyproject_file:
            document = tomllib.load(pyproject_file)
    except FileNotFoundError:
        return {}

    alembic_section = document.get("tool", {}).get("alembic", {})
    return {str(key): str(value) for key, value in alembic_section.items()}


def _build_config() -> Config:
    """Return an Alembic Config seeded from pyproject settings, or the bundled defaults."""

    config = Config()
    options = _load_pyproject_options()

    script_location = options.get("script_location")
    script_path = MIGRATIONS_PATH
    if script_location is not None:
        candidate = Path(script_location)
        candidate = candidate if candidate.is_absolute() else PROJECT_ROOT / candidate
        if candidate.exists():
            script_path = candidate
    config.set_main_option("script_location", str(script_path))

    prepend_path = Path(options.get("prepend_sys_path", "."))
    resolved_prepend = (
        prepend_path if prepend_path.is_absolute() else PROJECT_ROOT / prepend_path
    ).resolve()
    config.set_main_option("prepend_sys_path", str(resolved_prepend))

    for key, value in options.items():
        if key in {"script_location", "prepend_sys_path"}:
            continue
        config.set_main_option(key, value)
    return config


def upgrade_head(*, engine: Engine | None = None, database_uri: str | None = None) -> None:
    """Upgrade the database schema to the latest revision."""

    config = _build_config()
    if engine is not None:
        log.info("Upgrading schema on %s", engine.url.render_as_string(hide_password=True))
        with engine.begin() as connection:
            config.attributes["connection"] = connection
            command.upgrade(config, "head")
        return
    config.set_main_option("sqlalchemy.url", database_uri or get_database_config().uri)
    command.upgrade(config, "head")

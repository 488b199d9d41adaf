from __future__ import annotations

from datetime import date

import pytest

from barber_school.database.bootstrap import apply_schema
from barber_school.database.connection import DBConfig, DatabaseConnection


@pytest.fixture
def db_config(tmp_path) -> dict:
    config = {"path": str(tmp_path / "school.sqlite3"), "busy_timeout_ms": 1000}
    apply_schema(config)
    return config


@pytest.fixture
def conn(db_config) -> DatabaseConnection:
    return DatabaseConnection(DBConfig(path=db_config["path"], busy_timeout_ms=db_config["busy_timeout_ms"]))


@pytest.fixture
def fixed_today() -> date:
    return date(2025, 1, 1)


@pytest.fixture
def container(db_config, fixed_today):
    from barber_school.container import build_container

    return build_container(db_config=db_config, clock=lambda: fixed_today)

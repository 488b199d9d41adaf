from __future__ import annotations

import logging
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Optional

from werkzeug.security import generate_password_hash

from ..core.constants import DEFAULT_BUSY_TIMEOUT_MS
from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


def _as_config(db_config: dict) -> DBConfig:
    return DBConfig(
        path=str(db_config.get("path", "instance/barber_school.sqlite3")),
        busy_timeout_ms=int(db_config.get("busy_timeout_ms", DEFAULT_BUSY_TIMEOUT_MS)),
    )


def apply_schema(db_config: dict, *, schema_path: Optional[str | Path] = None) -> None:
    sql = Path(schema_path or SCHEMA_PATH).read_text(encoding="utf-8")
    conn = DatabaseConnection(_as_config(db_config)).connect()
    try:
        conn.executescript(sql)
    finally:
        conn.close()
    logger.info("Schema applied to %s", db_config.get("path"))


def ensure_admin_user(db_config: dict, *, username: str, password: str, full_name: str = "Administrator") -> None:
    """Create the admin account, or reset its password/role if it already exists."""

    conn = DatabaseConnection(_as_config(db_config)).connect()
    try:
        with closing(conn.cursor()) as cur:
            cur.execute("BEGIN IMMEDIATE")
            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM users WHERE username=?", (username,))
            existing = cur.fetchone()
            if existing:
                cur.execute(
                    """
                    UPDATE users
                    SET full_name=?, password_hash=?, role='admin', is_active=1
                    WHERE username=?
                    """,
                    (full_name, password_hash, username),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users (full_name, username, password_hash, role)
                    VALUES (?, ?, ?, 'admin')
                    """,
                    (full_name, username, password_hash),
                )
            conn.commit()
    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(_as_config(db_config)).connect()
    try:
        rows = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
        ).fetchall()
        return [row[0] for row in rows]
    finally:
        conn.close()

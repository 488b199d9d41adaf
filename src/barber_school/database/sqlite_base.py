from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence

from ..core.exceptions import StorageFailure
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, immediate: bool = False):
    """Open a connection, run the body in one transaction, commit or roll back.

    ``immediate=True`` takes the SQLite write lock up front (``BEGIN IMMEDIATE``)
    so a read-then-write sequence cannot interleave with another writer.
    Driver errors escape as StorageFailure; domain errors pass through unchanged.
    """

    try:
        conn = conn_factory.connect()
    except sqlite3.Error as exc:
        logger.warning("SQLite connect failed: %s", exc)
        raise StorageFailure(_describe(exc)) from exc

    try:
        cur = conn.cursor()
        try:
            cur.execute("BEGIN IMMEDIATE" if immediate else "BEGIN")
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except sqlite3.Error as exc:
        conn.rollback()
        logger.warning("SQLite operation failed: %s", exc)
        raise StorageFailure(_describe(exc)) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def _describe(exc: sqlite3.Error) -> str:
    msg = str(exc)
    if "locked" in msg or "busy" in msg:
        return "The database is busy, please retry"
    return "Storage error"


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return dict(row) if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return [dict(r) for r in rows or []]


def placeholders(values: Sequence[Any]) -> str:
    return ",".join("?" for _ in values)

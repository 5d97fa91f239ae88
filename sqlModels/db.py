# sqlModels/db.py
from __future__ import annotations

import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator

from .schema import DDL, SCHEMA_VERSION
from .migrations import MIGRATIONS


def connect(db_path: str) -> sqlite3.Connection:
    con = sqlite3.connect(db_path)
    con.row_factory = sqlite3.Row

    con.execute("PRAGMA journal_mode = WAL")
    con.execute("PRAGMA synchronous = NORMAL")
    con.execute("PRAGMA busy_timeout = 5000")
    return con


@contextmanager
def tx(con: sqlite3.Connection):
    try:
        con.execute("BEGIN")
        yield
        con.commit()
    except Exception:
        con.rollback()
        raise


@contextmanager
def open_db(db_path: str, create_dir: bool = False) -> Iterator[sqlite3.Connection]:
    """Conexión con el esquema al día; se cierra al salir."""
    if create_dir:
        os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
    con = connect(db_path)
    try:
        ensure_schema(con)
        yield con
    finally:
        con.close()


def _get_meta(con: sqlite3.Connection, key: str) -> str | None:
    try:
        r = con.execute("SELECT value FROM meta WHERE key = ?", (key,)).fetchone()
        return str(r["value"]) if r and r["value"] is not None else None
    except sqlite3.Error:
        return None


def _set_meta(con: sqlite3.Connection, key: str, value: str) -> None:
    con.execute(
        "INSERT OR REPLACE INTO meta(key, value) VALUES(?, ?)",
        (key, str(value)),
    )


def schema_version(con: sqlite3.Connection) -> int:
    raw = _get_meta(con, "schema_version")
    try:
        return int(raw) if raw is not None else 0
    except ValueError:
        return 0


def ensure_schema(con: sqlite3.Connection) -> None:
    """
    DDL idempotente + migraciones pendientes; deja meta.schema_version
    en SCHEMA_VERSION.
    """
    with tx(con):
        for stmt in DDL:
            con.execute(stmt)

        cur_v = schema_version(con)
        for target_v in range(cur_v + 1, SCHEMA_VERSION + 1):
            mig = MIGRATIONS.get(target_v)
            if mig:
                mig(con)

        if cur_v != SCHEMA_VERSION:
            _set_meta(con, "schema_version", str(SCHEMA_VERSION))

# sqlModels/migrations.py
from __future__ import annotations

import sqlite3
from typing import Callable


def _has_column(con: sqlite3.Connection, table: str, column: str) -> bool:
    rows = con.execute(f"PRAGMA table_info({table})").fetchall()
    return any(r["name"] == column for r in rows)


def mig_1(con: sqlite3.Connection) -> None:
    # v1: meta + settings, las crea el DDL base
    return


def mig_2(con: sqlite3.Connection) -> None:
    # v2: fecha de último guardado por clave
    if not _has_column(con, "settings", "updated_at"):
        con.execute("ALTER TABLE settings ADD COLUMN updated_at TEXT")


# versión destino -> migración
MIGRATIONS: dict[int, Callable[[sqlite3.Connection], None]] = {
    1: mig_1,
    2: mig_2,
}

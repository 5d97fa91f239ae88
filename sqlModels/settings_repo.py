# sqlModels/settings_repo.py
from __future__ import annotations

import sqlite3


def _key(key) -> str:
    return str(key or "").strip()


def get_setting(con: sqlite3.Connection, key: str, default: str | None = "") -> str | None:
    k = _key(key)
    if not k:
        return default
    r = con.execute("SELECT value FROM settings WHERE key = ?", (k,)).fetchone()
    return str(r["value"]) if r and r["value"] is not None else default


def get_setting_updated_at(con: sqlite3.Connection, key: str) -> str | None:
    r = con.execute("SELECT updated_at FROM settings WHERE key = ?", (_key(key),)).fetchone()
    return r["updated_at"] if r else None


def set_setting(con: sqlite3.Connection, key: str, value: str) -> None:
    k = _key(key)
    if not k:
        return
    con.execute(
        """
        INSERT INTO settings(key, value, updated_at) VALUES(?, ?, datetime('now', 'localtime'))
        ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at
        """,
        (k, "" if value is None else str(value)),
    )


def delete_setting(con: sqlite3.Connection, key: str) -> None:
    k = _key(key)
    if k:
        con.execute("DELETE FROM settings WHERE key = ?", (k,))

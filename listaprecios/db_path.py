# listaprecios/db_path.py
from __future__ import annotations

import os
import sqlite3

from .paths import data_dir
from .logging_setup import get_logger

log = get_logger(__name__)


def _can_write_sqlite(db_path: str) -> bool:
    try:
        os.makedirs(os.path.dirname(db_path), exist_ok=True)
        con = sqlite3.connect(db_path)
        con.execute("CREATE TABLE IF NOT EXISTS __write_test(x INTEGER)")
        con.execute("DROP TABLE __write_test")
        con.commit()
        con.close()
        return True
    except (sqlite3.Error, OSError) as e:
        log.warning("No se puede escribir DB en %s (%s)", db_path, e)
        return False


def resolve_db_path(configured: str = "") -> str | None:
    """
    1) db_path de la configuración (si se puede escribir)
    2) <DATA_DIR>/app.sqlite3
    None si ninguna es escribible: la sesión sigue con el carrito en memoria.
    """
    candidates = [p for p in (configured, os.path.join(data_dir(), "app.sqlite3")) if p]
    for p in candidates:
        if _can_write_sqlite(p):
            log.info("DB path: %s", p)
            return p
    log.error("No se pudo validar escritura de la DB en: %s", candidates)
    return None

# listaprecios/cart_storage.py
from __future__ import annotations

import json
import sqlite3

from sqlModels.db import open_db, tx
from sqlModels.settings_repo import delete_setting, get_setting, get_setting_updated_at, set_setting

from .cart import CartLine
from .config import DEFAULT_CART_KEY
from .errors import PersistenceError
from .utils import nz
from .logging_setup import get_logger

log = get_logger(__name__)


# =========================
# Formato guardado
# =========================
# Lista JSON, una entrada por línea:
#   {"code", "description", "currency", "tes", "price", "price_usd", "quantity"}
# "price" es el base en pesos (0 si no es moneda "1").

def serialize_lines(lines: list[CartLine]) -> str:
    return json.dumps(
        [
            {
                "code": ln.code,
                "description": ln.description,
                "currency": ln.currency,
                "tes": ln.tax,
                "price": ln.base_price_local,
                "price_usd": ln.base_price_foreign,
                "quantity": ln.quantity,
            }
            for ln in lines
        ],
        ensure_ascii=False,
    )


def deserialize_lines(raw: str | None) -> list[CartLine]:
    """
    Texto guardado → líneas. Vacío o corrupto → carrito vacío.
    Códigos repetidos: queda la primera aparición.
    """
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except ValueError:
        log.warning("Carrito guardado corrupto (JSON inválido); se inicia vacío")
        return []
    if not isinstance(data, list):
        log.warning("Carrito guardado corrupto (no es lista); se inicia vacío")
        return []

    out: list[CartLine] = []
    seen: set[str] = set()
    for rec in data:
        if not isinstance(rec, dict):
            continue
        code = str(rec.get("code") or "").strip()
        if not code or code in seen:
            continue
        seen.add(code)
        out.append(
            CartLine(
                code=code,
                description=str(rec.get("description") or ""),
                currency=str(rec.get("currency") or "").strip(),
                tax=str(rec.get("tes") or rec.get("tax") or "").strip(),
                base_price_local=nz(rec.get("price"), 0.0),
                base_price_foreign=nz(rec.get("price_usd"), 0.0),
                quantity=max(0, int(nz(rec.get("quantity"), 0.0))),
            )
        )
    return out


class MemoryCartStorage:
    """Sin persistencia real: útil para sesiones sin DB y para tests."""

    def __init__(self, raw: str | None = None):
        self.raw = raw

    def load(self) -> list[CartLine]:
        return deserialize_lines(self.raw)

    def save(self, lines: list[CartLine]) -> None:
        self.raw = serialize_lines(lines)


class SqliteCartStorage:
    """
    Carrito guardado en la tabla settings (clave/valor) de la DB local.
    Cualquier falla se loguea y se sigue con el carrito en memoria.
    """

    def __init__(self, db_path: str, key: str = DEFAULT_CART_KEY):
        self.db_path = db_path
        self.key = key

    def _read_raw(self) -> tuple[str | None, str | None]:
        try:
            with open_db(self.db_path) as con:
                return get_setting(con, self.key, None), get_setting_updated_at(con, self.key)
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"No se pudo leer el carrito ({self.db_path}): {e}") from e

    def _write_raw(self, raw: str | None) -> None:
        """raw None borra la clave (carrito vacío)."""
        try:
            with open_db(self.db_path, create_dir=True) as con:
                with tx(con):
                    if raw is None:
                        delete_setting(con, self.key)
                    else:
                        set_setting(con, self.key, raw)
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"No se pudo guardar el carrito ({self.db_path}): {e}") from e

    def load(self) -> list[CartLine]:
        try:
            raw, saved_at = self._read_raw()
        except PersistenceError as e:
            log.warning("%s", e)
            return []
        lines = deserialize_lines(raw)
        if lines:
            log.info("Carrito recuperado: %d líneas (guardado %s)", len(lines), saved_at or "?")
        return lines

    def save(self, lines: list[CartLine]) -> None:
        try:
            self._write_raw(serialize_lines(lines) if lines else None)
        except PersistenceError as e:
            log.warning("%s", e)

# sqlModels/schema.py
from __future__ import annotations

SCHEMA_VERSION = 2

DDL = [
    """
    CREATE TABLE IF NOT EXISTS meta (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL
    )
    """,

    # Clave/valor: el carrito guardado vive acá (clave "priceListCart")
    """
    CREATE TABLE IF NOT EXISTS settings (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at TEXT
    )
    """,
]

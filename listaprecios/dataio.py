# listaprecios/dataio.py
"""
Conversión de inventario Excel → catálogo JSON (products.json).

  python -m listaprecios.dataio inventario.xlsx products.json
"""
from __future__ import annotations

import argparse
import os
import sys

import pandas as pd

from .catalog import Product, write_catalog_json
from .errors import CatalogLoadError
from .pricing import CurrencyCode
from .utils import to_float
from .logging_setup import get_logger

log = get_logger(__name__)


def _find_columns(df: pd.DataFrame):
    cols_lower = {str(c).strip().lower(): c for c in df.columns}

    def col(*cands, skip=()):
        # Busca coincidencia exacta (normalizada a lower), luego por "contiene".
        # Las columnas de skip ya fueron tomadas por otro campo.
        for cnd in cands:
            cnd_l = cnd.lower()
            if cnd_l in cols_lower and cols_lower[cnd_l] not in skip:
                return cols_lower[cnd_l]
        for key, orig in cols_lower.items():
            if orig in skip:
                continue
            for cnd in cands:
                if cnd.lower() in key:
                    return orig
        return None

    price_usd = col("precio usd", "precio u$s", "price_usd", "usd", "dolar", "dólar")
    return {
        "code": col("codigo", "código", "code", "cod.", "articulo", "artículo"),
        "description": col("descripcion", "descripción", "description", "nombre"),
        "brand": col("marca", "brand"),
        "currency": col("moneda", "currency"),
        "tax": col("tes", "iva", "tax"),
        "price": col("precio ars", "precio $", "price", "precio", skip=(price_usd,) if price_usd else ()),
        "price_usd": price_usd,
    }


def _cell_text(row, col) -> str:
    if not col:
        return ""
    v = row.get(col, "")
    if v is None or (isinstance(v, float) and pd.isna(v)):
        return ""
    if isinstance(v, float) and v.is_integer():
        v = int(v)
    return str(v).strip()


def productos_desde_dataframe(df: pd.DataFrame) -> list[Product]:
    df = df.dropna(how="all")
    cols = _find_columns(df)
    if not cols["code"]:
        raise CatalogLoadError("El inventario no tiene columna de código")

    records: list[Product] = []
    for _, row in df.iterrows():
        code = _cell_text(row, cols["code"])
        description = _cell_text(row, cols["description"])
        if not code and not description:
            continue

        currency = _cell_text(row, cols["currency"])
        price = to_float(row.get(cols["price"], 0) if cols["price"] else 0, 0.0)
        price_usd = to_float(row.get(cols["price_usd"], 0) if cols["price_usd"] else 0, 0.0)

        # Moneda "1" (pesos): el precio en USD no aplica
        if CurrencyCode.parse(currency) is CurrencyCode.LOCAL:
            price_usd = 0.0

        records.append(
            Product(
                code=code or description,
                description=description,
                brand=_cell_text(row, cols["brand"]),
                currency=currency,
                tax=_cell_text(row, cols["tax"]),
                price=price,
                price_foreign=price_usd,
                id=code or description,
            )
        )
    return records


def cargar_productos_desde_excel(path: str, header: int = 0) -> list[Product]:
    df = pd.read_excel(path, sheet_name=0, header=header, engine="openpyxl")
    productos = productos_desde_dataframe(df)
    log.info("Inventario %s: %d productos", os.path.basename(path), len(productos))
    return productos


def convertir_excel_a_json(xlsx_path: str, json_path: str, header: int = 0) -> int:
    productos = cargar_productos_desde_excel(xlsx_path, header=header)
    write_catalog_json(productos, json_path)
    log.info("Catálogo escrito en %s (%d productos)", json_path, len(productos))
    return len(productos)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Convierte un inventario Excel en products.json")
    parser.add_argument("xlsx", help="Inventario de entrada (.xlsx)")
    parser.add_argument("json", help="Catálogo de salida (.json)")
    parser.add_argument("--header", type=int, default=0, help="Fila de encabezados (0 = primera)")
    args = parser.parse_args(argv)

    try:
        n = convertir_excel_a_json(args.xlsx, args.json, header=args.header)
    except (CatalogLoadError, OSError, ValueError) as e:
        log.error("No se pudo convertir %s: %s", args.xlsx, e)
        return 1
    print(f"{n} productos → {args.json}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

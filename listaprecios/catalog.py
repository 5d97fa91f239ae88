# listaprecios/catalog.py
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Iterable

from .errors import CatalogLoadError
from .pricing import CurrencyCode
from .utils import nz
from .logging_setup import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class Product:
    """Producto del catálogo tal como viene de la fuente (no se modifica)."""
    code: str
    description: str = ""
    brand: str = ""
    currency: str = ""
    tax: str = ""
    price: float = 0.0           # base en pesos (moneda "1")
    price_foreign: float = 0.0   # base en USD (monedas "2" y "3")
    id: str = ""

    @property
    def currency_code(self) -> CurrencyCode | None:
        return CurrencyCode.parse(self.currency)


def _text(v: Any) -> str:
    if v is None:
        return ""
    if isinstance(v, float) and v.is_integer():
        v = int(v)
    return str(v).strip()


def _first(rec: dict, *keys: str) -> Any:
    for k in keys:
        if k in rec and rec[k] is not None:
            return rec[k]
    return None


def product_from_record(rec: dict) -> Product:
    """
    Registro del JSON de catálogo → Product.

    Llaves del archivo: code, description, brand, currency, tes, price,
    price_usd, id. También acepta tax / priceForeign / price_foreign.
    """
    code = _text(_first(rec, "code", "codigo"))
    return Product(
        code=code,
        description=_text(_first(rec, "description", "descripcion", "nombre")),
        brand=_text(_first(rec, "brand", "marca")),
        currency=_text(_first(rec, "currency", "moneda")),
        tax=_text(_first(rec, "tes", "tax")),
        price=nz(_first(rec, "price", "precio"), 0.0),
        price_foreign=nz(_first(rec, "price_usd", "priceForeign", "price_foreign"), 0.0),
        id=_text(_first(rec, "id")) or code,
    )


def product_to_record(p: Product) -> dict:
    return {
        "id": p.id or p.code,
        "code": p.code,
        "description": p.description,
        "brand": p.brand,
        "currency": p.currency,
        "tes": p.tax,
        "price": p.price,
        "price_usd": p.price_foreign,
    }


def parse_catalog(data: Any, source: str | None = None) -> list[Product]:
    """
    Lista cruda (JSON ya decodificado) → lista de Product en el mismo orden.
    Registros que no son objetos se descartan. Si la raíz no es una lista
    el catálogo está mal formado.
    """
    if not isinstance(data, list):
        raise CatalogLoadError("El catálogo debe ser una lista de productos", source)

    products: list[Product] = []
    skipped = 0
    for rec in data:
        if not isinstance(rec, dict):
            skipped += 1
            continue
        products.append(product_from_record(rec))

    if skipped:
        log.warning("Catálogo %s: %d registros ignorados (no son objetos)", source or "", skipped)
    _warn_unknown_currencies(products, source)
    return products


def _warn_unknown_currencies(products: Iterable[Product], source: str | None) -> None:
    unknown: dict[str, int] = {}
    for p in products:
        if p.currency_code is None:
            unknown[p.currency] = unknown.get(p.currency, 0) + 1
    if unknown:
        log.warning(
            "Catálogo %s: productos con moneda desconocida (se muestran sin precio): %s",
            source or "",
            unknown,
        )


def load_catalog(path: str) -> list[Product]:
    """
    Lee el catálogo una sola vez. .json → lista de productos;
    .xlsx → inventario Excel (ver dataio). Cualquier problema → CatalogLoadError.
    """
    if not path or not os.path.exists(path):
        raise CatalogLoadError(f"No se encontró el catálogo: {path}", path)

    if path.lower().endswith((".xlsx", ".xlsm", ".xls")):
        from .dataio import cargar_productos_desde_excel
        try:
            return cargar_productos_desde_excel(path)
        except CatalogLoadError:
            raise
        except Exception as e:
            raise CatalogLoadError(f"Error al leer '{os.path.basename(path)}': {e}", path) from e

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise CatalogLoadError(f"Error al cargar '{os.path.basename(path)}': {e}", path) from e

    products = parse_catalog(data, source=path)
    log.info("Catálogo cargado desde %s: %d productos", path, len(products))
    return products


def write_catalog_json(products: Iterable[Product], path: str) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump([product_to_record(p) for p in products], f, ensure_ascii=False, indent=2)

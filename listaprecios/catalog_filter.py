# listaprecios/catalog_filter.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .catalog import Product
from .pricing import CurrencyCode, ExchangeRates, resolve_product
from .textnorm import normalize_text


@dataclass(frozen=True)
class PricedProduct:
    product: Product
    effective_price: float
    applied_rate: float
    base_price_local: float

    @property
    def code(self) -> str:
        return self.product.code

    @property
    def description(self) -> str:
        return self.product.description

    @property
    def brand(self) -> str:
        return self.product.brand


def search_tokens(term) -> list[str]:
    return [w for w in normalize_text(term).split() if w]


def product_search_text(p: Product) -> str:
    return normalize_text(f"{p.description or ''} {p.code or ''} {p.brand or ''}")


def matches(p: Product, tokens: list[str]) -> bool:
    """Todas las palabras deben aparecer (como substring) en el texto del producto."""
    if not tokens:
        return True
    text = product_search_text(p)
    return all(w in text for w in tokens)


def price_product(p: Product, rates: ExchangeRates) -> PricedProduct:
    res = resolve_product(p, rates)
    return PricedProduct(
        product=p,
        effective_price=res.effective_price,
        applied_rate=res.applied_rate,
        base_price_local=p.price if p.currency_code is CurrencyCode.LOCAL else 0.0,
    )


def filter_catalog(products: Iterable[Product], search_term, rates: ExchangeRates) -> list[PricedProduct]:
    """
    Vista filtrada y con precios del catálogo. Conserva el orden de entrada.
    Sin término de búsqueda no filtra nada.
    """
    tokens = search_tokens(search_term) if search_term else []
    return [price_product(p, rates) for p in products if matches(p, tokens)]

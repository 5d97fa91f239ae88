# listaprecios/pricing.py
"""
Cálculo de precios.

Dos etapas, siempre en este orden:
  1) conversión a moneda local según el código de moneda del producto
     ("1" = pesos, "2" = USD billete, "3" = USD divisas)
  2) recargo de IVA según el código TES ("501" = 10,5 %, "503" = 21 %)

El IVA se aplica sobre el monto ya convertido, nunca sobre el base en USD.
No se redondea acá: el redondeo es cosa del formato de pantalla.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, TYPE_CHECKING

from .utils import nz, parse_rate_text

if TYPE_CHECKING:
    from .catalog import Product
    from .cart import CartLine


class CurrencyCode(Enum):
    LOCAL = "1"
    BILLETE = "2"
    DIVISAS = "3"

    @classmethod
    def parse(cls, raw) -> "CurrencyCode | None":
        """Código crudo del catálogo → miembro, o None si falta o es desconocido."""
        if isinstance(raw, cls):
            return raw
        code = str(raw).strip() if raw is not None else ""
        for member in cls:
            if member.value == code:
                return member
        return None


class TaxCode(Enum):
    IVA_10_5 = "501"
    IVA_21 = "503"

    @property
    def factor(self) -> float:
        return _TAX_FACTORS[self]

    @classmethod
    def parse(cls, raw) -> "TaxCode | None":
        if isinstance(raw, cls):
            return raw
        code = str(raw).strip() if raw is not None else ""
        for member in cls:
            if member.value == code:
                return member
        return None


_TAX_FACTORS = {
    TaxCode.IVA_10_5: 1.105,
    TaxCode.IVA_21: 1.21,
}


@dataclass(frozen=True)
class ExchangeRates:
    rate_billete: float = 0.0
    rate_divisas: float = 0.0

    @classmethod
    def from_text(cls, billete_text, divisas_text) -> "ExchangeRates":
        return cls(parse_rate_text(billete_text), parse_rate_text(divisas_text))


@dataclass(frozen=True)
class PriceResult:
    base_price: float
    effective_price: float
    applied_rate: float


def convert_to_local(currency, price_local, price_foreign, rates: ExchangeRates) -> tuple[float, float]:
    """Etapa 1 → (precio base en pesos, cotización aplicada)."""
    cur = CurrencyCode.parse(currency)
    if cur is CurrencyCode.LOCAL:
        return nz(price_local, 0.0), 1.0
    if cur is CurrencyCode.BILLETE:
        return nz(price_foreign, 0.0) * rates.rate_billete, rates.rate_billete
    if cur is CurrencyCode.DIVISAS:
        return nz(price_foreign, 0.0) * rates.rate_divisas, rates.rate_divisas
    # Moneda desconocida: producto sin precio
    return 0.0, 0.0


def apply_tax(base_price: float, tax) -> float:
    """Etapa 2: recargo de IVA sobre el precio ya convertido."""
    code = TaxCode.parse(tax)
    if code is None:
        return base_price
    return base_price * code.factor


def resolve_price(currency, tax, price_local, price_foreign, rates: ExchangeRates) -> PriceResult:
    base, rate = convert_to_local(currency, price_local, price_foreign, rates)
    return PriceResult(base_price=base, effective_price=apply_tax(base, tax), applied_rate=rate)


def resolve_product(product: "Product", rates: ExchangeRates) -> PriceResult:
    return resolve_price(product.currency, product.tax, product.price, product.price_foreign, rates)


# =========================
# Carrito
# =========================
@dataclass(frozen=True)
class CartLinePrice:
    code: str
    quantity: int
    unit_price: float
    line_total: float


@dataclass(frozen=True)
class CartPricing:
    lines: tuple[CartLinePrice, ...]
    total: float

    def for_code(self, code: str) -> CartLinePrice | None:
        for lp in self.lines:
            if lp.code == code:
                return lp
        return None


def price_cart_line(line: "CartLine", rates: ExchangeRates) -> CartLinePrice:
    """
    Mismo cálculo que resolve_price pero con los precios base capturados al
    agregar el producto, y las cotizaciones vigentes AHORA.
    """
    res = resolve_price(line.currency, line.tax, line.base_price_local, line.base_price_foreign, rates)
    return CartLinePrice(
        code=line.code,
        quantity=line.quantity,
        unit_price=res.effective_price,
        line_total=res.effective_price * line.quantity,
    )


def price_cart(lines: Iterable["CartLine"], rates: ExchangeRates) -> CartPricing:
    priced = tuple(price_cart_line(ln, rates) for ln in lines)
    return CartPricing(lines=priced, total=sum((lp.line_total for lp in priced), 0.0))


def cart_total(lines: Iterable["CartLine"], rates: ExchangeRates) -> float:
    return price_cart(lines, rates).total

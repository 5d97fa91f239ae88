# listaprecios/cart.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Protocol

from .pricing import CurrencyCode
from .utils import nz, parse_quantity_text
from .logging_setup import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class CartLine:
    code: str
    description: str = ""
    currency: str = ""
    tax: str = ""
    base_price_local: float = 0.0    # solo != 0 si currency == "1"
    base_price_foreign: float = 0.0
    quantity: int = 0


class CartStorage(Protocol):
    def load(self) -> list[CartLine]: ...

    def save(self, lines: list[CartLine]) -> None: ...


class CartStore:
    """
    Productos seleccionados, una línea por código.

    El carrito NO guarda precios calculados: guarda los precios base y la
    moneda al momento de agregar; el precio se recalcula con la cotización
    vigente cada vez que se muestra (ver pricing.price_cart).

    Si se pasa un storage, se lee una vez al construir y se guarda la lista
    completa después de cada cambio.
    """

    def __init__(self, storage: CartStorage | None = None):
        self._storage = storage
        self._lines: list[CartLine] = list(storage.load()) if storage is not None else []

    # =========================
    # Lectura
    # =========================
    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines)

    @property
    def codes(self) -> set[str]:
        return {ln.code for ln in self._lines}

    def __len__(self) -> int:
        return len(self._lines)

    def contains(self, code: str) -> bool:
        return self._index(code) >= 0

    def get(self, code: str) -> CartLine | None:
        i = self._index(code)
        return self._lines[i] if i >= 0 else None

    def _index(self, code: str) -> int:
        for i, ln in enumerate(self._lines):
            if ln.code == code:
                return i
        return -1

    # =========================
    # Cambios
    # =========================
    def _commit(self) -> None:
        if self._storage is not None:
            self._storage.save(list(self._lines))

    def _set_line_quantity(self, i: int, qty: int) -> None:
        self._lines[i] = replace(self._lines[i], quantity=qty)

    def add(self, product) -> CartLine:
        """
        Agrega un producto (Product o PricedProduct). Si ya está, suma 1.
        Captura moneda, TES y precios base en este momento.
        """
        prod = getattr(product, "product", product)
        i = self._index(prod.code)
        if i >= 0:
            self._set_line_quantity(i, max(1, self._lines[i].quantity + 1))
            line = self._lines[i]
            log.debug("Carrito: +1 %s (cantidad=%d)", line.code, line.quantity)
        else:
            is_local = CurrencyCode.parse(prod.currency) is CurrencyCode.LOCAL
            line = CartLine(
                code=prod.code,
                description=prod.description,
                currency=prod.currency,
                tax=prod.tax,
                base_price_local=nz(prod.price, 0.0) if is_local else 0.0,
                base_price_foreign=nz(prod.price_foreign, 0.0),
                quantity=1,
            )
            self._lines.append(line)
            log.debug("Carrito: agregado %s", line.code)
        self._commit()
        return line

    def remove(self, code: str) -> None:
        before = len(self._lines)
        self._lines = [ln for ln in self._lines if ln.code != code]
        if len(self._lines) != before:
            log.debug("Carrito: quitado %s", code)
        self._commit()

    def increment(self, code: str) -> None:
        i = self._index(code)
        if i < 0:
            return
        self._set_line_quantity(i, self._lines[i].quantity + 1)
        self._commit()

    def decrement(self, code: str) -> None:
        """Resta 1 sin bajar de 0. En 0 la línea queda (se quita con remove)."""
        i = self._index(code)
        if i < 0 or self._lines[i].quantity <= 0:
            return
        self._set_line_quantity(i, self._lines[i].quantity - 1)
        self._commit()

    def set_quantity(self, code: str, n: int) -> None:
        i = self._index(code)
        if i < 0:
            return
        self._set_line_quantity(i, max(0, int(n)))
        self._commit()

    def clear(self) -> None:
        self._lines = []
        log.debug("Carrito vaciado")
        self._commit()


class QuantityEditBuffer:
    """
    Texto en edición de la cantidad, por código.

    Mientras el usuario tipea se muestra el texto crudo (puede quedar vacío)
    en lugar de la cantidad guardada. Se confirma en el carrito solo cuando
    el texto es un entero; al perder el foco, si el texto quedó vacío o
    ilegible la cantidad pasa a 0, y la entrada se borra siempre.
    """

    def __init__(self, cart: CartStore):
        self._cart = cart
        self._pending: dict[str, str] = {}

    def __contains__(self, code: str) -> bool:
        return code in self._pending

    def pending(self) -> dict[str, str]:
        return dict(self._pending)

    def edit(self, code: str, text: str) -> None:
        text = "" if text is None else str(text)
        self._pending[code] = text
        if text.strip() == "":
            return
        qty = parse_quantity_text(text)
        if qty is None:
            return
        self._cart.set_quantity(code, max(0, qty))

    def blur(self, code: str) -> None:
        if code in self._pending:
            text = self._pending[code]
            if text.strip() == "" or parse_quantity_text(text) is None:
                self._cart.set_quantity(code, 0)
        self._pending.pop(code, None)

    def abandon(self, code: str) -> None:
        self._pending.pop(code, None)

    def display_value(self, code: str, quantity: int) -> str:
        if code in self._pending:
            return self._pending[code]
        return str(quantity)

    def prune(self, codes: set[str]) -> None:
        """Descarta ediciones de líneas que ya no están en el carrito."""
        for code in list(self._pending):
            if code not in codes:
                del self._pending[code]

# listaprecios/session.py
from __future__ import annotations

from enum import Enum

from .cart import CartLine, CartStore, CartStorage, QuantityEditBuffer
from .catalog import Product
from .catalog_filter import PricedProduct, filter_catalog
from .config import AppConfig
from .pricing import CartPricing, ExchangeRates, price_cart
from .reveal import RevealWindow
from .logging_setup import get_logger

log = get_logger(__name__)

NO_SPEECH = "no-speech"


class CatalogStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class PriceListSession:
    """
    Estado de una sesión de consulta: catálogo, búsqueda, cotizaciones,
    paginado y carrito.

    Cada cambio se aplica entero y después se recalculan, explícitamente,
    los valores derivados que dependen de él (lista filtrada, porción
    visible). El precio del carrito se calcula al pedirlo, con las
    cotizaciones vigentes.
    """

    def __init__(self, config: AppConfig | None = None, cart_storage: CartStorage | None = None):
        self.config = config or AppConfig()
        self._products: list[Product] = []
        self._status = CatalogStatus.IDLE
        self._load_error: str | None = None

        self._search_term = ""
        self._rate_billete_text = ""
        self._rate_divisas_text = ""
        self._rates = ExchangeRates()

        self._filtered: list[PricedProduct] = []
        self.reveal_window = RevealWindow(self.config.page_size)
        self._sentinel_visible = False

        self.cart = CartStore(cart_storage)
        self.edits = QuantityEditBuffer(self.cart)

    # =========================
    # Catálogo (carga única)
    # =========================
    @property
    def status(self) -> CatalogStatus:
        return self._status

    @property
    def is_loading(self) -> bool:
        return self._status is CatalogStatus.LOADING

    @property
    def load_error(self) -> str | None:
        return self._load_error

    @property
    def products(self) -> list[Product]:
        return list(self._products)

    def begin_catalog_load(self) -> None:
        if self._status is not CatalogStatus.IDLE:
            log.warning("Carga de catálogo ya iniciada (estado=%s); se ignora", self._status.value)
            return
        self._status = CatalogStatus.LOADING

    def _accepts_completion(self) -> bool:
        if self._status in (CatalogStatus.LOADED, CatalogStatus.FAILED):
            log.warning("El catálogo ya terminó de cargar (estado=%s); se ignora", self._status.value)
            return False
        return True

    def on_catalog_loaded(self, products: list[Product]) -> None:
        if not self._accepts_completion():
            return
        self._products = list(products or [])
        self._status = CatalogStatus.LOADED
        log.info("Catálogo disponible: %d productos", len(self._products))
        self._refilter(reset_window=True)

    def on_catalog_failed(self, error) -> None:
        if not self._accepts_completion():
            return
        self._status = CatalogStatus.FAILED
        self._load_error = str(error) or error.__class__.__name__
        log.error("Falló la carga del catálogo: %s", self._load_error)

    # =========================
    # Búsqueda y cotizaciones
    # =========================
    @property
    def search_term(self) -> str:
        return self._search_term

    def set_search_term(self, text: str) -> None:
        self._search_term = text or ""
        self._refilter(reset_window=True)

    @property
    def rate_billete_text(self) -> str:
        return self._rate_billete_text

    @property
    def rate_divisas_text(self) -> str:
        return self._rate_divisas_text

    @property
    def rates(self) -> ExchangeRates:
        return self._rates

    def set_rate_billete(self, text: str) -> None:
        self._rate_billete_text = text or ""
        self._update_rates()

    def set_rate_divisas(self, text: str) -> None:
        self._rate_divisas_text = text or ""
        self._update_rates()

    def _update_rates(self) -> None:
        new = ExchangeRates.from_text(self._rate_billete_text, self._rate_divisas_text)
        if new == self._rates:
            return
        self._rates = new
        log.debug("Cotizaciones: billete=%s divisas=%s", new.rate_billete, new.rate_divisas)
        self._refilter(reset_window=False)

    def _refilter(self, *, reset_window: bool) -> None:
        self._filtered = filter_catalog(self._products, self._search_term, self._rates)
        if reset_window:
            self.reveal_window.reset(len(self._filtered))
        else:
            self.reveal_window.set_total(len(self._filtered))

    # =========================
    # Resultados y paginado
    # =========================
    @property
    def filtered_products(self) -> list[PricedProduct]:
        return list(self._filtered)

    @property
    def visible_products(self) -> list[PricedProduct]:
        return self.reveal_window.visible_slice(self._filtered)

    @property
    def total_found(self) -> int:
        return len(self._filtered)

    @property
    def has_more(self) -> bool:
        return self.reveal_window.has_more

    def on_sentinel_visibility(self, visible: bool) -> bool:
        """
        Señal por nivel del "centinela" al final de la lista.
        Cada paso de no visible a visible muestra una página más.
        """
        visible = bool(visible)
        was = self._sentinel_visible
        self._sentinel_visible = visible
        if visible and not was:
            return self.reveal_window.reveal()
        return False

    # =========================
    # Voz
    # =========================
    def apply_voice_transcript(self, transcript: str) -> None:
        log.info("Búsqueda por voz: %r", transcript)
        self.set_search_term(transcript or "")

    def voice_error_message(self, error_code: str) -> str | None:
        """Mensaje para el usuario, o None si no hay que mostrar nada ("no-speech")."""
        code = str(error_code or "").strip()
        log.warning("Error en el reconocimiento de voz: %s", code or "desconocido")
        if code == NO_SPEECH:
            return None
        return f"Error de voz: {code or 'desconocido'}"

    # =========================
    # Carrito
    # =========================
    @property
    def cart_lines(self) -> list[CartLine]:
        return self.cart.lines

    def is_in_cart(self, code: str) -> bool:
        return self.cart.contains(code)

    def add_to_cart(self, product) -> CartLine:
        return self.cart.add(product)

    def remove_from_cart(self, code: str) -> None:
        self.cart.remove(code)
        self.edits.prune(self.cart.codes)

    def clear_cart(self) -> None:
        self.cart.clear()
        self.edits.prune(set())

    def increment(self, code: str) -> None:
        self.cart.increment(code)

    def decrement(self, code: str) -> None:
        self.cart.decrement(code)

    def set_quantity(self, code: str, n: int) -> None:
        self.cart.set_quantity(code, n)

    def edit_quantity(self, code: str, text: str) -> None:
        self.edits.edit(code, text)

    def blur_quantity(self, code: str) -> None:
        self.edits.blur(code)

    def abandon_quantity(self, code: str) -> None:
        self.edits.abandon(code)

    def displayed_quantity(self, code: str) -> str:
        line = self.cart.get(code)
        return self.edits.display_value(code, line.quantity if line else 0)

    def cart_pricing(self) -> CartPricing:
        return price_cart(self.cart.lines, self._rates)

    def cart_total(self) -> float:
        return self.cart_pricing().total

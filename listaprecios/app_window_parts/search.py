# listaprecios/app_window_parts/search.py
from __future__ import annotations

from ..session import CatalogStatus
from ..utils import found_label
from ..logging_setup import get_logger

log = get_logger(__name__)


class SearchMixin:
    def _on_search_changed(self, text: str):
        self.session.set_search_term(text)
        self._refresh_products(scroll_top=True)

    def _on_rate_billete_changed(self, text: str):
        self.session.set_rate_billete(text)
        self._refresh_after_rates()

    def _on_rate_divisas_changed(self, text: str):
        self.session.set_rate_divisas(text)
        self._refresh_after_rates()

    def _refresh_after_rates(self):
        self._refresh_products()
        self.cart_model.refresh_prices()

    def _on_catalog_loaded(self, products):
        self.session.on_catalog_loaded(products)
        self._refresh_products(scroll_top=True)

    def _on_catalog_failed(self, message: str):
        self.session.on_catalog_failed(message)
        self._refresh_products()

    def _refresh_products(self, scroll_top: bool = False):
        self.products_model.set_rows(self.session.visible_products)
        if scroll_top:
            self.table_products.scrollToTop()
        self._update_status_label()
        self.lbl_mas.setText("Desplazá hacia abajo para ver más…" if self.session.has_more else "")

    def _update_status_label(self):
        st = self.session.status
        if st is CatalogStatus.FAILED:
            self.lbl_estado.setStyleSheet("color: #b91c1c; font-weight: bold;")
            self.lbl_estado.setText(f"Error al cargar productos: {self.session.load_error}")
            return
        self.lbl_estado.setStyleSheet("")
        if st is CatalogStatus.LOADED:
            self.lbl_estado.setText(found_label(self.session.total_found))
        else:
            self.lbl_estado.setText("Cargando productos…")

    def _sample_sentinel(self, *_):
        """El final de la lista a la vista hace de centinela."""
        sb = self.table_products.verticalScrollBar()
        at_bottom = sb.maximum() == 0 or sb.value() >= sb.maximum()
        if self.session.on_sentinel_visibility(at_bottom):
            log.debug("Página extra: %d visibles", self.session.reveal_window.visible_count)
            self.products_model.set_rows(self.session.visible_products)
            self.lbl_mas.setText("Desplazá hacia abajo para ver más…" if self.session.has_more else "")

# listaprecios/app_window_parts/cart_actions.py
from __future__ import annotations

import os

from PySide6.QtWidgets import QMessageBox
from PySide6.QtGui import QDesktopServices
from PySide6.QtCore import QUrl, QModelIndex

from ..pdfgen import generar_pdf_seleccion
from ..utils import fmt_money_ui
from ..logging_setup import get_logger

log = get_logger(__name__)


class CartActionsMixin:
    def _on_product_activated(self, index: QModelIndex):
        if not index.isValid():
            return
        pp = self.products_model.row_product(index.row())
        if pp is None:
            return
        if self.session.is_in_cart(pp.code):
            # ya agregado: el botón "✓ Agregado" no hace nada
            return
        self.session.add_to_cart(pp)
        log.info("Agregado al carrito: %s", pp.code)
        self._refresh_cart()

    def _on_product_clicked(self, index: QModelIndex):
        # columna del botón "+ Agregar"
        if index.isValid() and index.column() == len(self.products_model.HEADERS) - 1:
            self._on_product_activated(index)

    def _selected_cart_code(self) -> str | None:
        idx = self.table_cart.currentIndex()
        if not idx.isValid():
            return None
        return self.cart_model.code_at(idx.row())

    def incrementar_seleccionado(self):
        code = self._selected_cart_code()
        if code is None:
            return
        self.session.increment(code)
        self.cart_model.refresh_prices()

    def decrementar_seleccionado(self):
        code = self._selected_cart_code()
        if code is None:
            return
        self.session.decrement(code)
        self.cart_model.refresh_prices()

    def quitar_seleccionado(self):
        code = self._selected_cart_code()
        if code is None:
            return
        self.session.remove_from_cart(code)
        self._refresh_cart()

    def vaciar_lista(self):
        if not self.session.cart_lines:
            return
        resp = QMessageBox.question(
            self, "Vaciar lista", "¿Quitar todos los productos seleccionados?"
        )
        if resp != QMessageBox.Yes:
            return
        self.session.clear_cart()
        self._refresh_cart()

    def _refresh_cart(self):
        self.cart_model.refresh()
        self.products_model.refresh_in_cart()
        self.box_carrito.setVisible(bool(self.session.cart_lines))

    def _update_total_label(self, total: float):
        self.lbl_total.setText(f"Total ({self.session.config.currency_label}): {fmt_money_ui(total)}")

    def exportar_pdf(self):
        lines = self.session.cart_lines
        if not lines:
            QMessageBox.warning(self, "Advertencia", "❌ No hay productos seleccionados")
            return
        try:
            path = generar_pdf_seleccion(lines, self.session.rates, self._exports_dir)
        except OSError as e:
            log.exception("Error generando PDF")
            QMessageBox.critical(self, "Error", f"❌ No se pudo generar el PDF:\n{e}")
            return
        log.info("PDF generado: %s", path)
        QMessageBox.information(self, "PDF", f"✅ PDF generado:\n{path}")
        QDesktopServices.openUrl(QUrl.fromLocalFile(os.path.abspath(path)))

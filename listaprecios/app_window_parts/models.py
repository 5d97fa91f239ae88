# listaprecios/app_window_parts/models.py
from __future__ import annotations

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt, Signal
from PySide6.QtGui import QBrush

from ..catalog_filter import PricedProduct
from ..session import PriceListSession
from ..utils import fmt_money_ui, currency_type_label
from ..logging_setup import get_logger

log = get_logger(__name__)


class ProductsModel(QAbstractTableModel):
    """Porción visible de la lista filtrada (ya con precio final)."""
    HEADERS = ["Código", "Descripción", "Marca", "Moneda", "Precio USD", "Precio Final", ""]

    def __init__(self, session: PriceListSession):
        super().__init__()
        self._session = session
        self._rows: list[PricedProduct] = []

    def set_rows(self, rows: list[PricedProduct]) -> None:
        self.beginResetModel()
        self._rows = list(rows)
        self.endResetModel()

    def row_product(self, row: int) -> PricedProduct | None:
        if 0 <= row < len(self._rows):
            return self._rows[row]
        return None

    def refresh_in_cart(self) -> None:
        if self._rows:
            col = len(self.HEADERS) - 1
            self.dataChanged.emit(self.index(0, 0), self.index(len(self._rows) - 1, col))

    def rowCount(self, parent=QModelIndex()) -> int:
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()) -> int:
        return len(self.HEADERS)

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole:
            return None
        if orientation == Qt.Horizontal:
            return self.HEADERS[section]
        return str(section + 1)

    def flags(self, index):
        if not index.isValid():
            return Qt.ItemIsEnabled
        return Qt.ItemIsEnabled | Qt.ItemIsSelectable

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        pp = self._rows[index.row()]
        col = index.column()
        in_cart = self._session.is_in_cart(pp.code)

        if role == Qt.ForegroundRole and in_cart:
            return QBrush(Qt.darkGreen)

        if role == Qt.TextAlignmentRole and col in (4, 5):
            return int(Qt.AlignRight | Qt.AlignVCenter)

        if role == Qt.DisplayRole:
            p = pp.product
            if col == 0:
                return p.code
            if col == 1:
                return p.description
            if col == 2:
                return p.brand or "-"
            if col == 3:
                return currency_type_label(p.currency)
            if col == 4:
                return fmt_money_ui(p.price_foreign) if p.price_foreign > 0 else "-"
            if col == 5:
                return fmt_money_ui(pp.effective_price)
            if col == 6:
                return "✓ Agregado" if in_cart else "+ Agregar"
        return None


class CartModel(QAbstractTableModel):
    """
    Líneas del carrito. Precio y subtotal se calculan en cada refresh con
    la cotización vigente de la sesión.
    """
    HEADERS = ["Código", "Descripción", "Cantidad", "Precio Unit.", "Subtotal"]
    QTY_COL = 2

    totals_changed = Signal(float)

    def __init__(self, session: PriceListSession):
        super().__init__()
        self._session = session
        self._codes: list[str] = []
        self._pricing = session.cart_pricing()

    def refresh(self) -> None:
        self.beginResetModel()
        self._codes = [ln.code for ln in self._session.cart_lines]
        self._pricing = self._session.cart_pricing()
        self.endResetModel()
        self.totals_changed.emit(self._pricing.total)

    def refresh_prices(self) -> None:
        """Cambió la cotización o una cantidad: mismas filas, nuevos importes."""
        self._pricing = self._session.cart_pricing()
        if self._codes:
            self.dataChanged.emit(
                self.index(0, self.QTY_COL),
                self.index(len(self._codes) - 1, self.columnCount() - 1),
                [Qt.DisplayRole, Qt.EditRole],
            )
        self.totals_changed.emit(self._pricing.total)

    def code_at(self, row: int) -> str | None:
        if 0 <= row < len(self._codes):
            return self._codes[row]
        return None

    def rowCount(self, parent=QModelIndex()) -> int:
        return len(self._codes)

    def columnCount(self, parent=QModelIndex()) -> int:
        return len(self.HEADERS)

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole:
            return None
        if orientation == Qt.Horizontal:
            return self.HEADERS[section]
        return str(section + 1)

    def flags(self, index):
        if not index.isValid():
            return Qt.ItemIsEnabled
        base = Qt.ItemIsEnabled | Qt.ItemIsSelectable
        if index.column() == self.QTY_COL:
            return base | Qt.ItemIsEditable
        return base

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        code = self._codes[index.row()]
        col = index.column()
        line = self._session.cart.get(code)
        if line is None:
            return None

        if role == Qt.TextAlignmentRole and col >= self.QTY_COL:
            return int(Qt.AlignRight | Qt.AlignVCenter)

        if role in (Qt.DisplayRole, Qt.EditRole):
            if col == 0:
                return line.code
            if col == 1:
                return line.description
            if col == self.QTY_COL:
                return self._session.displayed_quantity(code)
            lp = self._pricing.for_code(code)
            if lp is None:
                return None
            if col == 3:
                return fmt_money_ui(lp.unit_price)
            if col == 4:
                return fmt_money_ui(lp.line_total)
        return None

    def setData(self, index, value, role=Qt.EditRole):
        if role != Qt.EditRole or not index.isValid() or index.column() != self.QTY_COL:
            return False
        code = self._codes[index.row()]
        self._session.edit_quantity(code, "" if value is None else str(value))
        self.refresh_prices()
        return True

    def preview_quantity(self, row: int, text: str) -> None:
        """Texto parcial mientras se tipea (queda en el buffer de edición)."""
        code = self.code_at(row)
        if code is None:
            return
        self._session.edit_quantity(code, text)
        self.refresh_prices()

    def blur_row(self, row: int) -> None:
        code = self.code_at(row)
        if code is None:
            return
        self._session.blur_quantity(code)
        log.debug("Cantidad confirmada %s → %s", code, self._session.displayed_quantity(code))
        self.refresh_prices()

    def abandon_row(self, row: int) -> None:
        """Escape: se descarta el texto en edición y vuelve la cantidad guardada."""
        code = self.code_at(row)
        if code is None:
            return
        self._session.abandon_quantity(code)
        self.refresh_prices()

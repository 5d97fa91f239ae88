import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
pytest.importorskip("PySide6.QtWidgets")

from PySide6.QtCore import Qt
from PySide6.QtTest import QTest
from PySide6.QtWidgets import QApplication, QTableView

from listaprecios.app_window_parts.delegates import QuantityDelegate
from listaprecios.app_window_parts.models import CartModel
from listaprecios.cart_storage import MemoryCartStorage
from listaprecios.session import PriceListSession


@pytest.fixture(scope="module")
def qapp():
    return QApplication.instance() or QApplication([])


@pytest.fixture
def tabla(qapp, catalogo):
    session = PriceListSession(cart_storage=MemoryCartStorage())
    session.add_to_cart(catalogo[0])
    session.add_to_cart(catalogo[1])
    model = CartModel(session)
    model.refresh()
    view = QTableView()
    view.setModel(model)
    view.setItemDelegateForColumn(CartModel.QTY_COL, QuantityDelegate(view))
    view.show()
    yield session, model, view
    view.close()


def _abrir_editor(view, model, row):
    idx = model.index(row, CartModel.QTY_COL)
    view.setCurrentIndex(idx)
    view.edit(idx)
    editor = view.indexWidget(idx)
    assert editor is not None
    return editor


def test_cambiar_de_fila_confirma_la_fila_editada(tabla):
    session, model, view = tabla
    editor = _abrir_editor(view, model, 0)
    editor.clear()
    model.preview_quantity(0, "")
    assert session.displayed_quantity("10001") == ""

    view.setCurrentIndex(model.index(1, CartModel.QTY_COL))

    assert session.edits.pending() == {}
    assert session.cart.get("10001").quantity == 0
    assert session.displayed_quantity("10001") == "0"
    # la otra fila no se toca
    assert session.cart.get("Z10").quantity == 1


def test_escape_descarta_la_edicion(tabla):
    session, model, view = tabla
    editor = _abrir_editor(view, model, 1)
    editor.clear()
    model.preview_quantity(1, "")

    QTest.keyClick(editor, Qt.Key_Escape)

    assert session.edits.pending() == {}
    assert session.cart.get("Z10").quantity == 1
    assert session.displayed_quantity("Z10") == "1"

# listaprecios/app_window_parts/delegates.py
from __future__ import annotations

from PySide6.QtWidgets import QLineEdit, QStyledItemDelegate
from PySide6.QtGui import QRegularExpressionValidator
from PySide6.QtCore import QEvent, QRegularExpression, Qt


class QuantityDelegate(QStyledItemDelegate):
    """
    Delegate para la columna 'Cantidad':
    solo dígitos (y un '-' inicial, que después se lleva a 0).
    Cada tecla pasa al buffer de edición del modelo; vacío es un estado válido
    mientras se edita.

    Al cerrarse el editor se confirma la fila que se estaba editando (no la
    fila actual de la tabla, que ya puede ser otra). Con Escape se descarta
    el texto en edición.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._cancelled: set[int] = set()

    def createEditor(self, parent, option, index):
        editor = QLineEdit(parent)
        rx = QRegularExpression(r"^-?[0-9]*$")
        editor.setValidator(QRegularExpressionValidator(rx, editor))
        model = index.model()
        row = index.row()
        if hasattr(model, "preview_quantity"):
            editor.textEdited.connect(lambda text: model.preview_quantity(row, text))
        return editor

    def setEditorData(self, editor, index):
        editor.setText(str(index.data(Qt.EditRole) or ""))

    def setModelData(self, editor, model, index):
        model.setData(index, editor.text(), Qt.EditRole)

    def eventFilter(self, editor, event):
        if event.type() == QEvent.KeyPress and event.key() == Qt.Key_Escape:
            self._cancelled.add(id(editor))
        return super().eventFilter(editor, event)

    def destroyEditor(self, editor, index):
        cancelled = id(editor) in self._cancelled
        self._cancelled.discard(id(editor))
        model = index.model()
        if index.isValid() and model is not None:
            if cancelled and hasattr(model, "abandon_row"):
                model.abandon_row(index.row())
            elif hasattr(model, "blur_row"):
                model.blur_row(index.row())
        super().destroyEditor(editor, index)

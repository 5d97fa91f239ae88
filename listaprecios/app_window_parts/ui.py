# listaprecios/app_window_parts/ui.py
from __future__ import annotations

from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QGroupBox,
    QHeaderView,
    QAbstractItemView,
    QTableView,
    QSplitter,
)
from PySide6.QtCore import Qt

from .models import ProductsModel, CartModel
from .delegates import QuantityDelegate


class UiMixin:
    def _center_on_screen(self):
        scr = self.screen()
        if not scr:
            return
        geo = self.frameGeometry()
        geo.moveCenter(scr.availableGeometry().center())
        self.move(geo.topLeft())

    def showEvent(self, event):
        super().showEvent(event)
        if not self._shown_once:
            self._shown_once = True
            self._center_on_screen()

    def _build_ui(self):
        central = QWidget()
        root = QVBoxLayout(central)

        # ===== Búsqueda + cotizaciones =====
        top = QHBoxLayout()
        self.entry_buscar = QLineEdit()
        self.entry_buscar.setPlaceholderText("Buscar por descripción, código o marca…")
        self.entry_buscar.setClearButtonEnabled(True)
        top.addWidget(self.entry_buscar, 3)

        self.entry_billete = QLineEdit()
        self.entry_billete.setPlaceholderText("Cotización USD Billete")
        self.entry_divisas = QLineEdit()
        self.entry_divisas.setPlaceholderText("Cotización USD Divisas")
        for e in (self.entry_billete, self.entry_divisas):
            e.setMaximumWidth(190)
        top.addWidget(QLabel("USD Billete:"))
        top.addWidget(self.entry_billete)
        top.addWidget(QLabel("USD Divisas:"))
        top.addWidget(self.entry_divisas)
        root.addLayout(top)

        self.lbl_estado = QLabel("Cargando productos…")
        root.addWidget(self.lbl_estado)

        splitter = QSplitter(Qt.Vertical)

        # ===== Carrito =====
        self.box_carrito = QGroupBox("Productos Seleccionados")
        cart_layout = QVBoxLayout(self.box_carrito)

        self.cart_model = CartModel(self.session)
        self.table_cart = QTableView()
        self.table_cart.setModel(self.cart_model)
        self.table_cart.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table_cart.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table_cart.setEditTriggers(
            QAbstractItemView.DoubleClicked
            | QAbstractItemView.SelectedClicked
            | QAbstractItemView.EditKeyPressed
            | QAbstractItemView.AnyKeyPressed
        )
        self.qty_delegate = QuantityDelegate(self.table_cart)
        self.table_cart.setItemDelegateForColumn(CartModel.QTY_COL, self.qty_delegate)
        hh = self.table_cart.horizontalHeader()
        hh.setSectionResizeMode(QHeaderView.ResizeToContents)
        hh.setSectionResizeMode(1, QHeaderView.Stretch)
        cart_layout.addWidget(self.table_cart)

        btns = QHBoxLayout()
        self.btn_menos = QPushButton("−")
        self.btn_mas = QPushButton("+")
        self.btn_quitar = QPushButton("Quitar")
        self.btn_vaciar = QPushButton("Vaciar Lista")
        self.btn_pdf = QPushButton("Exportar PDF")
        for b in (self.btn_menos, self.btn_mas, self.btn_quitar, self.btn_vaciar, self.btn_pdf):
            btns.addWidget(b)
        btns.addStretch(1)
        self.lbl_total = QLabel()
        self.lbl_total.setStyleSheet("font-weight: bold; font-size: 15px;")
        btns.addWidget(self.lbl_total)
        cart_layout.addLayout(btns)
        splitter.addWidget(self.box_carrito)

        # ===== Listado =====
        self.products_model = ProductsModel(self.session)
        self.table_products = QTableView()
        self.table_products.setModel(self.products_model)
        self.table_products.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table_products.setEditTriggers(QAbstractItemView.NoEditTriggers)
        ph = self.table_products.horizontalHeader()
        ph.setSectionResizeMode(QHeaderView.ResizeToContents)
        ph.setSectionResizeMode(1, QHeaderView.Stretch)
        splitter.addWidget(self.table_products)
        splitter.setStretchFactor(1, 3)

        root.addWidget(splitter, 1)

        self.lbl_mas = QLabel("")
        self.lbl_mas.setAlignment(Qt.AlignCenter)
        root.addWidget(self.lbl_mas)

        self.setCentralWidget(central)

    def _wire_signals(self):
        self.entry_buscar.textChanged.connect(self._on_search_changed)
        self.entry_billete.textChanged.connect(self._on_rate_billete_changed)
        self.entry_divisas.textChanged.connect(self._on_rate_divisas_changed)

        self.table_products.verticalScrollBar().valueChanged.connect(self._sample_sentinel)
        self.table_products.verticalScrollBar().rangeChanged.connect(lambda *_: self._sample_sentinel())
        self.table_products.doubleClicked.connect(self._on_product_activated)
        self.table_products.clicked.connect(self._on_product_clicked)

        self.btn_mas.clicked.connect(self.incrementar_seleccionado)
        self.btn_menos.clicked.connect(self.decrementar_seleccionado)
        self.btn_quitar.clicked.connect(self.quitar_seleccionado)
        self.btn_vaciar.clicked.connect(self.vaciar_lista)
        self.btn_pdf.clicked.connect(self.exportar_pdf)

        self.cart_model.totals_changed.connect(self._update_total_label)

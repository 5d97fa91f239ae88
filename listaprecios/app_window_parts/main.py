# listaprecios/app_window_parts/main.py
from __future__ import annotations

from PySide6.QtWidgets import QMainWindow
from PySide6.QtGui import QIcon

from ..paths import BASE_APP_TITLE
from ..session import PriceListSession
from ..catalog_manager import CatalogManager
from ..logging_setup import get_logger

from .ui import UiMixin
from .search import SearchMixin
from .cart_actions import CartActionsMixin

log = get_logger(__name__)


class PriceListWindow(
    UiMixin,
    SearchMixin,
    CartActionsMixin,
    QMainWindow,
):
    def __init__(
        self,
        session: PriceListSession,
        catalog_manager: CatalogManager,
        app_icon: QIcon,
        exports_dir: str,
    ):
        super().__init__()
        self.setWindowTitle(BASE_APP_TITLE)
        self.resize(1100, 720)
        if not app_icon.isNull():
            self.setWindowIcon(app_icon)

        self.session = session
        self._catalog_manager = catalog_manager
        self._exports_dir = exports_dir
        self._shown_once = False

        self._build_ui()
        self._wire_signals()

        catalog_manager.catalog_loaded.connect(self._on_catalog_loaded)
        catalog_manager.catalog_failed.connect(self._on_catalog_failed)

        self._refresh_cart()
        self._refresh_products()

        log.info(
            "Ventana iniciada. catálogo=%s carrito=%d",
            catalog_manager.source,
            len(session.cart_lines),
        )

# listaprecios/app.py
import sys
from PySide6.QtWidgets import QApplication

from .paths import set_win_app_id, load_app_icon, default_catalog_path, exports_dir
from .config import load_app_config
from .db_path import resolve_db_path
from .cart_storage import SqliteCartStorage, MemoryCartStorage
from .session import PriceListSession
from .catalog_manager import CatalogManager
from .app_window import PriceListWindow
from .logging_setup import get_logger, init_logging

log = get_logger(__name__)


def run_app():
    config = load_app_config()
    init_logging(level=config.log_level, log_dir=config.log_dir)
    log.info("Config: %s", config.source_path or "(defaults)")

    set_win_app_id()
    app = QApplication(sys.argv)

    app_icon = load_app_icon()
    if not app_icon.isNull():
        app.setWindowIcon(app_icon)

    db_path = resolve_db_path(config.db_path)
    if db_path:
        storage = SqliteCartStorage(db_path, key=config.cart_storage_key)
    else:
        log.warning("Sin base de datos: el carrito no se guardará entre sesiones")
        storage = MemoryCartStorage()

    session = PriceListSession(config, cart_storage=storage)

    catalog_path = config.catalog_path or default_catalog_path()
    manager = CatalogManager(catalog_path)

    window = PriceListWindow(session, manager, app_icon=app_icon, exports_dir=exports_dir())
    window.show()

    session.begin_catalog_load()
    manager.start()
    sys.exit(app.exec())

# listaprecios/catalog_manager.py
from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QObject, QTimer, Signal

from .catalog import Product, load_catalog
from .errors import CatalogLoadError
from .logging_setup import get_logger

log = get_logger(__name__)


class CatalogManager(QObject):
    """
    Carga única del catálogo en runtime.

    start() agenda la lectura en el event loop (no bloquea al que llama) y al
    terminar emite UNA sola de las señales: catalog_loaded(list[Product]) o
    catalog_failed(str). No reintenta.
    """
    catalog_loaded = Signal(object)   # list[Product]
    catalog_failed = Signal(str)

    def __init__(self, source: str, loader: Callable[[str], list[Product]] = load_catalog):
        super().__init__()
        self._source = source
        self._loader = loader
        self._started = False
        self._done = False

    @property
    def source(self) -> str:
        return self._source

    @property
    def done(self) -> bool:
        return self._done

    def start(self) -> bool:
        if self._started:
            log.warning("La carga del catálogo ya fue iniciada: %s", self._source)
            return False
        self._started = True
        QTimer.singleShot(0, self.run_load)
        return True

    def run_load(self) -> None:
        if self._done:
            return
        self._started = True
        try:
            products = self._loader(self._source)
        except CatalogLoadError as e:
            self._done = True
            log.error("Error cargando catálogo (%s): %s", self._source, e)
            self.catalog_failed.emit(str(e))
            return
        except Exception as e:
            self._done = True
            log.exception("Error inesperado cargando catálogo (%s)", self._source)
            self.catalog_failed.emit(f"{e.__class__.__name__}: {e}")
            return
        self._done = True
        log.info("Productos cargados: %d", len(products))
        self.catalog_loaded.emit(products)

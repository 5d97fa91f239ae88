# listaprecios/errors.py
from __future__ import annotations


class ListaPreciosError(Exception):
    """Base de los errores propios de la app."""


class CatalogLoadError(ListaPreciosError):
    """El catálogo no se pudo leer (archivo ausente, ilegible o mal formado)."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


class PersistenceError(ListaPreciosError):
    """Falla de lectura/escritura del carrito guardado."""

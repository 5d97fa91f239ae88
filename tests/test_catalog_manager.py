import pytest

pytest.importorskip("PySide6.QtCore")

from listaprecios.catalog import Product
from listaprecios.catalog_manager import CatalogManager
from listaprecios.errors import CatalogLoadError


def _collect(mgr):
    got = {"loaded": [], "failed": []}
    mgr.catalog_loaded.connect(lambda products: got["loaded"].append(products))
    mgr.catalog_failed.connect(lambda msg: got["failed"].append(msg))
    return got


def test_carga_ok_emite_una_vez():
    mgr = CatalogManager("mem", loader=lambda src: [Product(code="A")])
    got = _collect(mgr)
    mgr.run_load()
    mgr.run_load()
    assert len(got["loaded"]) == 1
    assert got["loaded"][0][0].code == "A"
    assert got["failed"] == []
    assert mgr.done


def test_error_de_catalogo():
    def loader(src):
        raise CatalogLoadError("No se encontró el catálogo", src)

    mgr = CatalogManager("no.json", loader=loader)
    got = _collect(mgr)
    mgr.run_load()
    assert got["failed"] == ["No se encontró el catálogo"]
    assert got["loaded"] == []


def test_error_inesperado():
    def loader(src):
        raise RuntimeError("boom")

    mgr = CatalogManager("x", loader=loader)
    got = _collect(mgr)
    mgr.run_load()
    assert got["failed"] == ["RuntimeError: boom"]

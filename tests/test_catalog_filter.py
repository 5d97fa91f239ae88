import pytest

from listaprecios.catalog_filter import filter_catalog, search_tokens
from listaprecios.pricing import ExchangeRates

RATES = ExchangeRates(rate_billete=1000.0, rate_divisas=1100.0)


def _codes(rows):
    return [r.code for r in rows]


def test_sin_busqueda_devuelve_todo_en_orden(catalogo):
    assert _codes(filter_catalog(catalogo, "", RATES)) == ["10001", "Z10", "D77", "X01"]
    assert _codes(filter_catalog(catalogo, "   ", RATES)) == ["10001", "Z10", "D77", "X01"]


def test_orden_de_palabras_no_importa(catalogo):
    a = filter_catalog(catalogo, "latex alba", RATES)
    b = filter_catalog(catalogo, "alba latex", RATES)
    assert _codes(a) == _codes(b) == ["10001", "X01"]


def test_acentos_y_mayusculas(catalogo):
    assert _codes(filter_catalog(catalogo, "LÁTEX interior", RATES)) == ["10001"]


def test_busca_en_codigo_y_marca(catalogo):
    assert _codes(filter_catalog(catalogo, "z10", RATES)) == ["Z10"]
    assert _codes(filter_catalog(catalogo, "sherwin", RATES)) == ["D77"]


def test_todas_las_palabras_en_el_mismo_producto(catalogo):
    assert filter_catalog(catalogo, "10001 z10", RATES) == []


def test_precio_calculado_en_la_vista(catalogo):
    rows = {r.code: r for r in filter_catalog(catalogo, "", RATES)}
    assert rows["10001"].effective_price == pytest.approx(50000.0 * 1.21)
    assert rows["10001"].base_price_local == 50000.0
    assert rows["Z10"].applied_rate == 1000.0
    assert rows["Z10"].base_price_local == 0.0
    assert rows["X01"].effective_price == 0.0


def test_tokens():
    assert search_tokens("  Látex   ALBA ") == ["latex", "alba"]
    assert search_tokens("") == []

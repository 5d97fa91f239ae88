import pytest

import listaprecios.pricing as pr
from listaprecios.cart import CartStore
from listaprecios.catalog import Product
from listaprecios.catalog_filter import price_product

RATES = pr.ExchangeRates(rate_billete=1000.0, rate_divisas=1100.0)


@pytest.mark.parametrize("rates", [
    pr.ExchangeRates(),
    pr.ExchangeRates(1.0, 2.0),
    pr.ExchangeRates(1500.0, 0.0),
])
def test_moneda_local_no_depende_de_cotizaciones(rates):
    res = pr.resolve_price("1", "", 1234.5, 99.0, rates)
    assert res.base_price == 1234.5
    assert res.effective_price == 1234.5
    assert res.applied_rate == 1.0


def test_billete_escala_con_cotizacion():
    assert pr.resolve_price("2", "", 0, 10.0, pr.ExchangeRates(0.0, 5.0)).effective_price == 0.0
    a = pr.resolve_price("2", "", 0, 10.0, pr.ExchangeRates(1000.0, 0.0)).effective_price
    b = pr.resolve_price("2", "", 0, 10.0, pr.ExchangeRates(2000.0, 0.0)).effective_price
    assert b == pytest.approx(2 * a)


def test_divisas_usa_su_cotizacion():
    res = pr.resolve_price("3", "", 0, 4.0, RATES)
    assert res.base_price == pytest.approx(4400.0)
    assert res.applied_rate == 1100.0


@pytest.mark.parametrize("currency", ["1", "2", "3"])
def test_iva_se_aplica_sobre_convertido(currency):
    sin = pr.resolve_price(currency, "", 200.0, 10.0, RATES).effective_price
    assert pr.resolve_price(currency, "501", 200.0, 10.0, RATES).effective_price == pytest.approx(sin * 1.105)
    assert pr.resolve_price(currency, "503", 200.0, 10.0, RATES).effective_price == pytest.approx(sin * 1.21)


def test_tes_desconocido_no_recarga():
    assert pr.apply_tax(100.0, "999") == 100.0
    assert pr.apply_tax(100.0, None) == 100.0


def test_moneda_desconocida_sin_precio():
    res = pr.resolve_price("9", "503", 100.0, 1.0, RATES)
    assert res == pr.PriceResult(0.0, 0.0, 0.0)


def test_rates_desde_texto():
    r = pr.ExchangeRates.from_text("1200,5", "abc")
    assert r.rate_billete == pytest.approx(1200.5)
    assert r.rate_divisas == 0.0
    assert pr.ExchangeRates.from_text("-3", "").rate_billete == 0.0


def test_z10_de_punta_a_punta():
    z10 = Product(code="Z10", currency="2", price_foreign=10.0, tax="501")
    pp = price_product(z10, pr.ExchangeRates(rate_billete=1000.0))
    assert pp.effective_price == pytest.approx(11050.0)
    assert pr.resolve_product(z10, pr.ExchangeRates(rate_billete=1000.0)).base_price == pytest.approx(10000.0)

    cart = CartStore()
    cart.add(pp)
    cart.add(pp)
    assert pr.cart_total(cart.lines, pr.ExchangeRates(rate_billete=1000.0)) == pytest.approx(22100.0)

    # sube la cotización: el carrito se recalcula sin volver a agregar
    pricing = pr.price_cart(cart.lines, pr.ExchangeRates(rate_billete=1200.0))
    assert pricing.for_code("Z10").line_total == pytest.approx(26520.0)
    assert pricing.total == pytest.approx(26520.0)


def test_carrito_vacio_total_cero():
    pricing = pr.price_cart([], RATES)
    assert pricing.lines == ()
    assert pricing.total == 0.0
    assert pricing.for_code("X") is None

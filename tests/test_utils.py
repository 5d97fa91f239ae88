from listaprecios.utils import (
    currency_type_label,
    fmt_money_ui,
    fmt_rate,
    found_label,
    parse_quantity_text,
    parse_rate_text,
)


def test_fmt_money_ui():
    assert fmt_money_ui(11050) == "$ 11.050,00"
    assert fmt_money_ui(1234567.891) == "$ 1.234.567,89"
    assert fmt_money_ui(-5.5) == "-$ 5,50"
    assert fmt_money_ui(None) == "$ 0,00"


def test_parse_rate_text():
    assert parse_rate_text("1200") == 1200.0
    assert parse_rate_text(" 1200,5 ") == 1200.5
    assert parse_rate_text("1200 ars") == 1200.0
    assert parse_rate_text("") == 0.0
    assert parse_rate_text("abc") == 0.0
    assert parse_rate_text("-10") == 0.0
    assert parse_rate_text(None) == 0.0


def test_parse_quantity_text():
    assert parse_quantity_text(" 12 ") == 12
    assert parse_quantity_text("4.5") == 4
    assert parse_quantity_text("-2") == -2
    assert parse_quantity_text("") is None
    assert parse_quantity_text("abc") is None


def test_etiquetas():
    assert currency_type_label("1") == "ARS"
    assert currency_type_label("2") == "USD Billete"
    assert currency_type_label("3") == "USD Divisas"
    assert currency_type_label(None) == "-"
    assert found_label(1) == "1 producto encontrados"
    assert found_label(0) == "0 productos encontrados"
    assert fmt_rate(0) == "-"
    assert fmt_rate(1200) == "1200.00"


def test_to_float_separadores():
    from listaprecios.utils import to_float

    assert to_float("1.234,56") == 1234.56
    assert to_float("1,234.56") == 1234.56
    assert to_float("12,5") == 12.5
    assert to_float("1.234.567") == 1234567.0
    assert to_float("$ 100") == 100.0
    assert to_float("") == 0.0
    assert to_float("abc", 7.0) == 7.0
    assert parse_rate_text("1.234,5") == 1234.5

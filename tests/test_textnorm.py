from listaprecios.textnorm import normalize_text


def test_normalize_ignora_acentos_y_mayusculas():
    assert normalize_text("Látex") == normalize_text("latex") == normalize_text("LATEX") == "latex"


def test_normalize_vacios():
    assert normalize_text(None) == ""
    assert normalize_text("") == ""


def test_normalize_enie_y_dieresis():
    assert normalize_text("Ñandú Pingüino") == "nandu pinguino"


def test_normalize_no_texto():
    assert normalize_text(10001) == "10001"

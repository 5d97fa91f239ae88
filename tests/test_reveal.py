import pytest

from listaprecios.reveal import RevealWindow


def test_reset_muestra_una_pagina():
    w = RevealWindow(50, total=120)
    assert w.visible_count == 50
    assert w.has_more


def test_reset_con_pocos_resultados():
    w = RevealWindow(50, total=7)
    assert w.visible_count == 7
    assert not w.has_more


def test_reveal_nunca_supera_total():
    w = RevealWindow(50, total=120)
    assert w.reveal() is True
    assert w.visible_count == 100
    assert w.reveal() is True
    assert w.visible_count == 120
    for _ in range(5):
        assert w.reveal() is False
        assert w.visible_count <= w.total_count


def test_nueva_busqueda_vuelve_a_una_pagina():
    w = RevealWindow(50, total=300)
    w.reveal()
    w.reveal()
    w.reset(300)
    assert w.visible_count == 50
    w.reset(0)
    assert w.visible_count == 0
    assert not w.has_more


def test_set_total_recorta_sin_resetear():
    w = RevealWindow(50, total=300)
    w.reveal()
    w.set_total(80)
    assert w.visible_count == 80
    w.set_total(300)
    assert w.visible_count == 80


def test_visible_slice():
    w = RevealWindow(2, total=5)
    assert w.visible_slice(list("abcde")) == ["a", "b"]


def test_page_size_invalido():
    with pytest.raises(ValueError):
        RevealWindow(0)

import sqlite3

from sqlModels.db import connect, ensure_schema, schema_version, tx
from sqlModels.settings_repo import get_setting, set_setting

from listaprecios.cart import CartLine, CartStore
from listaprecios.cart_storage import (
    MemoryCartStorage,
    SqliteCartStorage,
    deserialize_lines,
    serialize_lines,
)


def test_sqlite_guarda_y_recupera(tmp_path, catalogo):
    db = str(tmp_path / "app.sqlite3")
    cart = CartStore(SqliteCartStorage(db))
    cart.add(catalogo[0])
    cart.add(catalogo[1])
    cart.set_quantity("Z10", 3)

    again = CartStore(SqliteCartStorage(db))
    assert [ln.code for ln in again.lines] == ["10001", "Z10"]
    assert again.get("Z10").quantity == 3
    assert again.get("Z10").base_price_foreign == 10.0


def test_sqlite_usa_la_clave_configurada(tmp_path, catalogo):
    db = str(tmp_path / "app.sqlite3")
    CartStore(SqliteCartStorage(db, key="otroCarrito")).add(catalogo[1])

    assert CartStore(SqliteCartStorage(db)).lines == []
    con = connect(db)
    try:
        assert "Z10" in get_setting(con, "otroCarrito")
    finally:
        con.close()


def test_sqlite_corrupto_arranca_vacio(tmp_path):
    db = str(tmp_path / "app.sqlite3")
    con = connect(db)
    try:
        ensure_schema(con)
        with tx(con):
            set_setting(con, "priceListCart", "{no es json")
    finally:
        con.close()
    assert SqliteCartStorage(db).load() == []


def test_sqlite_inaccesible_no_es_fatal(tmp_path, catalogo):
    bloqueo = tmp_path / "archivo"
    bloqueo.write_text("x", encoding="utf-8")
    storage = SqliteCartStorage(str(bloqueo / "sub" / "app.sqlite3"))

    assert storage.load() == []
    cart = CartStore(storage)
    cart.add(catalogo[1])  # no levanta: se loguea y sigue en memoria
    assert cart.get("Z10").quantity == 1


def test_deserialize_descarta_basura():
    raw = (
        '[{"code": "A", "quantity": 2, "price": 5, "currency": "1"},'
        ' {"code": "A", "quantity": 9},'
        ' {"description": "sin codigo"},'
        ' 7,'
        ' {"code": "B", "quantity": -4, "price_usd": "x"}]'
    )
    lines = deserialize_lines(raw)
    assert [ln.code for ln in lines] == ["A", "B"]
    assert lines[0].quantity == 2
    assert lines[1].quantity == 0
    assert lines[1].base_price_foreign == 0.0
    assert deserialize_lines('{"code": "A"}') == []
    assert deserialize_lines(None) == []


def test_serialize_ida_y_vuelta():
    lines = [CartLine(code="Z10", description="Rodillo", currency="2", tax="501",
                      base_price_foreign=10.0, quantity=2)]
    assert deserialize_lines(serialize_lines(lines)) == lines


def test_memoria():
    st = MemoryCartStorage()
    assert st.load() == []
    st.save([CartLine(code="A", quantity=1)])
    assert st.load()[0].code == "A"


def test_sqlite_error_de_lectura(monkeypatch, tmp_path):
    import listaprecios.cart_storage as cs

    def boom(_path, create_dir=False):
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(cs, "open_db", boom)
    assert SqliteCartStorage(str(tmp_path / "x.sqlite3")).load() == []


def test_vaciar_borra_la_clave(tmp_path, catalogo):
    db = str(tmp_path / "app.sqlite3")
    cart = CartStore(SqliteCartStorage(db))
    cart.add(catalogo[0])
    cart.clear()

    con = connect(db)
    try:
        assert get_setting(con, "priceListCart", None) is None
    finally:
        con.close()
    assert CartStore(SqliteCartStorage(db)).lines == []


def test_migracion_desde_v1(tmp_path):
    db = str(tmp_path / "viejo.sqlite3")
    con = connect(db)
    try:
        con.execute("CREATE TABLE meta (key TEXT PRIMARY KEY, value TEXT NOT NULL)")
        con.execute("CREATE TABLE settings (key TEXT PRIMARY KEY, value TEXT NOT NULL)")
        con.execute("INSERT INTO meta VALUES ('schema_version', '1')")
        con.execute("INSERT INTO settings VALUES ('priceListCart', '[{\"code\": \"A\", \"quantity\": 2}]')")
        con.commit()
    finally:
        con.close()

    lines = SqliteCartStorage(db).load()
    assert [(ln.code, ln.quantity) for ln in lines] == [("A", 2)]

    con = connect(db)
    try:
        assert schema_version(con) == 2
    finally:
        con.close()

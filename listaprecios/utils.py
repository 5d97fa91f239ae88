# listaprecios/utils.py
import math
import re


def _decimal_text(txt: str) -> str:
    """
    Número escrito a mano → texto que entiende float().
    El separador que aparece último es el decimal ("1.234,56" y "1,234.56");
    una coma sola es decimal ("12,5").
    """
    txt = txt.replace(" ", "").replace("$", "")
    if "," in txt and "." in txt:
        if txt.rfind(",") > txt.rfind("."):
            return txt.replace(".", "").replace(",", ".")
        return txt.replace(",", "")
    if txt.count(",") == 1:
        return txt.replace(",", ".")
    if txt.count(".") > 1:
        return txt.replace(".", "")
    return txt.replace(",", "")


def to_float(val, default=0.0) -> float:
    try:
        if val is None:
            return default
        if isinstance(val, str):
            txt = _decimal_text(val.strip())
            if not txt:
                return default
            f = float(txt)
        else:
            f = float(val)
        if math.isnan(f) or math.isinf(f):
            return default
        return f
    except (TypeError, ValueError):
        return default


def nz(x, default=0.0):
    try:
        f = float(x)
        if math.isnan(f) or math.isinf(f):
            return default
        return f
    except (TypeError, ValueError):
        return default


_LEADING_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_LEADING_INT = re.compile(r"^[+-]?\d+")


def parse_rate_text(text) -> float:
    """
    Cotización escrita a mano → float >= 0.

    - Acepta coma decimal ("1200,50") y miles con punto ("1.234,56").
    - Toma el prefijo numérico ("1200 ars" → 1200).
    - Vacío, ilegible o negativo → 0.
    """
    if text is None:
        return 0.0
    if isinstance(text, (int, float)):
        return max(0.0, nz(text, 0.0))
    s = _decimal_text(str(text).strip())
    m = _LEADING_NUMBER.match(s)
    if not m:
        return 0.0
    val = nz(m.group(0), 0.0)
    return val if val > 0 else 0.0


def parse_quantity_text(text) -> int | None:
    """
    Cantidad tipeada → entero, o None si no se puede leer.
    Lee el prefijo entero ("3", " 12 ", "-2", "4.5" → 4). No clampa negativos.
    """
    if text is None:
        return None
    m = _LEADING_INT.match(str(text).strip())
    if not m:
        return None
    return int(m.group(0))


def _group_thousands(int_part: str, sep: str = ".") -> str:
    out = []
    while len(int_part) > 3:
        out.insert(0, int_part[-3:])
        int_part = int_part[:-3]
    out.insert(0, int_part)
    return sep.join(out)


def fmt_money_ui(n) -> str:
    """
    Formato es-AR para la UI: miles con punto, 2 decimales con coma.
    Ej: 11050 → "$ 11.050,00"; None → "$ 0,00".
    """
    n = nz(n, 0.0)
    neg = n < 0
    txt = f"{abs(n):.2f}"
    int_part, dec_part = txt.split(".")
    body = f"{_group_thousands(int_part)},{dec_part}"
    return f"-$ {body}" if neg else f"$ {body}"


def fmt_rate(n) -> str:
    """Cotización con 2 decimales, o '-' si no está cargada."""
    n = nz(n, 0.0)
    return f"{n:.2f}" if n > 0 else "-"


def currency_type_label(code) -> str:
    c = str(code).strip() if code is not None else ""
    if c == "1":
        return "ARS"
    if c == "2":
        return "USD Billete"
    if c == "3":
        return "USD Divisas"
    return "-"


def found_label(total: int) -> str:
    return f"{total} {'producto' if total == 1 else 'productos'} encontrados"

# listaprecios/textnorm.py
from __future__ import annotations

import unicodedata


def normalize_text(text) -> str:
    """
    Forma comparable de un texto: NFD, sin marcas combinantes, en minúsculas.
    "Látex" → "latex". None / "" → "".
    """
    if not text:
        return ""
    s = unicodedata.normalize("NFD", str(text))
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    return s.lower()

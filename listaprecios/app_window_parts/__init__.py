# listaprecios/app_window_parts/__init__.py
from __future__ import annotations

from .main import PriceListWindow
from .delegates import QuantityDelegate

__all__ = ["PriceListWindow", "QuantityDelegate"]

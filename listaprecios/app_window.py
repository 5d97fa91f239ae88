# listaprecios/app_window.py
from __future__ import annotations

from .app_window_parts.main import PriceListWindow
from .app_window_parts.delegates import QuantityDelegate

__all__ = ["PriceListWindow", "QuantityDelegate"]

# listaprecios/config.py
from __future__ import annotations
import os, sys, json
from dataclasses import dataclass, replace
from typing import Dict, Any, List

# --------------------------
# Utilidades de rutas
# --------------------------
def _windows_documents_dir() -> str:
    if os.name == "nt":
        try:
            from ctypes import windll, create_unicode_buffer
            CSIDL_PERSONAL = 5
            SHGFP_TYPE_CURRENT = 0
            buf = create_unicode_buffer(260)
            if windll.shell32.SHGetFolderPathW(None, CSIDL_PERSONAL, None, SHGFP_TYPE_CURRENT, buf) == 0:
                return buf.value
        except Exception:
            pass
    return os.path.join(os.path.expanduser("~"), "Documents")


# --------------------------
# Detección de carpeta y archivo de configuración
# --------------------------
_THIS_DIR = os.path.dirname(os.path.abspath(__file__))
CONFIG_FILENAMES = ("config.json", "app_config.json")


def _candidate_config_dirs() -> List[str]:
    dirs: List[str] = []
    # 1) Si está "frozen" (PyInstaller), priorizar carpeta junto al ejecutable
    if getattr(sys, "frozen", False):
        dirs.append(os.path.join(os.path.dirname(sys.executable), "config"))

    # 2) Carpeta "config" relativa al cwd
    dirs.append(os.path.join(os.getcwd(), "config"))

    # 3) Carpeta "config" relativa a este módulo
    dirs.append(os.path.join(_THIS_DIR, "config"))

    out: List[str] = []
    seen: set[str] = set()
    for d in dirs:
        if d not in seen:
            seen.add(d)
            out.append(d)
    return out


def find_config_path() -> str | None:
    """Primer config.json / app_config.json existente, o None."""
    for d in _candidate_config_dirs():
        for fname in CONFIG_FILENAMES:
            p = os.path.join(d, fname)
            if os.path.exists(p):
                return p
    return None


# --------------------------
# Defaults
# --------------------------
DEFAULT_PAGE_SIZE = 50
DEFAULT_CART_KEY = "priceListCart"
LOG_LEVELS = ("ERROR", "WARNING", "INFO", "DEBUG")

DEFAULT_CONFIG: Dict[str, Any] = {
    "catalog_path": "",             # vacío => <DATA_DIR>/products.json
    "db_path": "",                  # vacío => resolve_db_path()
    "page_size": DEFAULT_PAGE_SIZE,
    "cart_storage_key": DEFAULT_CART_KEY,
    "currency_label": "ARS",
    # logging opcional:
    # "log_dir": "C:/Users/<usuario>/Documents/ListaPrecios/logs"
    # "log_level": "INFO"  # ERROR, WARNING, INFO, DEBUG
}


def default_log_dir() -> str:
    base = _windows_documents_dir()
    return os.path.join(base, "ListaPrecios", "logs")


@dataclass(frozen=True)
class AppConfig:
    """
    Configuración de la sesión. Se construye una sola vez al arrancar
    (load_app_config) y se pasa explícitamente a quien la necesite.
    """
    catalog_path: str = ""
    db_path: str = ""
    page_size: int = DEFAULT_PAGE_SIZE
    cart_storage_key: str = DEFAULT_CART_KEY
    currency_label: str = "ARS"
    log_dir: str = ""
    log_level: str = "INFO"
    source_path: str | None = None

    def with_overrides(self, **kwargs) -> "AppConfig":
        return replace(self, **kwargs)


def _load_json(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
            return data if isinstance(data, dict) else {}
    except (OSError, ValueError):
        return {}


def _clean_path(raw: Any) -> str:
    if not isinstance(raw, str) or not raw.strip():
        return ""
    return os.path.abspath(os.path.expanduser(os.path.expandvars(raw.strip())))


def load_app_config(path: str | None = None) -> AppConfig:
    """
    Lee el JSON de configuración (si existe) y lo valida clave por clave
    sobre DEFAULT_CONFIG. Valores inválidos se ignoran y queda el default.
    """
    cfg = DEFAULT_CONFIG.copy()
    src = path if path is not None else find_config_path()
    raw = _load_json(src) if src else {}

    if raw:
        cfg["catalog_path"] = _clean_path(raw.get("catalog_path"))
        cfg["db_path"] = _clean_path(raw.get("db_path"))

        try:
            ps = int(raw.get("page_size", cfg["page_size"]))
            if ps > 0:
                cfg["page_size"] = ps
        except (TypeError, ValueError):
            pass

        key = raw.get("cart_storage_key")
        if isinstance(key, str) and key.strip():
            cfg["cart_storage_key"] = key.strip()

        lbl = raw.get("currency_label")
        if isinstance(lbl, str) and lbl.strip():
            cfg["currency_label"] = lbl.strip().upper()

        # logging (opcionales)
        if "log_dir" in raw and str(raw["log_dir"]).strip():
            cfg["log_dir"] = _clean_path(str(raw["log_dir"]))
        if "log_level" in raw and str(raw["log_level"]).strip():
            cfg["log_level"] = str(raw["log_level"]).strip().upper()

    log_level = str(cfg.get("log_level", "INFO")).upper()
    if log_level not in LOG_LEVELS:
        log_level = "INFO"

    return AppConfig(
        catalog_path=cfg["catalog_path"],
        db_path=cfg["db_path"],
        page_size=int(cfg["page_size"]),
        cart_storage_key=cfg["cart_storage_key"],
        currency_label=cfg["currency_label"],
        log_dir=cfg.get("log_dir") or default_log_dir(),
        log_level=log_level,
        source_path=src if raw else None,
    )


__all__ = [
    "AppConfig", "load_app_config", "find_config_path", "default_log_dir",
    "DEFAULT_CONFIG", "DEFAULT_PAGE_SIZE", "DEFAULT_CART_KEY", "LOG_LEVELS",
]

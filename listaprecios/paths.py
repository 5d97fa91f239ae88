# listaprecios/paths.py
import os, sys
from PySide6.QtGui import QIcon
from PySide6.QtCore import QStandardPaths

BASE_APP_TITLE = "Lista de Precios"


def resource_path(relative_path: str) -> str:
    if getattr(sys, "frozen", False):
        base_dir = os.path.dirname(sys.executable)

        cand_root = os.path.join(base_dir, relative_path)
        if os.path.exists(cand_root):
            return cand_root

        meipass = getattr(sys, "_MEIPASS", "")
        if meipass:
            cand_meipass = os.path.join(meipass, relative_path)
            if os.path.exists(cand_meipass):
                return cand_meipass

        return cand_root
    else:
        return os.path.join(os.path.abspath("."), relative_path)


def user_docs_root() -> str:
    try:
        base = QStandardPaths.writableLocation(QStandardPaths.DocumentsLocation) or os.path.join(os.path.expanduser("~"), "Documents")
    except Exception:
        base = os.path.join(os.path.expanduser("~"), "Documents")
    root = os.path.join(base, "ListaPrecios")
    os.makedirs(root, exist_ok=True)
    return root


def user_docs_dir(subfolder: str) -> str:
    d = os.path.join(user_docs_root(), subfolder)
    os.makedirs(d, exist_ok=True)
    return d


def data_dir() -> str:
    return user_docs_dir("data")


def exports_dir() -> str:
    return user_docs_dir("exportados")


def default_catalog_path() -> str:
    """products.json en la carpeta de datos del usuario, o junto a la app."""
    user_cat = os.path.join(data_dir(), "products.json")
    if os.path.exists(user_cat):
        return user_cat
    bundled = resource_path(os.path.join("data", "products.json"))
    return bundled if os.path.exists(bundled) else user_cat


def load_app_icon() -> QIcon:
    p = resource_path("logo_sistema.ico")
    if os.path.exists(p):
        return QIcon(p)
    return QIcon()


def set_win_app_id():
    if sys.platform.startswith("win"):
        try:
            import ctypes
            ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID(u"ListaPrecios.1")
        except Exception:
            pass

# listaprecios/reveal.py
from __future__ import annotations

from typing import Sequence, TypeVar

from .config import DEFAULT_PAGE_SIZE

T = TypeVar("T")


class RevealWindow:
    """
    Paginado incremental sobre la lista filtrada: se muestran los primeros
    visible_count resultados y cada "reveal" suma una página.
    Siempre visible_count <= total_count.
    """

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE, total: int = 0):
        if page_size <= 0:
            raise ValueError("page_size debe ser > 0")
        self.page_size = int(page_size)
        self.total_count = 0
        self.visible_count = 0
        self.reset(total)

    @property
    def has_more(self) -> bool:
        return self.visible_count < self.total_count

    def reset(self, total: int) -> None:
        """Cambio de búsqueda: vuelve a una página."""
        self.total_count = max(0, int(total))
        self.visible_count = min(self.page_size, self.total_count)

    def set_total(self, total: int) -> None:
        """La lista se recalculó sin cambiar la búsqueda (ej. cotización)."""
        self.total_count = max(0, int(total))
        if self.visible_count > self.total_count:
            self.visible_count = self.total_count

    def reveal(self) -> bool:
        """Suma una página. Devuelve True si se mostró algo nuevo."""
        before = self.visible_count
        self.visible_count = min(self.visible_count + self.page_size, self.total_count)
        return self.visible_count > before

    def visible_slice(self, items: Sequence[T]) -> list[T]:
        return list(items[: self.visible_count])

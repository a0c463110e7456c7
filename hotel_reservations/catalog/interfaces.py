"""
Интерфейсы (порты) для каталога номеров.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from .domain import Room


class ICatalogRepository(Protocol):
    """Интерфейс хранилища каталога номеров."""

    def load(self) -> Optional[List[Room]]: ...
    def save(self, rooms: List[Room]) -> None: ...

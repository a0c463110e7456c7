"""
Инфраструктурный слой каталога номеров.
"""

from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from ..shared_kernel import IKeyValueStore, ILogger, PersistenceError, StandardLogger
from . import interfaces as ports
from .domain import Room

ROOMS_KEY = "rooms"

_rooms_adapter = TypeAdapter(List[Room])


class KeyValueCatalogRepository(ports.ICatalogRepository):
    """Каталог номеров, хранящийся в виде JSON-списка под фиксированным ключом."""

    def __init__(
        self,
        store: IKeyValueStore,
        key: str = ROOMS_KEY,
        logger: Optional[ILogger] = None,
    ):
        self._store = store
        self._key = key
        self._logger = logger or StandardLogger()

    def load(self) -> Optional[List[Room]]:
        try:
            raw_data = self._store.read(self._key)
        except PersistenceError as e:
            self._logger.warning("Не удалось прочитать каталог номеров", error=str(e))
            return None

        if raw_data is None or not raw_data.strip():
            return None

        try:
            return _rooms_adapter.validate_json(raw_data)
        except ValidationError as e:
            self._logger.warning(
                "Каталог номеров поврежден", key=self._key, errors=e.error_count()
            )
            return None

    def save(self, rooms: List[Room]) -> None:
        data = _rooms_adapter.dump_json(list(rooms), indent=2)
        self._store.write(self._key, data)

"""
Инфраструктура общего ядра: логирование и хранилища "ключ-значение".
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from .domain import PersistenceError
from .interfaces import IKeyValueStore, ILogger


class StandardLogger(ILogger):
    """Логгер поверх стандартного модуля logging с контекстом в виде JSON."""

    def __init__(self, name: str = "hotel_reservations"):
        self._logger = logging.getLogger(name)

    def _log(self, level: int, message: str, context: Dict[str, Any]) -> None:
        if context:
            message = f"{message} {json.dumps(context, default=str, ensure_ascii=False)}"
        self._logger.log(level, message)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)


class InMemoryKeyValueStore(IKeyValueStore):
    """Хранилище в памяти, используется в тестах."""

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._items: Dict[str, bytes] = dict(initial or {})
        self._lock = threading.Lock()

    def read(self, key: str) -> Optional[bytes]:
        with self._lock:
            return self._items.get(key)

    def write(self, key: str, data: bytes) -> None:
        with self._lock:
            self._items[key] = bytes(data)


class FileKeyValueStore(IKeyValueStore):
    """Хранилище, сохраняющее каждое значение в отдельный JSON-файл."""

    def __init__(self, directory: str):
        """
        Инициализирует хранилище.

        Args:
            directory: Каталог, в котором лежат файлы с данными
        """
        self._directory = Path(directory)

    def path_for(self, key: str) -> Path:
        """Путь к файлу, соответствующему ключу."""
        return self._directory / f"{key}.json"

    def read(self, key: str) -> Optional[bytes]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError as e:
            raise PersistenceError(f"Не удалось прочитать {path}: {e}") from e

    def write(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        try:
            # Создаем директорию, если она не существует
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{key}.", suffix=".tmp", dir=self._directory
            )
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise PersistenceError(f"Не удалось записать {path}: {e}") from e

"""
Общее ядро (Shared Kernel) системы бронирования номеров.

Содержит общие типы данных, исключения и хранилище "ключ-значение",
используемые каталогом номеров и контекстом бронирования.
"""

from .domain import (
    BusinessRuleValidationException,
    DateRange,
    # Исключения
    DomainException,
    InvalidDateRange,
    PersistenceError,
    # Перечисления
    RoomCategory,
)
from .interfaces import IKeyValueStore, ILogger
from .infrastructure import (
    FileKeyValueStore,
    InMemoryKeyValueStore,
    StandardLogger,
)

__all__ = [
    # Основные классы
    "DateRange",
    # Перечисления
    "RoomCategory",
    # Исключения
    "DomainException",
    "BusinessRuleValidationException",
    "InvalidDateRange",
    "PersistenceError",
    # Порты
    "IKeyValueStore",
    "ILogger",
    # Адаптеры
    "FileKeyValueStore",
    "InMemoryKeyValueStore",
    "StandardLogger",
]

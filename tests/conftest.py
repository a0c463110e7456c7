"""
Общие фикстуры для тестов системы бронирования.
"""

import pytest

from hotel_reservations.booking.application import BookingService
from hotel_reservations.booking.domain import ReservationStore
from hotel_reservations.booking.infrastructure import (
    DummyPaymentGateway,
    KeyValueReservationRepository,
    SequentialReservationIdGenerator,
)
from hotel_reservations.catalog.domain import RoomCatalog
from hotel_reservations.shared_kernel import InMemoryKeyValueStore, PersistenceError


class FailingKeyValueStore(InMemoryKeyValueStore):
    """Хранилище, запись в которое всегда завершается ошибкой."""

    def write(self, key: str, data: bytes) -> None:
        raise PersistenceError(f"Диск недоступен: {key}")


class RecordingLogger:
    """Логгер, запоминающий сообщения для проверок в тестах."""

    def __init__(self) -> None:
        self.records = []

    def _record(self, level: str, message: str, **kwargs) -> None:
        self.records.append((level, message, kwargs))

    def info(self, message: str, **kwargs) -> None:
        self._record("info", message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self._record("error", message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._record("warning", message, **kwargs)

    def debug(self, message: str, **kwargs) -> None:
        self._record("debug", message, **kwargs)

    def levels(self):
        return [level for level, _, _ in self.records]


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def catalog() -> RoomCatalog:
    return RoomCatalog.with_defaults()


@pytest.fixture
def store() -> ReservationStore:
    return ReservationStore()


@pytest.fixture
def repository(kv_store, logger) -> KeyValueReservationRepository:
    return KeyValueReservationRepository(kv_store, logger=logger)


@pytest.fixture
def service(catalog, store, repository, logger) -> BookingService:
    """Сервис бронирования с чистым хранилищем и предсказуемыми идентификаторами."""
    return BookingService(
        catalog=catalog,
        store=store,
        repository=repository,
        id_generator=SequentialReservationIdGenerator(),
        logger=logger,
    )


@pytest.fixture
def approve() -> DummyPaymentGateway:
    return DummyPaymentGateway(approve=True)


@pytest.fixture
def decline() -> DummyPaymentGateway:
    return DummyPaymentGateway(approve=False)


@pytest.fixture
def failing_kv_store() -> FailingKeyValueStore:
    return FailingKeyValueStore()

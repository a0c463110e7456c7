"""
Инфраструктурный слой контекста бронирования.

Содержит реализации портов: хранилище бронирований поверх хранилища
"ключ-значение", заглушку платежного шлюза, стратегии выбора номера и
генераторы идентификаторов.
"""

import itertools
import threading
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence
from uuid import uuid4

from pydantic import TypeAdapter, ValidationError

from ..catalog.domain import Room
from ..shared_kernel import IKeyValueStore, ILogger, PersistenceError, StandardLogger
from . import interfaces as ports
from .domain import Reservation

RESERVATIONS_KEY = "reservations"

_reservations_adapter = TypeAdapter(Dict[str, Reservation])


class KeyValueReservationRepository(ports.IReservationRepository):
    """Бронирования, хранящиеся в виде JSON-объекта "идентификатор -> бронирование"."""

    def __init__(
        self,
        store: IKeyValueStore,
        key: str = RESERVATIONS_KEY,
        logger: Optional[ILogger] = None,
    ):
        self._store = store
        self._key = key
        self._logger = logger or StandardLogger()

    def load(self) -> Dict[str, Reservation]:
        """Загружает бронирования; при любой ошибке возвращает пустой набор."""
        try:
            raw_data = self._store.read(self._key)
        except PersistenceError as e:
            self._logger.warning("Не удалось прочитать бронирования", error=str(e))
            return {}

        if raw_data is None or not raw_data.strip():
            return {}

        try:
            items = _reservations_adapter.validate_json(raw_data)
        except ValidationError as e:
            self._logger.warning(
                "Файл бронирований поврежден, начинаем с пустого списка",
                key=self._key,
                errors=e.error_count(),
            )
            return {}

        # Ключом всегда служит идентификатор самого бронирования
        return {reservation.id: reservation for reservation in items.values()}

    def save(self, reservations: Dict[str, Reservation]) -> None:
        data = _reservations_adapter.dump_json(dict(reservations), indent=2)
        self._store.write(self._key, data)


class DummyPaymentGateway(ports.IPaymentGateway):
    """Заглушка платежного шлюза для тестирования."""

    def __init__(self, approve: bool = True):
        self.approve = approve
        self.processed_payments: List[Dict[str, Any]] = []

    def authorize(
        self, room: Room, check_in: date, check_out: date, amount: Decimal
    ) -> bool:
        self.processed_payments.append(
            {
                "transaction_id": f"TXN-{uuid4().hex[:8].upper()}",
                "status": "completed" if self.approve else "failed",
                "room_number": room.room_number,
                "check_in": check_in,
                "check_out": check_out,
                "amount": amount,
                "processed_at": datetime.now(timezone.utc).isoformat(),
            }
        )
        return self.approve


class FirstAvailableRoomSelector(ports.IRoomSelector):
    """Всегда выбирает первый предложенный номер."""

    def select(self, candidates: Sequence[Room]) -> int:
        return 0


class RoomNumberSelector(ports.IRoomSelector):
    """Выбирает номер с заданным номером комнаты, если он среди предложенных."""

    def __init__(self, room_number: int):
        self.room_number = room_number

    def select(self, candidates: Sequence[Room]) -> int:
        for index, room in enumerate(candidates):
            if room.room_number == self.room_number:
                return index
        return -1


class UuidReservationIdGenerator(ports.IReservationIdGenerator):
    """Случайные идентификаторы вида RES1A2B3C4D5E6F."""

    def __init__(self, prefix: str = "RES"):
        self._prefix = prefix

    def next_id(self) -> str:
        return f"{self._prefix}{uuid4().hex[:12].upper()}"


class SequentialReservationIdGenerator(ports.IReservationIdGenerator):
    """Последовательные идентификаторы: RES000001, RES000002, ..."""

    def __init__(self, prefix: str = "RES", start: int = 1):
        self._prefix = prefix
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            return f"{self._prefix}{next(self._counter):06d}"

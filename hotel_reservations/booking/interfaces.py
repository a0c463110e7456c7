"""
Интерфейсы (порты) для контекста бронирования.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Dict, Protocol, Sequence

from ..catalog.domain import Room
from .domain import Reservation


class IReservationRepository(Protocol):
    """Интерфейс хранилища бронирований."""

    def load(self) -> Dict[str, Reservation]: ...
    def save(self, reservations: Dict[str, Reservation]) -> None: ...


class IPaymentGateway(Protocol):
    """Интерфейс для взаимодействия с платежным шлюзом."""

    def authorize(
        self, room: Room, check_in: date, check_out: date, amount: Decimal
    ) -> bool: ...


class IRoomSelector(Protocol):
    """Выбор одного номера из предложенных (индекс с нуля)."""

    def select(self, candidates: Sequence[Room]) -> int: ...


class IReservationIdGenerator(Protocol):
    """Генератор идентификаторов бронирований."""

    def next_id(self) -> str: ...

"""
Доменная модель контекста бронирования.

Содержит бронирование, хранилище бронирований, поиск свободных номеров
и политику цен.
"""

import threading
from collections import defaultdict
from contextlib import contextmanager
from datetime import date
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..catalog.domain import Room, RoomCatalog
from ..shared_kernel import (
    BusinessRuleValidationException,
    DateRange,
    RoomCategory,
)


class NoAvailability(BusinessRuleValidationException):
    """Нет свободных номеров нужной категории на указанные даты."""

    def __init__(self, category: RoomCategory, period: DateRange):
        super().__init__(
            f"Нет свободных номеров категории {category.value} на период {period}"
        )
        self.category = category
        self.period = period


class InvalidRoomSelection(BusinessRuleValidationException):
    """Выбранный индекс не соответствует ни одному из предложенных номеров."""

    def __init__(self, index: object, candidates: int):
        super().__init__(
            f"Некорректный выбор номера: {index!r} (доступно вариантов: {candidates})"
        )
        self.index = index
        self.candidates = candidates


class PaymentDeclined(BusinessRuleValidationException):
    """Платеж отклонен, бронирование не создано."""

    def __init__(self, room_number: int, amount: Decimal):
        super().__init__(f"Оплата {amount} за номер {room_number} отклонена")
        self.room_number = room_number
        self.amount = amount


class ReservationNotFound(BusinessRuleValidationException):
    """Бронирование с указанным идентификатором не найдено."""

    def __init__(self, reservation_id: str):
        super().__init__(f"Бронирование {reservation_id} не найдено")
        self.reservation_id = reservation_id


class Reservation(BaseModel):
    """Оплаченное бронирование номера."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    guest_name: str = Field(..., min_length=1)
    room_number: int = Field(..., gt=0)
    check_in: date
    check_out: date
    paid: bool = True

    @field_validator("paid")
    @classmethod
    def must_be_paid(cls, value: bool) -> bool:
        if not value:
            raise ValueError("Неоплаченное бронирование недопустимо")
        return value

    @model_validator(mode="after")
    def check_out_after_check_in(self) -> "Reservation":
        if self.check_out <= self.check_in:
            raise ValueError("Дата выезда должна быть позже даты заезда")
        return self

    @classmethod
    def create_paid(
        cls, reservation_id: str, guest_name: str, room: Room, period: DateRange
    ) -> "Reservation":
        """Создает бронирование после подтвержденной оплаты."""
        return cls(
            id=reservation_id,
            guest_name=guest_name,
            room_number=room.room_number,
            check_in=period.check_in,
            check_out=period.check_out,
            paid=True,
        )

    @property
    def period(self) -> DateRange:
        return DateRange(check_in=self.check_in, check_out=self.check_out)

    @property
    def nights(self) -> int:
        return self.period.nights

    def __str__(self) -> str:
        return (
            f"Reservation {self.id} for {self.guest_name}, room {self.room_number}, "
            f"from {self.check_in.isoformat()} to {self.check_out.isoformat()}"
            " [PAID]"
        )


class ReservationStore:
    """
    Хранилище бронирований в памяти: идентификатор -> бронирование.

    Все операции выполняются под общей блокировкой. transaction() удерживает
    ее на время последовательности "проверка доступности -> фиксация", так
    что читатели никогда не видят частично добавленное бронирование.
    """

    def __init__(self, reservations: Optional[Mapping[str, Reservation]] = None):
        self._reservations: Dict[str, Reservation] = {}
        self._lock = threading.RLock()
        for reservation in (reservations or {}).values():
            self.add(reservation)

    @contextmanager
    def transaction(self) -> Iterator["ReservationStore"]:
        with self._lock:
            yield self

    def get(self, reservation_id: str) -> Optional[Reservation]:
        with self._lock:
            return self._reservations.get(reservation_id)

    def snapshot(self) -> Dict[str, Reservation]:
        """Копия текущего содержимого хранилища."""
        with self._lock:
            return dict(self._reservations)

    def for_room(self, room_number: int) -> List[Reservation]:
        with self._lock:
            return [
                reservation
                for reservation in self._reservations.values()
                if reservation.room_number == room_number
            ]

    def add(self, reservation: Reservation) -> None:
        """Добавляет бронирование, не допуская пересечений по одному номеру."""
        with self._lock:
            if reservation.id in self._reservations:
                raise BusinessRuleValidationException(
                    f"Бронирование {reservation.id} уже существует"
                )
            period = reservation.period
            for existing in self.for_room(reservation.room_number):
                if period.overlaps(existing.period):
                    raise BusinessRuleValidationException(
                        f"Номер {reservation.room_number} уже забронирован "
                        f"на период {existing.period}"
                    )
            self._reservations[reservation.id] = reservation

    def remove(self, reservation_id: str) -> Reservation:
        with self._lock:
            try:
                return self._reservations.pop(reservation_id)
            except KeyError:
                raise ReservationNotFound(reservation_id) from None

    def __contains__(self, reservation_id: object) -> bool:
        with self._lock:
            return reservation_id in self._reservations

    def __len__(self) -> int:
        with self._lock:
            return len(self._reservations)


class AvailabilityEngine:
    """Доменный сервис поиска свободных номеров. Только читает состояние."""

    def __init__(self, catalog: RoomCatalog, store: ReservationStore):
        self._catalog = catalog
        self._store = store

    def find_available(
        self, category: RoomCategory, check_in: date, check_out: date
    ) -> List[Room]:
        """Возвращает свободные номера категории в порядке каталога."""
        requested = DateRange.of(check_in, check_out)

        # Берем один снимок, чтобы проверка шла по согласованному состоянию
        booked: Dict[int, List[DateRange]] = defaultdict(list)
        for reservation in self._store.snapshot().values():
            booked[reservation.room_number].append(reservation.period)

        return [
            room
            for room in self._catalog.by_category(category)
            if not any(requested.overlaps(period) for period in booked[room.room_number])
        ]


DEFAULT_NIGHTLY_RATES: Mapping[RoomCategory, Decimal] = MappingProxyType(
    {
        RoomCategory.STANDARD: Decimal("100"),
        RoomCategory.DELUXE: Decimal("150"),
        RoomCategory.SUITE: Decimal("250"),
    }
)


class PricingPolicy:
    """Политика цен: стоимость ночи по категории номера."""

    def __init__(self, nightly_rates: Optional[Mapping[RoomCategory, Decimal]] = None):
        rates = DEFAULT_NIGHTLY_RATES if nightly_rates is None else nightly_rates
        self._rates: Dict[RoomCategory, Decimal] = {
            category: Decimal(rate) for category, rate in rates.items()
        }

    def nightly_rate(self, category: RoomCategory) -> Decimal:
        try:
            return self._rates[category]
        except KeyError:
            raise BusinessRuleValidationException(
                f"Для категории {category} не задана цена"
            ) from None

    def quote(self, category: RoomCategory, nights: int) -> Decimal:
        """Стоимость проживания: количество ночей * цена за ночь."""
        if nights < 1:
            raise BusinessRuleValidationException(
                "Минимальный срок бронирования - 1 ночь"
            )
        return self.nightly_rate(category) * nights

    def quote_stay(self, category: RoomCategory, period: DateRange) -> Decimal:
        return self.quote(category, period.nights)

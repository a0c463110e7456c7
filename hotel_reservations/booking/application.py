"""
Прикладной слой контекста бронирования.

Содержит сервис приложения, который координирует поиск свободных номеров,
расчет стоимости, оплату и фиксацию бронирования в хранилище.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from ..catalog.domain import Room, RoomCatalog
from ..shared_kernel import (
    BusinessRuleValidationException,
    DateRange,
    ILogger,
    PersistenceError,
    RoomCategory,
    StandardLogger,
)
from . import interfaces as ports
from .domain import (
    AvailabilityEngine,
    InvalidRoomSelection,
    NoAvailability,
    PaymentDeclined,
    PricingPolicy,
    Reservation,
    ReservationNotFound,
    ReservationStore,
)
from .infrastructure import UuidReservationIdGenerator

# Сколько раз пробуем получить идентификатор, не занятый в хранилище
MAX_ID_ATTEMPTS = 100

# DTO для исходящих данных


class BookingConfirmation(BaseModel):
    """Результат успешного бронирования."""

    model_config = ConfigDict(frozen=True)

    reservation: Reservation
    room: Room
    nights: int
    amount: Decimal
    # False, если бронирование есть только в памяти: сохранить его не удалось
    persisted: bool


class CancellationOutcome(str, Enum):
    """Итог запроса на отмену."""

    CANCELLED = "cancelled"
    ABORTED = "aborted"


class CancellationResult(BaseModel):
    """Результат запроса на отмену бронирования."""

    model_config = ConfigDict(frozen=True)

    reservation_id: str
    outcome: CancellationOutcome
    persisted: bool = True

    @property
    def cancelled(self) -> bool:
        return self.outcome == CancellationOutcome.CANCELLED


# Сервисы приложения


class BookingService:
    """Сервис приложения для работы с бронированиями."""

    def __init__(
        self,
        catalog: RoomCatalog,
        store: ReservationStore,
        repository: ports.IReservationRepository,
        pricing: Optional[PricingPolicy] = None,
        id_generator: Optional[ports.IReservationIdGenerator] = None,
        logger: Optional[ILogger] = None,
    ):
        """Инициализирует сервис."""
        self._catalog = catalog
        self._store = store
        self._repository = repository
        self._availability = AvailabilityEngine(catalog, store)
        self._pricing = pricing or PricingPolicy()
        self._id_generator = id_generator or UuidReservationIdGenerator()
        self._logger = logger or StandardLogger()

    @property
    def availability(self) -> AvailabilityEngine:
        return self._availability

    @property
    def pricing(self) -> PricingPolicy:
        return self._pricing

    def search(
        self, category: RoomCategory, check_in: date, check_out: date
    ) -> List[Room]:
        """Возвращает свободные номера категории на указанный период."""
        period = DateRange.of(check_in, check_out)
        return self._availability.find_available(
            category, period.check_in, period.check_out
        )

    def book(
        self,
        guest_name: str,
        category: RoomCategory,
        check_in: date,
        check_out: date,
        room_selector: ports.IRoomSelector,
        payment_gateway: ports.IPaymentGateway,
    ) -> BookingConfirmation:
        """
        Бронирует номер.

        Проверка доступности, выбор номера, оплата и добавление бронирования
        выполняются под блокировкой хранилища, поэтому два параллельных запроса
        не могут занять один номер на пересекающиеся даты. При любой ошибке
        хранилище остается без изменений.

        Raises:
            InvalidDateRange: дата выезда не позже даты заезда
            NoAvailability: нет свободных номеров
            InvalidRoomSelection: выбран индекс вне списка кандидатов
            PaymentDeclined: оплата отклонена
        """
        # Проверяем период бронирования
        period = DateRange.of(check_in, check_out)
        guest_name = guest_name.strip()
        if not guest_name:
            raise BusinessRuleValidationException("Имя гостя не может быть пустым")

        with self._store.transaction():
            candidates = self._availability.find_available(
                category, period.check_in, period.check_out
            )
            if not candidates:
                raise NoAvailability(category, period)

            index = room_selector.select(list(candidates))
            if (
                not isinstance(index, int)
                or isinstance(index, bool)
                or not 0 <= index < len(candidates)
            ):
                raise InvalidRoomSelection(index, len(candidates))
            room = candidates[index]

            amount = self._pricing.quote_stay(room.category, period)

            if not payment_gateway.authorize(
                room, period.check_in, period.check_out, amount
            ):
                self._logger.info(
                    "Оплата отклонена",
                    room_number=room.room_number,
                    amount=amount,
                )
                raise PaymentDeclined(room.room_number, amount)

            reservation = Reservation.create_paid(
                reservation_id=self._new_reservation_id(),
                guest_name=guest_name,
                room=room,
                period=period,
            )
            self._store.add(reservation)
            persisted = self._persist()

        self._logger.info(
            "Бронирование создано",
            reservation_id=reservation.id,
            room_number=room.room_number,
            period=str(period),
            amount=amount,
            persisted=persisted,
        )
        return BookingConfirmation(
            reservation=reservation,
            room=room,
            nights=period.nights,
            amount=amount,
            persisted=persisted,
        )

    def get(self, reservation_id: str) -> Reservation:
        """Возвращает бронирование по идентификатору."""
        reservation_id = reservation_id.strip()
        reservation = self._store.get(reservation_id)
        if reservation is None:
            raise ReservationNotFound(reservation_id)
        return reservation

    def cancel(self, reservation_id: str, confirmed: bool) -> CancellationResult:
        """
        Отменяет бронирование.

        Без подтверждения ничего не меняет и возвращает ABORTED.
        Неизвестный идентификатор приводит к ReservationNotFound.
        """
        reservation_id = reservation_id.strip()
        with self._store.transaction():
            if reservation_id not in self._store:
                raise ReservationNotFound(reservation_id)

            if not confirmed:
                self._logger.info("Отмена прервана", reservation_id=reservation_id)
                return CancellationResult(
                    reservation_id=reservation_id,
                    outcome=CancellationOutcome.ABORTED,
                )

            self._store.remove(reservation_id)
            persisted = self._persist()

        self._logger.info(
            "Бронирование отменено", reservation_id=reservation_id, persisted=persisted
        )
        return CancellationResult(
            reservation_id=reservation_id,
            outcome=CancellationOutcome.CANCELLED,
            persisted=persisted,
        )

    def list_all(self) -> List[Reservation]:
        """Возвращает все бронирования по дате заезда, номеру и идентификатору."""
        return sorted(
            self._store.snapshot().values(),
            key=lambda r: (r.check_in, r.room_number, r.id),
        )

    def save(self) -> bool:
        """Сохраняет текущее состояние хранилища."""
        with self._store.transaction():
            return self._persist()

    def _new_reservation_id(self) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            reservation_id = self._id_generator.next_id()
            if reservation_id not in self._store:
                return reservation_id
        raise BusinessRuleValidationException(
            "Не удалось получить уникальный идентификатор бронирования"
        )

    def _persist(self) -> bool:
        try:
            self._repository.save(self._store.snapshot())
        except PersistenceError as e:
            self._logger.error(
                "Не удалось сохранить бронирования, изменения остались только в памяти",
                error=str(e),
            )
            return False
        return True

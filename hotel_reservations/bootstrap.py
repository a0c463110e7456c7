"""
Сборка приложения: состояние отеля и сервисы поверх него.
"""

import logging
from typing import Dict, Optional

from .booking.application import BookingService
from .booking.domain import PricingPolicy, Reservation, ReservationStore
from .booking.infrastructure import KeyValueReservationRepository
from .booking.interfaces import IReservationIdGenerator
from .catalog.application import load_or_seed_catalog
from .catalog.domain import RoomCatalog
from .catalog.infrastructure import KeyValueCatalogRepository
from .config import Settings
from .shared_kernel import (
    BusinessRuleValidationException,
    FileKeyValueStore,
    IKeyValueStore,
    ILogger,
    StandardLogger,
)


def configure_logging(settings: Settings) -> None:
    """Настраивает стандартный логгер по уровню из настроек."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class HotelContext:
    """
    Состояние отеля на время работы процесса: каталог номеров и бронирования.

    open() загружает состояние из хранилища, close() выполняет финальное
    сохранение. Можно использовать как контекстный менеджер.
    """

    def __init__(
        self,
        store: IKeyValueStore,
        rooms_key: str = "rooms",
        reservations_key: str = "reservations",
        pricing: Optional[PricingPolicy] = None,
        id_generator: Optional[IReservationIdGenerator] = None,
        logger: Optional[ILogger] = None,
    ):
        self._logger = logger or StandardLogger()
        self._catalog_repo = KeyValueCatalogRepository(
            store, key=rooms_key, logger=self._logger
        )
        self._reservation_repo = KeyValueReservationRepository(
            store, key=reservations_key, logger=self._logger
        )
        self._pricing = pricing
        self._id_generator = id_generator
        self._catalog: Optional[RoomCatalog] = None
        self._reservations: Optional[ReservationStore] = None
        self._booking: Optional[BookingService] = None

    @classmethod
    def from_settings(
        cls, settings: Settings, logger: Optional[ILogger] = None
    ) -> "HotelContext":
        return cls(
            FileKeyValueStore(str(settings.data_dir)),
            rooms_key=settings.rooms_key,
            reservations_key=settings.reservations_key,
            logger=logger,
        )

    @property
    def is_open(self) -> bool:
        return self._booking is not None

    @property
    def catalog(self) -> RoomCatalog:
        self._ensure_open()
        return self._catalog

    @property
    def reservations(self) -> ReservationStore:
        self._ensure_open()
        return self._reservations

    @property
    def booking(self) -> BookingService:
        self._ensure_open()
        return self._booking

    def open(self) -> "HotelContext":
        """Загружает каталог и бронирования, создает сервисы."""
        if self.is_open:
            return self

        # 1. Бронирования: при ошибке чтения начинаем с пустого хранилища
        loaded = self._reservation_repo.load()

        # 2. Каталог номеров: при наличии бронирований сохраненный не перезаписываем
        self._catalog = load_or_seed_catalog(
            self._catalog_repo, self._logger, has_reservations=bool(loaded)
        )
        unknown_rooms = {
            r.room_number for r in loaded.values() if r.room_number not in self._catalog
        }
        if unknown_rooms:
            self._logger.warning(
                "Бронирования ссылаются на номера вне каталога",
                rooms=sorted(unknown_rooms),
            )
        self._reservations = self._restore_reservations(loaded)

        # 3. Сервисы получают состояние по ссылке
        self._booking = BookingService(
            catalog=self._catalog,
            store=self._reservations,
            repository=self._reservation_repo,
            pricing=self._pricing,
            id_generator=self._id_generator,
            logger=self._logger,
        )
        self._logger.info(
            "Состояние отеля загружено",
            rooms=len(self._catalog),
            reservations=len(self._reservations),
        )
        return self

    def close(self) -> bool:
        """Финальное сохранение бронирований. Возвращает True, если оно удалось."""
        if not self.is_open:
            return True
        persisted = self._booking.save()
        self._booking = None
        self._reservations = None
        self._catalog = None
        return persisted

    def _restore_reservations(
        self, loaded: Dict[str, Reservation]
    ) -> ReservationStore:
        """Заполняет хранилище, отбрасывая пересекающиеся бронирования."""
        store = ReservationStore()
        ordered = sorted(
            loaded.values(), key=lambda r: (r.check_in, r.room_number, r.id)
        )
        for reservation in ordered:
            try:
                store.add(reservation)
            except BusinessRuleValidationException as e:
                self._logger.warning(
                    "Сохраненное бронирование отброшено",
                    reservation_id=reservation.id,
                    error=str(e),
                )
        return store

    def _ensure_open(self) -> None:
        if not self.is_open:
            raise RuntimeError("HotelContext не открыт, вызовите open()")

    def __enter__(self) -> "HotelContext":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False  # Пробрасываем исключение дальше, если оно было

"""
Прикладной слой каталога номеров.
"""

from typing import Optional

from ..shared_kernel import (
    BusinessRuleValidationException,
    ILogger,
    PersistenceError,
    StandardLogger,
)
from . import interfaces as ports
from .domain import RoomCatalog, default_rooms


def load_or_seed_catalog(
    repository: ports.ICatalogRepository,
    logger: Optional[ILogger] = None,
    has_reservations: bool = False,
) -> RoomCatalog:
    """
    Загружает каталог номеров.

    Если каталога нет или он не читается, создает номера по умолчанию и
    сохраняет их. Ошибка сохранения не мешает работе: каталог остается в памяти.

    При has_reservations=True сохраненный каталог не перезаписывается:
    номера по умолчанию используются только в памяти.
    """
    logger = logger or StandardLogger()

    rooms = repository.load()
    if rooms:
        try:
            catalog = RoomCatalog(rooms)
        except BusinessRuleValidationException as e:
            logger.warning("Каталог номеров некорректен", error=str(e))
        else:
            logger.debug("Каталог номеров загружен", rooms=len(rooms))
            return catalog

    rooms = default_rooms()
    if has_reservations:
        logger.error(
            "Каталог номеров недоступен при наличии бронирований, "
            "номера по умолчанию используются без сохранения",
            rooms=len(rooms),
        )
        return RoomCatalog(rooms)

    logger.info("Создан каталог номеров по умолчанию", rooms=len(rooms))
    try:
        repository.save(rooms)
    except PersistenceError as e:
        logger.error("Не удалось сохранить каталог номеров", error=str(e))
    return RoomCatalog(rooms)

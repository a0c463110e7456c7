"""
Доменная модель каталога номеров.

Каталог заполняется один раз при первом запуске и далее только читается.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..shared_kernel import BusinessRuleValidationException, RoomCategory


class Room(BaseModel):
    """Номер в отеле."""

    model_config = ConfigDict(frozen=True)

    room_number: int = Field(..., gt=0)
    category: RoomCategory

    def __str__(self) -> str:
        return f"Room {self.room_number} ({self.category.value})"


# Категория, первый номер и количество номеров в начальном каталоге
DEFAULT_LAYOUT: Tuple[Tuple[RoomCategory, int, int], ...] = (
    (RoomCategory.STANDARD, 101, 5),
    (RoomCategory.DELUXE, 201, 4),
    (RoomCategory.SUITE, 301, 2),
)


def default_rooms() -> List[Room]:
    """Возвращает номера начального каталога: 101-105, 201-204, 301-302."""
    return [
        Room(room_number=first + offset, category=category)
        for category, first, count in DEFAULT_LAYOUT
        for offset in range(count)
    ]


class RoomCatalog:
    """Упорядоченный набор номеров с уникальными номерами комнат."""

    def __init__(self, rooms: Iterable[Room]):
        self._rooms: Tuple[Room, ...] = tuple(rooms)
        self._by_number: Dict[int, Room] = {}
        for room in self._rooms:
            if room.room_number in self._by_number:
                raise BusinessRuleValidationException(
                    f"Номер {room.room_number} встречается в каталоге дважды"
                )
            self._by_number[room.room_number] = room

    @classmethod
    def with_defaults(cls) -> "RoomCatalog":
        return cls(default_rooms())

    @property
    def rooms(self) -> Tuple[Room, ...]:
        return self._rooms

    def get(self, room_number: int) -> Optional[Room]:
        return self._by_number.get(room_number)

    def by_category(self, category: RoomCategory) -> List[Room]:
        """Номера указанной категории в порядке каталога."""
        return [room for room in self._rooms if room.category == category]

    def __contains__(self, room_number: object) -> bool:
        return room_number in self._by_number

    def __iter__(self) -> Iterator[Room]:
        return iter(self._rooms)

    def __len__(self) -> int:
        return len(self._rooms)

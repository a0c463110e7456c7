"""
Тесты каталога номеров.
"""

import pytest
from pydantic import ValidationError

from hotel_reservations.catalog.domain import Room, RoomCatalog, default_rooms
from hotel_reservations.shared_kernel import (
    BusinessRuleValidationException,
    RoomCategory,
)


def test_default_catalog_has_eleven_rooms():
    """Тест: каталог по умолчанию - 5 STANDARD, 4 DELUXE, 2 SUITE."""
    catalog = RoomCatalog.with_defaults()

    assert len(catalog) == 11
    assert [r.room_number for r in catalog.by_category(RoomCategory.STANDARD)] == [
        101,
        102,
        103,
        104,
        105,
    ]
    assert [r.room_number for r in catalog.by_category(RoomCategory.DELUXE)] == [
        201,
        202,
        203,
        204,
    ]
    assert [r.room_number for r in catalog.by_category(RoomCategory.SUITE)] == [
        301,
        302,
    ]


def test_default_rooms_keep_category_order():
    numbers = [room.room_number for room in default_rooms()]
    assert numbers == sorted(numbers)


def test_duplicate_room_numbers_are_rejected():
    rooms = [
        Room(room_number=101, category=RoomCategory.STANDARD),
        Room(room_number=101, category=RoomCategory.SUITE),
    ]
    with pytest.raises(BusinessRuleValidationException, match="дважды"):
        RoomCatalog(rooms)


def test_lookup_by_number(catalog):
    assert catalog.get(301) == Room(room_number=301, category=RoomCategory.SUITE)
    assert catalog.get(999) is None
    assert 204 in catalog
    assert 205 not in catalog


def test_room_is_immutable():
    room = Room(room_number=101, category=RoomCategory.STANDARD)
    with pytest.raises(ValidationError):
        room.room_number = 102


def test_room_number_must_be_positive():
    with pytest.raises(ValidationError):
        Room(room_number=0, category=RoomCategory.STANDARD)

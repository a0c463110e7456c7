"""
Тесты жизненного цикла состояния отеля.
"""

from datetime import date

import pytest

from hotel_reservations.booking.infrastructure import (
    DummyPaymentGateway,
    RoomNumberSelector,
    SequentialReservationIdGenerator,
)
from hotel_reservations.bootstrap import HotelContext
from hotel_reservations.config import Settings
from hotel_reservations.shared_kernel import RoomCategory


def book_room_101(context):
    return context.booking.book(
        "Иван Иванов",
        RoomCategory.STANDARD,
        date(2024, 1, 10),
        date(2024, 1, 12),
        RoomNumberSelector(101),
        DummyPaymentGateway(),
    )


def test_first_run_seeds_eleven_rooms(kv_store, logger):
    with HotelContext(kv_store, logger=logger) as context:
        assert len(context.catalog) == 11
        assert len(context.reservations) == 0

    assert kv_store.read("rooms") is not None


def test_state_survives_restart(tmp_path, logger):
    settings = Settings(data_dir=tmp_path)

    with HotelContext.from_settings(settings, logger=logger) as context:
        reservation = book_room_101(context).reservation

    with HotelContext.from_settings(settings, logger=logger) as context:
        assert context.booking.list_all() == [reservation]
        assert len(context.catalog) == 11


def test_corrupt_reservations_start_empty(kv_store, logger):
    kv_store.write("reservations", b"\x00\x01garbage")

    with HotelContext(kv_store, logger=logger) as context:
        assert context.booking.list_all() == []


def test_close_performs_final_save(kv_store, logger):
    context = HotelContext(
        kv_store, id_generator=SequentialReservationIdGenerator(), logger=logger
    ).open()
    book_room_101(context)
    kv_store.write("reservations", b"")

    assert context.close() is True
    assert b"RES000001" in kv_store.read("reservations")
    assert not context.is_open


def test_close_reports_failed_save(failing_kv_store, logger):
    context = HotelContext(failing_kv_store, logger=logger).open()

    assert context.close() is False


def test_services_require_open_context(kv_store, logger):
    context = HotelContext(kv_store, logger=logger)

    with pytest.raises(RuntimeError):
        context.booking


def test_reservations_for_unknown_rooms_are_reported(kv_store, logger):
    kv_store.write(
        "reservations",
        b'{"RES1": {"id": "RES1", "guest_name": "X", "room_number": 999,'
        b' "check_in": "2024-01-10", "check_out": "2024-01-12", "paid": true}}',
    )

    with HotelContext(kv_store, logger=logger) as context:
        assert len(context.reservations) == 1

    assert any(
        level == "warning" and kwargs.get("rooms") == [999]
        for level, _, kwargs in logger.records
    )


def test_catalog_with_repeated_room_numbers_falls_back_to_defaults(kv_store, logger):
    kv_store.write(
        "rooms",
        b'[{"room_number": 101, "category": "STANDARD"},'
        b' {"room_number": 101, "category": "DELUXE"}]',
    )

    with HotelContext(kv_store, logger=logger) as context:
        assert len(context.catalog) == 11


def test_corrupt_catalog_is_not_overwritten_while_reservations_exist(
    kv_store, logger
):
    kv_store.write("rooms", b"{not json")
    kv_store.write(
        "reservations",
        b'{"RES1": {"id": "RES1", "guest_name": "X", "room_number": 7,'
        b' "check_in": "2024-01-10", "check_out": "2024-01-12", "paid": true}}',
    )

    with HotelContext(kv_store, logger=logger) as context:
        assert len(context.catalog) == 11
        assert "RES1" in context.reservations

    assert kv_store.read("rooms") == b"{not json"


def test_overlapping_stored_reservations_keep_only_the_first(kv_store, logger):
    kv_store.write(
        "reservations",
        b'{"A": {"id": "A", "guest_name": "X", "room_number": 101,'
        b' "check_in": "2024-01-10", "check_out": "2024-01-12", "paid": true},'
        b' "B": {"id": "B", "guest_name": "Y", "room_number": 101,'
        b' "check_in": "2024-01-11", "check_out": "2024-01-13", "paid": true}}',
    )

    with HotelContext(kv_store, logger=logger) as context:
        assert [r.id for r in context.booking.list_all()] == ["A"]

    assert any(
        level == "warning" and kwargs.get("reservation_id") == "B"
        for level, _, kwargs in logger.records
    )


def test_unpaid_stored_reservations_are_treated_as_corrupt(kv_store, logger):
    kv_store.write(
        "reservations",
        b'{"A": {"id": "A", "guest_name": "X", "room_number": 101,'
        b' "check_in": "2024-01-10", "check_out": "2024-01-12", "paid": false}}',
    )

    with HotelContext(kv_store, logger=logger) as context:
        assert context.booking.list_all() == []

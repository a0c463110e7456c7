from pathlib import Path

import pytest
from pydantic import ValidationError

from hotel_reservations.config import Settings


def test_defaults():
    settings = Settings.from_env(environ={})

    assert settings.data_dir == Path("data")
    assert settings.rooms_key == "rooms"
    assert settings.reservations_key == "reservations"
    assert settings.log_level == "WARNING"


def test_values_from_environment():
    settings = Settings.from_env(
        environ={
            "HOTEL_DATA_DIR": "/var/lib/hotel",
            "HOTEL_LOG_LEVEL": "debug",
            "HOTEL_RESERVATIONS_KEY": "bookings",
            "UNRELATED": "ignored",
        }
    )

    assert settings.data_dir == Path("/var/lib/hotel")
    assert settings.log_level == "DEBUG"
    assert settings.reservations_key == "bookings"


def test_unknown_log_level():
    with pytest.raises(ValidationError, match="Неизвестный уровень"):
        Settings.from_env(environ={"HOTEL_LOG_LEVEL": "LOUD"})

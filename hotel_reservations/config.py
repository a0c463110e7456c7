"""
Настройки приложения.

Значения берутся из переменных окружения (и файла .env, если он есть).
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "HOTEL_"


class Settings(BaseModel):
    """Настройки системы бронирования."""

    data_dir: Path = Field(default=Path("data"))
    rooms_key: str = Field(default="rooms", min_length=1)
    reservations_key: str = Field(default="reservations", min_length=1)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Неизвестный уровень логирования: {v}")
        return level

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, dotenv: bool = True
    ) -> "Settings":
        """Собирает настройки из переменных окружения с префиксом HOTEL_."""
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        values = {}
        for name in cls.model_fields:
            key = f"{ENV_PREFIX}{name.upper()}"
            if key in environ:
                values[name] = environ[key]
        return cls(**values)

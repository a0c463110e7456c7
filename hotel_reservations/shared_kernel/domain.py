"""
Основные доменные типы и исключения общего ядра.
"""

from datetime import date, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class RoomCategory(str, Enum):
    """Категории номеров в отеле."""

    STANDARD = "STANDARD"
    DELUXE = "DELUXE"
    SUITE = "SUITE"


# Общие исключения
class DomainException(Exception):
    """Базовое исключение для доменных ошибок."""

    pass


class BusinessRuleValidationException(DomainException):
    """Исключение при нарушении бизнес-правил."""

    pass


class InvalidDateRange(BusinessRuleValidationException):
    """Дата выезда не позже даты заезда."""

    def __init__(self, check_in: date, check_out: date):
        super().__init__(
            f"Дата выезда ({check_out.isoformat()}) должна быть позже "
            f"даты заезда ({check_in.isoformat()})"
        )
        self.check_in = check_in
        self.check_out = check_out


class PersistenceError(DomainException):
    """Ошибка чтения или записи во внешнее хранилище."""

    pass


class DateRange(BaseModel):
    """Период проживания: дата заезда включительно, дата выезда свободна."""

    model_config = ConfigDict(frozen=True)

    check_in: date
    check_out: date

    @model_validator(mode="after")
    def check_out_after_check_in(self) -> "DateRange":
        if self.check_out <= self.check_in:
            raise ValueError("Дата выезда должна быть позже даты заезда")
        return self

    @classmethod
    def of(cls, check_in: date, check_out: date) -> "DateRange":
        """Создает период, выбрасывая InvalidDateRange для пустого периода."""
        if check_out <= check_in:
            raise InvalidDateRange(check_in, check_out)
        return cls(check_in=check_in, check_out=check_out)

    @property
    def nights(self) -> int:
        """Количество ночей в периоде."""
        return (self.check_out - self.check_in).days

    def overlaps(self, other: "DateRange") -> bool:
        """
        Проверяет пересечение с другим периодом.

        Периоды не пересекаются, если этот заканчивается не позже начала
        другого, либо начинается не раньше последней ночи другого периода.
        День выезда одного гостя может быть днем заезда следующего.
        """
        last_night = other.check_out - timedelta(days=1)
        return not (self.check_out <= other.check_in or self.check_in > last_night)

    def __str__(self) -> str:
        return f"{self.check_in.isoformat()} - {self.check_out.isoformat()}"

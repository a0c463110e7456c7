"""CLI entry point: консольное меню системы бронирования."""

from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Optional, Sequence

import click

from hotel_reservations import __version__
from hotel_reservations.booking.application import BookingService
from hotel_reservations.booking.domain import PricingPolicy
from hotel_reservations.booking.interfaces import IPaymentGateway, IRoomSelector
from hotel_reservations.bootstrap import HotelContext, configure_logging
from hotel_reservations.catalog.domain import Room
from hotel_reservations.config import Settings
from hotel_reservations.shared_kernel import DomainException, RoomCategory

DATE_FORMAT = "%Y-%m-%d"

MENU = """
--- Система бронирования отеля ---
1. Найти и забронировать номер
2. Отменить бронирование
3. Показать все бронирования
4. Выход"""


def prompt_choice(text: str, minimum: int, maximum: int) -> int:
    """Запрашивает целое число в границах, повторяя запрос при ошибке."""
    return click.prompt(
        f"{text} ({minimum}-{maximum})", type=click.IntRange(minimum, maximum)
    )


def prompt_date(text: str) -> date:
    """Запрашивает дату в формате YYYY-MM-DD, повторяя запрос при ошибке."""
    value = click.prompt(text, type=click.DateTime(formats=[DATE_FORMAT]))
    return value.date()


def format_amount(amount: Decimal) -> str:
    return f"${amount:.2f}"


class ConsoleRoomSelector(IRoomSelector):
    """Показывает свободные номера и спрашивает, какой забронировать."""

    def select(self, candidates: Sequence[Room]) -> int:
        click.echo("Свободные номера:")
        for position, room in enumerate(candidates, start=1):
            click.echo(f"{position}. {room}")
        return prompt_choice("Выберите номер", 1, len(candidates)) - 1


class ConsolePaymentGateway(IPaymentGateway):
    """Имитация оплаты: показывает сумму и всегда проходит после подтверждения."""

    def authorize(
        self, room: Room, check_in: date, check_out: date, amount: Decimal
    ) -> bool:
        nights = (check_out - check_in).days
        click.echo(
            f"Стоимость {nights} ноч. в номере {room.category.value}: "
            f"{format_amount(amount)}"
        )
        if not click.confirm("Оплатить?", default=False):
            return False
        click.echo("Оплата прошла успешно.")
        return True


class HotelConsole:
    """Консольное меню поверх сервиса бронирования."""

    def __init__(
        self,
        service: BookingService,
        room_selector: Optional[IRoomSelector] = None,
        payment_gateway: Optional[IPaymentGateway] = None,
    ):
        self._service = service
        self._room_selector = room_selector or ConsoleRoomSelector()
        self._payment_gateway = payment_gateway or ConsolePaymentGateway()

    def run(self) -> None:
        """Основной цикл меню. Конец ввода завершает работу так же, как пункт 4."""
        actions = {
            1: self.make_reservation,
            2: self.cancel_reservation,
            3: self.view_reservations,
        }
        try:
            while True:
                click.echo(MENU)
                choice = prompt_choice("Ваш выбор", 1, 4)
                if choice == 4:
                    break
                actions[choice]()
        except click.Abort:
            click.echo()
        click.echo("Выход... До свидания!")

    def make_reservation(self) -> None:
        guest_name = click.prompt("Введите ваше имя").strip()

        click.echo("Выберите категорию номера:")
        categories = list(RoomCategory)
        pricing: PricingPolicy = self._service.pricing
        for position, category in enumerate(categories, start=1):
            rate = format_amount(pricing.nightly_rate(category))
            click.echo(f"{position}. {category.value} ({rate} за ночь)")
        category = categories[prompt_choice("Категория", 1, len(categories)) - 1]

        check_in = prompt_date("Дата заезда (YYYY-MM-DD)")
        check_out = prompt_date("Дата выезда (YYYY-MM-DD)")

        try:
            confirmation = self._service.book(
                guest_name,
                category,
                check_in,
                check_out,
                room_selector=self._room_selector,
                payment_gateway=self._payment_gateway,
            )
        except DomainException as e:
            click.echo(f"Бронирование не выполнено: {e}")
            return

        click.echo(
            f"Бронирование выполнено! Номер вашего бронирования: "
            f"{confirmation.reservation.id}"
        )
        if not confirmation.persisted:
            click.echo(
                "Внимание: бронирование не удалось сохранить на диск, "
                "оно действует только до завершения программы."
            )

    def cancel_reservation(self) -> None:
        reservation_id = click.prompt("Введите номер бронирования").strip()
        try:
            reservation = self._service.get(reservation_id)
        except DomainException as e:
            click.echo(str(e))
            return

        click.echo(str(reservation))
        confirmed = click.confirm("Вы уверены, что хотите отменить бронирование?")
        try:
            result = self._service.cancel(reservation_id, confirmed)
        except DomainException as e:
            click.echo(str(e))
            return

        if not result.cancelled:
            click.echo("Отмена прервана.")
            return
        click.echo("Бронирование отменено.")
        if not result.persisted:
            click.echo("Внимание: изменение не удалось сохранить на диск.")

    def view_reservations(self) -> None:
        reservations = self._service.list_all()
        if not reservations:
            click.echo("Бронирований нет.")
            return
        click.echo("Все бронирования:")
        for reservation in reservations:
            click.echo(str(reservation))


@click.command()
@click.version_option(version=__version__)
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Каталог с файлами номеров и бронирований.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Уровень логирования.",
)
def main(data_dir: Optional[Path], log_level: Optional[str]) -> None:
    """Система бронирования номеров отеля.

    Настройки читаются из переменных окружения HOTEL_* и файла .env,
    параметры командной строки имеют приоритет.
    """
    settings = Settings.from_env()
    overrides = {}
    if data_dir is not None:
        overrides["data_dir"] = data_dir
    if log_level is not None:
        overrides["log_level"] = log_level
    if overrides:
        settings = Settings(**{**settings.model_dump(), **overrides})

    configure_logging(settings)

    with HotelContext.from_settings(settings) as context:
        HotelConsole(context.booking).run()

"""
Модуль каталога номеров (Catalog Context).

Отвечает за набор номеров отеля и их категории:
- Заполнение каталога по умолчанию при первом запуске
- Загрузку и сохранение каталога
"""

from . import application, domain, infrastructure, interfaces

__all__ = [
    "domain",
    "application",
    "infrastructure",
    "interfaces",
]

"""
Система бронирования номеров отеля.

Поиск свободных номеров по категории и датам, бронирование с имитацией
оплаты, отмена и просмотр бронирований.
"""

__version__ = "0.1.0"

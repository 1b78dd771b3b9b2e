"""Telegram bot handlers and transport gateway."""

from .gateway import NotificationGateway, TelegramGateway
from .handlers import register_handlers
from .keyboards import get_main_keyboard

__all__ = [
    "register_handlers",
    "NotificationGateway",
    "TelegramGateway",
    "get_main_keyboard",
]

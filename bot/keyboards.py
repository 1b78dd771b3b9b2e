"""
Reply keyboard shown under every bot message.
"""

from aiogram.types import KeyboardButton, ReplyKeyboardMarkup
from aiogram.utils.keyboard import ReplyKeyboardBuilder

from utils.constants import CLEAR_ALL_COMMAND, LIST_COMMAND


def get_main_keyboard() -> ReplyKeyboardMarkup:
    """Get the persistent List / Clear all keyboard."""
    builder = ReplyKeyboardBuilder()

    builder.row(
        KeyboardButton(text=LIST_COMMAND),
        KeyboardButton(text=CLEAR_ALL_COMMAND),
    )

    return builder.as_markup()

"""
Outbound side of the chat transport.

Every message leaves through a gateway so that send failures are
handled in one place: they are logged and reported as False, never
raised into the registry or the timers.
"""

import logging
from typing import Optional, Protocol

from aiogram import Bot
from aiogram.types import ReplyKeyboardMarkup

from bot.keyboards import get_main_keyboard
from utils.constants import ALARM_TEXT

logger = logging.getLogger(__name__)


class NotificationGateway(Protocol):
    """What the timer core needs from the transport."""

    async def send(self, chat_id: int, text: str) -> bool: ...

    async def send_alarm(self, chat_id: int) -> bool: ...


class TelegramGateway:
    """Sends messages through an aiogram Bot with the reply keyboard attached."""

    def __init__(self, bot: Bot, keyboard: Optional[ReplyKeyboardMarkup] = None):
        self._bot = bot
        self._keyboard = keyboard or get_main_keyboard()

    async def send(self, chat_id: int, text: str) -> bool:
        """
        Send a text message to a chat.

        Args:
            chat_id: Telegram chat ID
            text: Message text, sent as-is without markup parsing

        Returns:
            True if sent successfully, False otherwise
        """
        try:
            await self._bot.send_message(chat_id, text, reply_markup=self._keyboard)
            return True
        except Exception as e:
            logger.error(f"Failed to send message to chat {chat_id}: {e}", exc_info=True)
            return False

    async def send_alarm(self, chat_id: int) -> bool:
        """Send the alarm notification."""
        sent = await self.send(chat_id, ALARM_TEXT)
        if sent:
            logger.info(f"Alarm sent to chat {chat_id}")
        return sent

"""
Bot handlers for the Telegram alarm bot.
Handles listing, clearing and scheduling alarms.
"""

import logging

from aiogram import F, Router
from aiogram.types import Message

from bot.gateway import NotificationGateway
from scheduler.registry import TimerRegistry
from utils.constants import (
    CLEAR_ALL_COMMAND,
    DONE_TEXT,
    EMPTY_LIST_TEXT,
    LIST_COMMAND,
    LIST_HEADER_TEXT,
)
from utils.duration import format_duration, parse_duration
from utils.exceptions import DurationTooLongError

logger = logging.getLogger(__name__)

router = Router()


def _username(message: Message) -> str:
    user = message.from_user
    if user is None:
        return "unknown"
    return user.username or str(user.id)


def render_timer_list(registry: TimerRegistry, chat_id: int) -> str:
    """Build the List reply for a chat."""
    timers = registry.list_timers(chat_id)
    if not timers:
        return EMPTY_LIST_TEXT

    lines = [LIST_HEADER_TEXT]
    for info in timers:
        lines.append(
            f"{format_duration(info.remaining_seconds)} "
            f"({format_duration(info.total_seconds)})"
        )
    return "\n".join(lines)


# ========== List ==========


@router.message(F.text == LIST_COMMAND)
async def handle_list(
    message: Message, registry: TimerRegistry, gateway: NotificationGateway
):
    """Show pending alarms, soonest first."""
    logger.info(f"[{_username(message)}] {message.text} - start")

    await gateway.send(message.chat.id, render_timer_list(registry, message.chat.id))

    logger.info(f"[{_username(message)}] {message.text} - end")


# ========== Clear all ==========


@router.message(F.text == CLEAR_ALL_COMMAND)
async def handle_clear_all(
    message: Message, registry: TimerRegistry, gateway: NotificationGateway
):
    """Cancel every pending alarm of the chat."""
    logger.info(f"[{_username(message)}] {message.text} - start")

    registry.clear_all(message.chat.id)
    await gateway.send(message.chat.id, DONE_TEXT)

    logger.info(f"[{_username(message)}] {message.text} - end")


# ========== Schedule or echo ==========


@router.message(F.text)
async def handle_text(
    message: Message, registry: TimerRegistry, gateway: NotificationGateway
):
    """Schedule an alarm from a duration, or echo text without numbers."""
    logger.info(f"[{_username(message)}] {message.text} - start")

    chat_id = message.chat.id
    total_seconds, ok = parse_duration(message.text)

    if not ok:
        reply = message.text
    else:
        try:
            registry.schedule(chat_id, total_seconds, on_fire=gateway.send_alarm)
            reply = format_duration(total_seconds)
        except DurationTooLongError as e:
            logger.warning(f"Rejected alarm for chat {chat_id}: {e}")
            reply = f"Too long, maximum is {format_duration(e.max_seconds)}"

    await gateway.send(chat_id, reply)

    logger.info(f"[{_username(message)}] {message.text} - end")


def register_handlers(dp) -> None:
    """Register all handlers with dispatcher."""
    dp.include_router(router)

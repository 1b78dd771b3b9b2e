"""
Per-chat registry of pending alarm timers.

All mutating methods are synchronous and never await, so on the asyncio
loop each one runs to completion before any other handler or timer
callback touches the registry.
"""

import itertools
import logging
import time
from typing import Awaitable, Callable, Dict, List, Optional

from apscheduler.schedulers.base import BaseScheduler

from models.timer import TimerInfo
from scheduler.timer import Timer, max_delay_seconds
from utils.exceptions import DurationTooLongError

logger = logging.getLogger(__name__)

OnFire = Callable[[int], Awaitable[object]]


class TimerRegistry:
    """Maps chat ids to their scheduled timers."""

    def __init__(
        self,
        scheduler: BaseScheduler,
        max_timer_seconds: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._scheduler = scheduler
        self._max_timer_seconds = max_timer_seconds
        self._clock = clock
        self._timers: Dict[int, List[Timer]] = {}
        self._ids = itertools.count(1)

    def schedule(self, chat_id: int, total_seconds: int, on_fire: OnFire) -> Timer:
        """
        Create and start a timer for a chat.

        Args:
            chat_id: Chat the timer belongs to
            total_seconds: Delay before firing, whole seconds
            on_fire: Awaited with the chat id when the timer fires

        Returns:
            The started timer

        Raises:
            ValueError: If total_seconds is negative
            DurationTooLongError: If total_seconds exceeds the configured
                ceiling or the furthest deadline the scheduler can hold
        """
        if self._max_timer_seconds is not None and total_seconds > self._max_timer_seconds:
            raise DurationTooLongError(total_seconds, self._max_timer_seconds)

        representable = max_delay_seconds()
        if total_seconds > representable:
            raise DurationTooLongError(total_seconds, representable)

        timer = Timer(next(self._ids), chat_id, total_seconds, clock=self._clock)

        async def on_fired(fired: Timer) -> None:
            try:
                await on_fire(fired.chat_id)
            finally:
                self.remove(fired.chat_id, fired.id)

        try:
            timer.start(self._scheduler, on_fired)
        except OverflowError as e:
            raise DurationTooLongError(total_seconds, representable) from e
        self._timers.setdefault(chat_id, []).append(timer)

        logger.info(f"Scheduled {timer!r}")
        return timer

    def list_timers(self, chat_id: int) -> List[TimerInfo]:
        """
        Return the chat's pending timers, soonest first.

        Settled timers are pruned from the chat before the snapshot is taken.
        """
        timers = self._prune(chat_id)
        now = self._clock()

        ordered = sorted(timers, key=lambda timer: timer.remaining(now))
        return [
            TimerInfo(
                timer_id=timer.id,
                remaining_seconds=timer.remaining_seconds(now),
                total_seconds=timer.total_seconds,
            )
            for timer in ordered
        ]

    def clear_all(self, chat_id: int) -> int:
        """
        Cancel every timer of a chat and empty its sequence.

        Returns:
            Number of timers actually cancelled (already fired ones are
            not counted)
        """
        timers = self._timers.get(chat_id)
        if not timers:
            return 0

        cancelled = sum(1 for timer in timers if timer.cancel())
        self._timers[chat_id] = []

        logger.info(f"Cleared {cancelled} timer(s) for chat {chat_id}")
        return cancelled

    def remove(self, chat_id: int, timer_id: int) -> bool:
        """Drop a single timer from a chat. Returns False if it was not there."""
        timers = self._timers.get(chat_id)
        if not timers:
            return False

        remaining = [timer for timer in timers if timer.id != timer_id]
        if len(remaining) == len(timers):
            return False

        self._timers[chat_id] = remaining
        logger.debug(f"Removed timer {timer_id} from chat {chat_id}")
        return True

    def count(self, chat_id: int) -> int:
        """Stored sequence length for a chat, settled entries included."""
        return len(self._timers.get(chat_id, []))

    def active_chats(self) -> List[int]:
        """Chat ids that currently hold at least one stored timer."""
        return [chat_id for chat_id, timers in self._timers.items() if timers]

    def cancel_everything(self) -> int:
        """Cancel all timers in all chats. Used on shutdown."""
        total = 0
        for chat_id in list(self._timers):
            total += self.clear_all(chat_id)
        return total

    def _prune(self, chat_id: int) -> List[Timer]:
        timers = self._timers.get(chat_id)
        if not timers:
            return []

        pending = [timer for timer in timers if not timer.is_settled]
        if len(pending) != len(timers):
            logger.debug(
                f"Pruned {len(timers) - len(pending)} settled timer(s) for chat {chat_id}"
            )
            self._timers[chat_id] = pending
        return pending

"""
A single one-shot alarm timer.

The deadline is an APScheduler date job. Firing and cancelling both
commit the state transition before doing anything else, so whichever
runs first wins and the other becomes a no-op.
"""

import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable, Optional

from apscheduler.job import Job
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.date import DateTrigger

from models.timer import TimerState
from utils.exceptions import TimerError

logger = logging.getLogger(__name__)

OnFired = Callable[["Timer"], Awaitable[None]]
OnCancelled = Callable[["Timer"], None]


def max_delay_seconds(now: Optional[datetime] = None) -> int:
    """Longest delay a date job can still represent, with a day of margin."""
    if now is None:
        now = datetime.now(timezone.utc)
    limit = datetime.max.replace(tzinfo=timezone.utc) - now - timedelta(days=1)
    return int(limit.total_seconds())


class Timer:
    """One scheduled notification for a chat."""

    def __init__(
        self,
        timer_id: int,
        chat_id: int,
        total_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        if total_seconds < 0:
            raise ValueError(f"Timer duration must be >= 0, got {total_seconds}")

        self.id = timer_id
        self.chat_id = chat_id
        self.total_seconds = total_seconds
        self._clock = clock
        self.started_at = clock()
        self.state = TimerState.SCHEDULED

        self._job: Optional[Job] = None
        self._on_fired: Optional[OnFired] = None
        self._on_cancelled: Optional[OnCancelled] = None

    def __repr__(self) -> str:
        return (
            f"Timer(id={self.id}, chat_id={self.chat_id}, "
            f"total_seconds={self.total_seconds}, state={self.state.value})"
        )

    @property
    def job_id(self) -> str:
        return f"timer:{self.chat_id}:{self.id}"

    @property
    def is_settled(self) -> bool:
        return self.state is not TimerState.SCHEDULED

    def remaining(self, now: Optional[float] = None) -> float:
        """Seconds left until the deadline. Negative once it has passed."""
        if now is None:
            now = self._clock()
        return self.total_seconds - (now - self.started_at)

    def remaining_seconds(self, now: Optional[float] = None) -> int:
        """Whole seconds left, clamped to zero."""
        return max(0, int(self.remaining(now)))

    def start(
        self,
        scheduler: BaseScheduler,
        on_fired: OnFired,
        on_cancelled: Optional[OnCancelled] = None,
    ) -> None:
        """
        Begin the countdown.

        Args:
            scheduler: Running (or about to run) scheduler owning the job
            on_fired: Awaited once if the deadline is reached first
            on_cancelled: Called once if cancel() wins

        Raises:
            TimerError: If the timer was already started or has settled
            OverflowError: If the deadline falls outside the datetime range
        """
        if self._job is not None or self.is_settled:
            raise TimerError(f"{self!r} cannot be started twice")

        self._on_fired = on_fired
        self._on_cancelled = on_cancelled

        run_date = datetime.now(timezone.utc) + timedelta(seconds=self.total_seconds)
        self._job = scheduler.add_job(
            self.fire,
            trigger=DateTrigger(run_date=run_date),
            id=self.job_id,
            name=f"Alarm for chat {self.chat_id}",
            misfire_grace_time=None,
        )
        logger.debug(f"{self!r} scheduled at {run_date.isoformat()}")

    def _commit(self, state: TimerState) -> bool:
        if self.is_settled:
            return False
        self.state = state
        return True

    async def fire(self) -> None:
        """Deadline reached: notify unless the timer was cancelled first."""
        if not self._commit(TimerState.FIRED):
            logger.debug(f"{self!r} already settled, skipping fire")
            return

        logger.info(f"{self!r} fired")
        if self._on_fired is None:
            return

        try:
            await self._on_fired(self)
        except Exception as e:
            logger.error(f"Fire callback failed for {self!r}: {e}", exc_info=True)

    def cancel(self) -> bool:
        """
        Cancel the timer if it has not fired yet.

        Returns:
            True if this call cancelled the timer, False if it had already
            fired or been cancelled
        """
        if not self._commit(TimerState.CANCELLED):
            return False

        if self._job is not None:
            try:
                self._job.remove()
            except JobLookupError:
                # Job already consumed by the scheduler; fire() will see
                # the cancelled state and do nothing.
                pass

        logger.info(f"{self!r} cancelled")
        if self._on_cancelled is not None:
            self._on_cancelled(self)
        return True

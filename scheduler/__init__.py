"""Alarm timers and their registry."""

from .backend import create_scheduler, shutdown_scheduler
from .registry import TimerRegistry
from .timer import Timer

__all__ = ["create_scheduler", "shutdown_scheduler", "Timer", "TimerRegistry"]

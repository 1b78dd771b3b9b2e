"""Pydantic models for data validation and serialization."""

from .timer import TimerInfo, TimerState

__all__ = [
    "TimerInfo",
    "TimerState",
]

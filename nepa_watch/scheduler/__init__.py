"""Scheduling of periodic feed builds."""

from .service import SchedulerService

__all__ = [
    "SchedulerService",
]

"""Runtime primitives shared by the game: scheduling, events, logging."""

from salvo.runtime.events import EventBus, Subscription
from salvo.runtime.logging import JsonFormatter, LoggingConfig, configure_logging
from salvo.runtime.scheduler import Scheduler

__all__ = [
    "EventBus",
    "JsonFormatter",
    "LoggingConfig",
    "Scheduler",
    "Subscription",
    "configure_logging",
]

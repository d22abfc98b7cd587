"""
Feedback pulse service for the WheelSpin engine.

Feedback pulses are the side channel to the host platform (haptics, click
sounds). The engine fires them and moves on; nothing waits on a pulse and a
failed pulse is never retried.

Classes:
    FeedbackKind: Enum of the pulse types the engine requests
    FeedbackService: Abstract pulse sink
    LoggingFeedbackService: Default sink that logs and counts pulses
"""

import logging
from abc import ABC, abstractmethod
from collections import Counter
from enum import Enum

logger = logging.getLogger(__name__)


class FeedbackKind(str, Enum):
    """
    Pulse types requested during a spin.

    PREPARE is sent once when a spin is accepted, IMPACT during wind-up and
    spinning, SUCCESS once when the spin resolves.
    """

    PREPARE = "prepare"
    IMPACT = "impact"
    SUCCESS = "success"


class FeedbackService(ABC):
    """Platform feedback sink used by the spin engine."""

    @abstractmethod
    def emit(self, kind: FeedbackKind) -> None:
        """Request one feedback pulse of the given kind."""


class LoggingFeedbackService(FeedbackService):
    """
    Feedback sink that writes each pulse to the debug log.

    Used when the host has no haptics engine (servers, tests, simulations).
    Keeps a count per kind so a host can inspect what a spin requested.

    Example:
        >>> feedback = LoggingFeedbackService()
        >>> feedback.emit(FeedbackKind.SUCCESS)
        >>> feedback.counts[FeedbackKind.SUCCESS]
        1
    """

    def __init__(self):
        self.counts: Counter = Counter()

    def emit(self, kind: FeedbackKind) -> None:
        self.counts[kind] += 1
        logger.debug("Feedback pulse: %s", kind.value)

    def reset_counts(self) -> None:
        self.counts.clear()

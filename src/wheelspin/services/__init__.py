"""
Service layer for the WheelSpin package.

This module contains the wheel logic and the interfaces the engine uses to
talk to its surroundings. The partitioner and resolver are pure functions;
the engine wires them together with a scheduler, a feedback sink and an
item source.

Classes:
    SpinEngine: Spin state machine
    ItemSource: Abstract ordered item collection
    InMemoryItemSource: List-backed item source
    DynamoDBItemSource: DynamoDB-backed item source
    Scheduler: Abstract timer scheduler
    ManualScheduler: Deterministic fake clock
    AsyncioScheduler: asyncio event-loop scheduler
    FeedbackService: Abstract feedback pulse sink
    LoggingFeedbackService: Feedback sink writing to the log
    FeedbackKind: Enum of pulse types

Functions:
    partition: Build wheel sections from items
    resolve: Map a rotation angle to the selected item
"""

from .dynamodb_item_source import DynamoDBItemSource
from .feedback_service import FeedbackKind, FeedbackService, LoggingFeedbackService
from .item_source import InMemoryItemSource, ItemSource
from .partition_service import FULL_CIRCLE, partition, section_width
from .resolver_service import (
    draw_rotation,
    effective_angle,
    normalize_angle,
    resolve,
    section_index,
)
from .scheduler_service import AsyncioScheduler, ManualScheduler, ScheduledCall, Scheduler
from .spin_engine import SpinEngine

__all__ = [
    "SpinEngine",
    "ItemSource",
    "InMemoryItemSource",
    "DynamoDBItemSource",
    "Scheduler",
    "ScheduledCall",
    "ManualScheduler",
    "AsyncioScheduler",
    "FeedbackService",
    "FeedbackKind",
    "LoggingFeedbackService",
    "FULL_CIRCLE",
    "partition",
    "section_width",
    "resolve",
    "section_index",
    "normalize_angle",
    "effective_angle",
    "draw_rotation",
]

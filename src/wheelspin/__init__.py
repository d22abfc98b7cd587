"""
WheelSpin: fair random selection with a spinning wheel.

This package turns an ordered list of items into equal wheel sections, runs
a multi-stage spin (wind-up, spin, settle) on an injected scheduler and
resolves the final rotation to exactly one selected item.

Modules:
    models: Data models and validation using Pydantic
    services: Partitioner, resolver, spin engine and their collaborators
    config: Engine settings loaded from the environment
    utils: Utility functions and helpers

Version: 0.1.0
"""

__version__ = "0.1.0"

from .config import WheelSettings
from .models import SelectableItem, SpinPhase, SpinResult, SpinState, WheelSection
from .services import (
    AsyncioScheduler,
    FeedbackKind,
    InMemoryItemSource,
    ManualScheduler,
    SpinEngine,
    partition,
    resolve,
)

__all__ = [
    "WheelSettings",
    "SelectableItem",
    "WheelSection",
    "SpinPhase",
    "SpinState",
    "SpinResult",
    "SpinEngine",
    "InMemoryItemSource",
    "ManualScheduler",
    "AsyncioScheduler",
    "FeedbackKind",
    "partition",
    "resolve",
]

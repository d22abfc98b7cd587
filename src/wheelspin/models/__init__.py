"""
Data models for the WheelSpin package.

This module contains Pydantic models for the items placed on the wheel,
the derived sections and the spin state exposed to the visual layer.

Classes:
    SelectableItem: Item supplied by the host application
    WheelSection: Angular slice of the wheel mapped to one item
    SpinPhase: Enum for the spin state machine phases
    SpinState: Observable spin state
    SpinResult: Record of a resolved spin
"""

from .item import SelectableItem
from .section import WheelSection
from .spin_state import SpinPhase, SpinResult, SpinState

__all__ = ["SelectableItem", "WheelSection", "SpinPhase", "SpinState", "SpinResult"]

"""
Spin state models for the WheelSpin package.

This module defines the phase enum driving the spin state machine, the
mutable state snapshot the engine exposes for rendering, and the record
kept for each completed spin.

Classes:
    SpinPhase: Enum of the state machine phases
    SpinState: Rendering state owned by the engine
    SpinResult: Outcome and draw details of one resolved spin
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .item import SelectableItem


class SpinPhase(str, Enum):
    """
    Phases of a single spin.

    A spin always walks ``IDLE -> WIND_UP -> SPINNING -> RESOLVED -> IDLE``.
    """

    IDLE = "idle"
    WIND_UP = "wind_up"
    SPINNING = "spinning"
    RESOLVED = "resolved"


class SpinState(BaseModel):
    """
    State of the wheel as seen by the visual layer.

    The engine owns the only live instance and hands out copies, so callers
    can poll it freely without being able to change it.

    Attributes:
        phase: Current phase of the state machine
        rotation_angle: Accumulated rotation in degrees, never reset
        pointer_wobble: Pointer deflection in degrees during wind-up
        spin_velocity: Average angular speed of the current spin (deg/s)
        selected_item: Item chosen by the last completed spin
        spin_count: Number of spins that resolved to an item
    """

    phase: SpinPhase = SpinPhase.IDLE
    rotation_angle: float = 0.0
    pointer_wobble: float = 0.0
    spin_velocity: float = 0.0
    selected_item: Optional[SelectableItem] = None
    spin_count: int = Field(default=0, ge=0)

    @property
    def is_idle(self) -> bool:
        return self.phase == SpinPhase.IDLE


class SpinResult(BaseModel):
    """
    Record of a resolved spin.

    Keeps the random draw next to the angles the resolver derived from it,
    which makes a surprising outcome easy to explain after the fact.
    """

    model_config = {"frozen": True}

    item: SelectableItem
    section_index: int = Field(..., ge=0)
    full_rotations: int = Field(..., ge=0)
    final_offset: float = Field(..., ge=0.0, lt=360.0)
    total_rotation: float
    rotation_angle: float
    normalized_angle: float
    effective_angle: float
    resolved_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

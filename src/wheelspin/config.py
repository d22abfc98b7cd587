"""
Configuration for the WheelSpin engine.

Timing, rotation and palette settings live in a validated Pydantic model.
Defaults reproduce the feel of the original idea-board wheel; each value
can be overridden from ``WHEEL_*`` environment variables.

Classes:
    WheelSettings: Validated engine settings
"""

import os
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

WHEEL_PALETTE = [
    "#3399FF",  # blue
    "#33CC66",  # green
    "#FF9933",  # orange
    "#CC66FF",  # purple
    "#FF6699",  # pink
    "#FF4D4D",  # red
    "#33CCCC",  # teal
    "#66E6B3",  # mint
    "#8066FF",  # indigo
    "#CC9966",  # tan
]


class WheelSettings(BaseModel):
    """
    Settings for one spin engine.

    Attributes:
        wind_up_duration: Seconds the pointer wobbles before the spin
        wobble_amplitude: Pointer deflection in degrees during wind-up
        wobble_count: Number of wobble steps during wind-up
        spin_duration: Seconds of the spinning animation
        settle_duration: Extra seconds after the animation before resolving
        min_full_rotations: Lower bound of the full-rotation draw
        max_full_rotations: Upper bound of the full-rotation draw (inclusive)
        pulse_interval: Seconds between feedback pulses while spinning
        pulse_window: Seconds from spin start during which pulses are sent
        palette: Color tokens cycled over the sections

    Example:
        >>> settings = WheelSettings(spin_duration=3.0, pulse_window=2.5)
        >>> settings.resolve_delay
        3.2
    """

    wind_up_duration: float = Field(default=0.3, gt=0.0)
    wobble_amplitude: float = Field(default=8.0, ge=0.0, le=45.0)
    wobble_count: int = Field(default=3, ge=1)
    spin_duration: float = Field(default=5.0, gt=0.0)
    settle_duration: float = Field(default=0.2, ge=0.0)
    min_full_rotations: int = Field(default=8, ge=0)
    max_full_rotations: int = Field(default=12, ge=0)
    pulse_interval: float = Field(default=0.1, gt=0.0)
    pulse_window: float = Field(default=4.0, ge=0.0)
    palette: List[str] = Field(default_factory=lambda: list(WHEEL_PALETTE))

    @field_validator("palette")
    @classmethod
    def validate_palette(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("Palette must contain at least one color")
        return v

    @model_validator(mode="after")
    def validate_ranges(self) -> "WheelSettings":
        """
        Check the settings that depend on each other.

        Raises:
            ValueError: If the rotation range is inverted or pulses would
                outlast the spin animation
        """
        if self.min_full_rotations > self.max_full_rotations:
            raise ValueError("min_full_rotations cannot exceed max_full_rotations")

        if self.pulse_window > self.spin_duration:
            raise ValueError("pulse_window cannot exceed spin_duration")

        return self

    @property
    def resolve_delay(self) -> float:
        """Seconds from the start of spinning until the result is resolved."""
        return round(self.spin_duration + self.settle_duration, 6)

    @property
    def pulse_count(self) -> int:
        """Number of feedback pulses scheduled for one spin."""
        return int(round(self.pulse_window / self.pulse_interval))

    @property
    def wobble_interval(self) -> float:
        return self.wind_up_duration / self.wobble_count

    @classmethod
    def from_env(
        cls, prefix: str = "WHEEL_", environ: Optional[Mapping[str, str]] = None
    ) -> "WheelSettings":
        """
        Load settings from environment variables.

        Each field maps to ``<prefix><FIELD_NAME>``, e.g. ``WHEEL_SPIN_DURATION``.
        The palette is read as a comma separated list. Missing variables keep
        their defaults.

        Args:
            prefix: Variable name prefix
            environ: Mapping to read instead of ``os.environ``

        Returns:
            Validated settings

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, object] = {}

        for name in cls.model_fields:
            raw = environ.get(f"{prefix}{name.upper()}")
            if raw is None or raw.strip() == "":
                continue

            if name == "palette":
                values[name] = [c.strip() for c in raw.split(",") if c.strip()]
            else:
                values[name] = raw.strip()

        return cls(**values)

"""
Wheel section model.

A section is a derived, ephemeral slice of the wheel. Sections are rebuilt
as a whole list by the partitioner and never edited afterwards.
"""

from pydantic import BaseModel, Field

from .item import SelectableItem


class WheelSection(BaseModel):
    """
    Contiguous angular slice of the wheel mapped to one item.

    Angles are in degrees measured from the pointer, increasing clockwise.
    A section covers ``[start_angle, end_angle)``.
    """

    model_config = {"frozen": True}

    index: int = Field(..., ge=0, description="Position in the partition")
    item: SelectableItem
    start_angle: float = Field(..., ge=0.0, le=360.0)
    end_angle: float = Field(..., ge=0.0, le=360.0)
    color: str = Field(..., description="Palette color token")

    @property
    def width(self) -> float:
        return self.end_angle - self.start_angle

    def contains(self, angle: float) -> bool:
        """True when ``angle`` falls inside the half-open section range."""
        return self.start_angle <= angle < self.end_angle

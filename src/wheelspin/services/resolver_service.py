"""
Rotation-to-section resolution for the WheelSpin package.

The wheel turns clockwise while sections are laid out clockwise from the
pointer, so the section that ends up under the pointer is found by
"un-rotating" the wheel: ``effective = (360 - normalized) mod 360``.

Boundary rule: an effective angle exactly on a section boundary belongs to
the section that starts at that boundary.

Functions:
    normalize_angle: Reduce any finite angle into [0, 360)
    effective_angle: Pointer-relative angle for a wheel rotation
    section_index: Index of the section under the pointer
    resolve: Item under the pointer for a rotation and partition
    draw_rotation: Random full-rotation count and final offset
"""

import math
from typing import Protocol, Sequence, Tuple

from ..models.item import SelectableItem
from ..models.section import WheelSection
from .partition_service import FULL_CIRCLE, section_width


class RandomSource(Protocol):
    """The subset of ``random.Random`` used for spin draws."""

    def randint(self, a: int, b: int) -> int: ...

    def random(self) -> float: ...


def normalize_angle(angle: float) -> float:
    """
    Reduce ``angle`` into ``[0, 360)``.

    Negative angles wrap around. A tiny negative remainder can round up to
    exactly 360.0 when corrected, which is folded back to 0.0.

    Raises:
        ValueError: If ``angle`` is NaN or infinite
    """
    if not math.isfinite(angle):
        raise ValueError(f"Rotation angle must be finite, got {angle!r}")

    normalized = math.fmod(angle, FULL_CIRCLE)
    if normalized < 0.0:
        normalized += FULL_CIRCLE
    if normalized >= FULL_CIRCLE:
        normalized = 0.0

    return normalized


def effective_angle(rotation_angle: float) -> float:
    """Angle of the pointer measured on the wheel, in ``[0, 360)``."""
    return normalize_angle(FULL_CIRCLE - normalize_angle(rotation_angle))


def section_index(rotation_angle: float, count: int) -> int:
    """
    Index of the section under the pointer after ``rotation_angle``.

    The second modulo keeps the index in range when float division lands a
    hair above the last boundary.
    """
    width = section_width(count)
    index = int(effective_angle(rotation_angle) // width) % count
    return index % count


def resolve(rotation_angle: float, sections: Sequence[WheelSection]) -> SelectableItem:
    """
    Return the item whose section sits under the pointer.

    Deterministic for a given rotation and partition. Works on whatever
    partition it is handed, so a list that shrank mid-spin still yields a
    valid section.

    Args:
        rotation_angle: Accumulated wheel rotation in degrees
        sections: Current partition

    Returns:
        The selected item

    Raises:
        ValueError: If ``sections`` is empty or the angle is not finite

    Example:
        >>> resolve(3 * 360 + 45, partition(items_a_to_d)).label
        'D'
    """
    if not sections:
        raise ValueError("Cannot resolve a spin without sections")

    return sections[section_index(rotation_angle, len(sections))].item


def draw_rotation(
    rng: RandomSource, min_full_rotations: int, max_full_rotations: int
) -> Tuple[int, float]:
    """
    Draw the full-rotation count and final offset for one spin.

    ``final_offset`` is uniform over ``[0, 360)``; with equal section widths
    that alone makes every section equally likely.

    Returns:
        Tuple of ``(full_rotations, final_offset)``
    """
    full_rotations = rng.randint(min_full_rotations, max_full_rotations)
    final_offset = rng.random() * FULL_CIRCLE

    # random() is [0, 1) but a stubbed source may still hand back 1.0
    if final_offset >= FULL_CIRCLE:
        final_offset = 0.0

    return full_rotations, final_offset

"""
Section partitioning for the WheelSpin package.

Turns an ordered item list into equal, contiguous wheel sections. The
partition is a pure function of its input; the engine swaps the returned
list in as a whole.

Functions:
    section_width: Angular width of one section for a given item count
    partition: Build the sections for an ordered item list
"""

from typing import List, Sequence

from ..config import WHEEL_PALETTE
from ..models.item import SelectableItem
from ..models.section import WheelSection

FULL_CIRCLE = 360.0


def section_width(count: int) -> float:
    """
    Width in degrees of each section on a wheel with ``count`` sections.

    Raises:
        ValueError: If ``count`` is not positive
    """
    if count <= 0:
        raise ValueError("A wheel needs at least one section")
    return FULL_CIRCLE / count


def partition(
    items: Sequence[SelectableItem], palette: Sequence[str] = WHEEL_PALETTE
) -> List[WheelSection]:
    """
    Split the full circle into one equal section per item.

    Section ``i`` covers ``[i * w, (i + 1) * w)`` with ``w = 360 / N``. The
    last section ends at exactly 360 degrees so rounding never leaves a gap.
    Colors cycle through ``palette`` by index.

    Args:
        items: Ordered items, possibly empty
        palette: Color tokens to cycle through

    Returns:
        New list of sections, empty when ``items`` is empty

    Raises:
        ValueError: If ``palette`` is empty

    Example:
        >>> sections = partition([SelectableItem(id="a", label="A"),
        ...                       SelectableItem(id="b", label="B")])
        >>> [(s.start_angle, s.end_angle) for s in sections]
        [(0.0, 180.0), (180.0, 360.0)]
    """
    if not palette:
        raise ValueError("Palette must contain at least one color")

    if not items:
        return []

    count = len(items)
    width = section_width(count)

    sections = []
    for index, item in enumerate(items):
        start_angle = index * width
        end_angle = FULL_CIRCLE if index == count - 1 else (index + 1) * width
        sections.append(
            WheelSection(
                index=index,
                item=item,
                start_angle=start_angle,
                end_angle=end_angle,
                color=palette[index % len(palette)],
            )
        )

    return sections

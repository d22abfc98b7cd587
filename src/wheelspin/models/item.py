"""
Selectable item model for the WheelSpin package.

Items are owned by the host application (for example an idea board). The
engine only references them by position inside the current partition and
never changes them, so the model is frozen.

Classes:
    SelectableItem: Opaque identifier plus display label
"""

from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator


class SelectableItem(BaseModel):
    """
    An entry that can land under the wheel pointer.

    Attributes:
        id: Identifier assigned by the item source (duplicates are allowed)
        label: Text shown on the wheel section
        metadata: Free-form data carried through to the completion callback

    Example:
        >>> idea = SelectableItem(id="idea-1", label="Learn pottery")
        >>> idea.label
        'Learn pottery'
    """

    model_config = {"frozen": True}

    id: str = Field(..., min_length=1, description="Item identifier")
    label: str = Field(..., min_length=1, max_length=200, description="Display label")
    metadata: Dict[str, Any] = Field(
        default_factory=dict, description="Additional item data"
    )

    @field_validator("label")
    @classmethod
    def validate_label(cls, v: str) -> str:
        """
        Collapse whitespace in the label and reject blank labels.

        Raises:
            ValueError: If the label is only whitespace
        """
        cleaned = " ".join(v.strip().split())

        if not cleaned:
            raise ValueError("Item label cannot be empty")

        return cleaned

    def to_storage_item(self, position: int) -> Dict[str, Any]:
        """Convert the item to the attribute map stored by item sources."""
        return {
            "id": self.id,
            "label": self.label,
            "position": position,
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_storage_item(cls, item: Dict[str, Any]) -> "SelectableItem":
        """Build an item from a stored attribute map, ignoring storage-only keys."""
        return cls(
            id=item["id"],
            label=item["label"],
            metadata=item.get("metadata") or {},
        )

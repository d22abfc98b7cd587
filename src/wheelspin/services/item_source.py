"""
Item sources for the WheelSpin engine.

An item source owns the ordered list of selectable items (the idea list of
the host app). The engine depends on the abstract interface only and is
told about every change through a listener, so it can re-partition.

Classes:
    ItemSource: Abstract ordered item collection with change notification
    InMemoryItemSource: List-backed item source
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional

from ..models.item import SelectableItem

logger = logging.getLogger(__name__)

ItemListener = Callable[[List[SelectableItem]], None]


class ItemSource(ABC):
    """
    Ordered collection of selectable items.

    Subclasses implement :meth:`list_items` and call :meth:`_notify` after
    each change to their collection.
    """

    def __init__(self):
        self._listeners: List[ItemListener] = []

    @abstractmethod
    def list_items(self) -> List[SelectableItem]:
        """Return the current items in wheel order."""

    def subscribe(self, listener: ItemListener) -> None:
        """Register ``listener`` to receive the full item list after each change."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ItemListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        items = self.list_items()
        for listener in list(self._listeners):
            listener(items)


class InMemoryItemSource(ItemSource):
    """
    Item source keeping its items in a Python list.

    Example:
        >>> source = InMemoryItemSource()
        >>> source.add_item(SelectableItem(id="1", label="Paint the fence"))
        >>> [item.label for item in source.list_items()]
        ['Paint the fence']
    """

    def __init__(self, items: Optional[Iterable[SelectableItem]] = None):
        super().__init__()
        self._items: List[SelectableItem] = list(items or [])

    def list_items(self) -> List[SelectableItem]:
        return list(self._items)

    def add_item(self, item: SelectableItem, position: Optional[int] = None) -> None:
        """Insert ``item`` at ``position``, or append it when no position is given."""
        if position is None:
            self._items.append(item)
        else:
            self._items.insert(position, item)
        self._notify()

    def remove_item(self, item_id: str) -> bool:
        """
        Remove the first item with ``item_id``.

        Returns:
            True if an item was removed, False if none matched
        """
        for index, item in enumerate(self._items):
            if item.id == item_id:
                del self._items[index]
                self._notify()
                return True

        logger.debug("No item with id %s to remove", item_id)
        return False

    def move_item(self, item_id: str, new_index: int) -> bool:
        """
        Move the first item with ``item_id`` to ``new_index``.

        Returns:
            True if the item was found and moved
        """
        for index, item in enumerate(self._items):
            if item.id == item_id:
                del self._items[index]
                self._items.insert(new_index, item)
                self._notify()
                return True

        return False

    def replace_items(self, items: Iterable[SelectableItem]) -> None:
        """Swap in a whole new item list."""
        self._items = list(items)
        self._notify()

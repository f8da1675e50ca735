from __future__ import annotations

from typing import Iterator

from stranded.game.models import Item


class Inventory:
    # No removal: parts are never dropped once picked up.

    def __init__(self) -> None:
        self._items: list[Item] = []

    def add_item(self, item: Item) -> None:
        self._items.append(item)

    def has_item(self, name: str) -> bool:
        return any(item.name == name for item in self._items)

    def list_names(self) -> tuple[str, ...]:
        return tuple(item.name for item in self._items)

    def describe(self) -> str:
        if not self._items:
            return "You have nothing."
        return "You have: " + ", ".join(self.list_names())

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

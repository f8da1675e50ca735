from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Status(str, Enum):
    ONGOING = "ongoing"
    WON = "won"
    LOST = "lost"

    @property
    def terminal(self) -> bool:
        return self is not Status.ONGOING


class Outcome(str, Enum):
    OK = "ok"
    INVALID_DIRECTION = "invalid_direction"
    ITEM_NOT_PRESENT = "item_not_present"
    INVALID_IN_SESSION_STATE = "invalid_in_session_state"
    UNKNOWN_COMMAND = "unknown_command"


@dataclass(frozen=True)
class Item:
    # name is the identity key; no two items in a world share one
    name: str
    description: str = ""


@dataclass(eq=False)
class Room:
    name: str
    description: str
    exits: dict[str, Room] = field(default_factory=dict)
    items: list[Item] = field(default_factory=list)

    def find_item(self, name: str) -> Item | None:
        for item in self.items:
            if item.name == name:
                return item
        return None

    def item_names(self) -> tuple[str, ...]:
        return tuple(item.name for item in self.items)

    def exit_labels(self) -> tuple[str, ...]:
        return tuple(self.exits.keys())

    def __repr__(self) -> str:
        return f"Room({self.name!r})"


@dataclass(frozen=True)
class Snapshot:
    room_name: str
    room_description: str
    visible_items: tuple[str, ...]
    available_exits: tuple[str, ...]
    inventory_names: tuple[str, ...]
    status: Status
    lost_at: str | None = None
    started_at: datetime | None = None


@dataclass(frozen=True)
class CommandResult:
    outcome: Outcome
    message: str
    snapshot: Snapshot

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

from __future__ import annotations

from collections import deque
from typing import Iterable

from stranded.game.models import Item, Room


DEFAULT_WIN_MESSAGE = "You repair your ship and escape Earth! Congratulations!"
DEFAULT_LOSE_MESSAGE = "Humans capture you before you can fix your ship!"


class WorldError(ValueError):
    pass


class World:
    """Room graph plus the rooms and parts that drive win/lose.

    Rooms are added and connected while the world is open; ``seal`` validates
    the graph and freezes its topology. Item lists keep changing during play.
    """

    def __init__(
        self,
        start_room: str,
        win_room: str,
        gated_room: str,
        required_parts: Iterable[str],
        world_id: str = "world",
        win_message: str = DEFAULT_WIN_MESSAGE,
        lose_message: str = DEFAULT_LOSE_MESSAGE,
    ):
        self.world_id = world_id
        self.start_room_name = start_room
        self.win_room_name = win_room
        self.gated_room_name = gated_room
        self.required_parts = frozenset(required_parts)
        self.win_message = win_message
        self.lose_message = lose_message
        self.rooms: dict[str, Room] = {}
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def start_room(self) -> Room:
        return self.rooms[self.start_room_name]

    @property
    def win_room(self) -> Room:
        return self.rooms[self.win_room_name]

    @property
    def gated_room(self) -> Room:
        return self.rooms[self.gated_room_name]

    def room(self, name: str) -> Room:
        try:
            return self.rooms[name]
        except KeyError:
            raise WorldError(f"unknown room {name}") from None

    def add_room(self, name: str, description: str) -> Room:
        self._check_open()
        if name in self.rooms:
            raise WorldError(f"duplicate room {name}")
        room = Room(name=name, description=description)
        self.rooms[name] = room
        return room

    def place_item(self, room: Room | str, item: Item) -> None:
        self._check_open()
        target = self._resolve(room)
        if item.name in self.all_item_names():
            raise WorldError(f"duplicate item {item.name}")
        target.items.append(item)

    def connect(self, room: Room | str, direction: str, target: Room | str) -> None:
        """Register a single exit from ``room`` to ``target``.

        The reverse exit is never added; register it with its own call.
        """
        self._check_open()
        if not isinstance(direction, str) or not direction:
            raise WorldError("exit direction must be a non-empty string")
        source = self._resolve(room)
        dest = self._resolve(target)
        source.exits[direction] = dest

    def seal(self) -> World:
        for label, name in (
            ("start_room", self.start_room_name),
            ("win_room", self.win_room_name),
            ("gated_room", self.gated_room_name),
        ):
            if name not in self.rooms:
                raise WorldError(f"{label} {name} does not exist")

        for room in self.rooms.values():
            for direction, target in room.exits.items():
                if self.rooms.get(target.name) is not target:
                    raise WorldError(f"exit {direction} in {room.name} points outside the world")

        placed = set(self.all_item_names())
        missing = sorted(self.required_parts - placed)
        if missing:
            raise WorldError(f"required parts not placed in world: {', '.join(missing)}")

        self._sealed = True
        return self

    def all_item_names(self) -> list[str]:
        names: list[str] = []
        for room in self.rooms.values():
            names.extend(item.name for item in room.items)
        return names

    def reachable_rooms(self) -> list[str]:
        start = self.rooms.get(self.start_room_name)
        if start is None:
            return []
        seen = [start.name]
        queue = deque([start])
        while queue:
            room = queue.popleft()
            for target in room.exits.values():
                if target.name not in seen:
                    seen.append(target.name)
                    queue.append(target)
        return seen

    def one_way_exits(self) -> list[tuple[str, str, str]]:
        found: list[tuple[str, str, str]] = []
        for room in self.rooms.values():
            for direction, target in room.exits.items():
                if not any(back is room for back in target.exits.values()):
                    found.append((room.name, direction, target.name))
        return found

    def _resolve(self, room: Room | str) -> Room:
        if isinstance(room, Room):
            if self.rooms.get(room.name) is not room:
                raise WorldError(f"room {room.name} is not part of this world")
            return room
        return self.room(room)

    def _check_open(self) -> None:
        if self._sealed:
            raise WorldError("world topology is sealed")


def describe_room(room: Room) -> str:
    lines = [room.name, room.description]
    if room.items:
        lines.append("You see: " + ", ".join(room.item_names()) + ".")
    if room.exits:
        lines.append("Exits: " + ", ".join(room.exit_labels()) + ".")
    else:
        lines.append("Exits: none.")
    return "\n".join(lines)

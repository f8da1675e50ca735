from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from stranded.game.models import Item
from stranded.game.world import DEFAULT_LOSE_MESSAGE, DEFAULT_WIN_MESSAGE, World


WORLDS_DIR = Path(__file__).parent / "worlds"


def _load_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def default_world_path() -> Path:
    return WORLDS_DIR / "crash_site.json"


def validate_world(world_data: dict[str, Any]) -> None:
    if not isinstance(world_data, dict):
        raise ValueError("world must be a JSON object")
    if not isinstance(world_data.get("messages", {}), dict):
        raise ValueError("messages must be an object")
    if not isinstance(world_data.get("required_parts", []), list):
        raise ValueError("required_parts must be a list")

    rooms = world_data.get("rooms", [])
    if not isinstance(rooms, list) or not rooms:
        raise ValueError("rooms must be a non-empty list")

    room_names: list[str] = []
    for room in rooms:
        if not isinstance(room, dict):
            raise ValueError(f"room entries must be objects, got {room!r}")
        name = room.get("name")
        if not isinstance(name, str) or not name:
            raise ValueError("every room needs a name")
        if name in room_names:
            raise ValueError(f"duplicate room {name}")
        room_names.append(name)

    for key in ("start_room", "win_room", "gated_room"):
        if world_data.get(key) not in room_names:
            raise ValueError(f"{key} does not exist")

    item_names: set[str] = set()
    for room in rooms:
        room_name = room["name"]
        exits = room.get("exits", {})
        if not isinstance(exits, dict):
            raise ValueError(f"exits in {room_name} must be an object")
        for direction, target in exits.items():
            if not isinstance(direction, str) or not direction:
                raise ValueError(f"invalid exit direction {direction!r} in {room_name}")
            if target not in room_names:
                raise ValueError(f"exit {direction} in {room_name} points to unknown room {target}")

        items = room.get("items", [])
        if not isinstance(items, list):
            raise ValueError(f"items in {room_name} must be a list")
        for item in items:
            if not isinstance(item, dict):
                raise ValueError(f"item entries in {room_name} must be objects")
            item_name = item.get("name")
            if not isinstance(item_name, str) or not item_name:
                raise ValueError(f"item without a name in {room_name}")
            if item_name in item_names:
                raise ValueError(f"duplicate item {item_name}")
            item_names.add(item_name)

    for part in world_data.get("required_parts", []):
        if part not in item_names:
            raise ValueError(f"required part {part} is not placed in any room")


def build_world(data: dict[str, Any]) -> World:
    validate_world(data)

    messages = data.get("messages", {})
    world = World(
        world_id=data.get("world_id", "world"),
        start_room=data["start_room"],
        win_room=data["win_room"],
        gated_room=data["gated_room"],
        required_parts=data.get("required_parts", []),
        win_message=messages.get("win", DEFAULT_WIN_MESSAGE),
        lose_message=messages.get("lose", DEFAULT_LOSE_MESSAGE),
    )

    # all rooms first so exits can point forward
    for room in data["rooms"]:
        world.add_room(room["name"], room.get("description", ""))

    for room in data["rooms"]:
        for item in room.get("items", []):
            world.place_item(room["name"], Item(name=item["name"], description=item.get("description", "")))
        for direction, target in room.get("exits", {}).items():
            world.connect(room["name"], direction, target)

    return world.seal()


def load_world(path: Path) -> World:
    return build_world(_load_json(Path(path)))


def load_default_world() -> World:
    return load_world(default_world_path())

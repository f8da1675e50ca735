from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable

from stranded.game.inventory import Inventory
from stranded.game.loader import load_default_world
from stranded.game.models import CommandResult, Outcome, Room, Snapshot, Status
from stranded.game.world import World, describe_room


TAKE_VERBS = ("pick up", "take", "get")
MOVE_VERBS = ("go", "move")
LOOK_WORDS = {"look", "l"}
INVENTORY_WORDS = {"inventory", "inv", "i"}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _match(arg: str, candidates: Iterable[str]) -> str:
    options = list(candidates)
    if arg in options:
        return arg
    lowered = arg.lower()
    for option in options:
        if option.lower() == lowered:
            return option
    return arg


class GameEngine:
    """Single-session state machine for one player.

    Commands never raise for bad input; they return a ``CommandResult`` whose
    outcome says what happened. Once the game is won or lost, ``move`` and
    ``pick_up`` are rejected with ``INVALID_IN_SESSION_STATE`` until ``reset``.
    """

    def __init__(
        self,
        world_factory: Callable[[], World] = load_default_world,
        clock: Callable[[], datetime] | None = None,
    ):
        self._world_factory = world_factory
        self._clock = clock or _utcnow
        self.reset()

    @property
    def started_at(self) -> datetime:
        return self._started_at

    def reset(self) -> Snapshot:
        self.world = self._world_factory()
        self.current_room: Room = self.world.start_room
        self.inventory = Inventory()
        self.status = Status.ONGOING
        self.lost_at: str | None = None
        self._started_at = self._clock()
        return self.get_snapshot()

    def elapsed(self) -> timedelta:
        return self._clock() - self._started_at

    # -- commands --

    def move(self, direction: str) -> CommandResult:
        if self.status.terminal:
            return self._rejected()

        target = self.current_room.exits.get(direction)
        if target is None:
            return self._result(Outcome.INVALID_DIRECTION, "You can't go that way!")

        if self.check_lose_condition(target):
            # the player is caught at the door; current_room does not change
            self.status = Status.LOST
            self.lost_at = target.name
            return self._result(Outcome.OK, self.world.lose_message)

        self.current_room = target
        if self.check_win_condition():
            return self._result(Outcome.OK, self.world.win_message)
        return self._result(Outcome.OK, describe_room(target))

    def pick_up(self, item_name: str) -> CommandResult:
        if self.status.terminal:
            return self._rejected()

        room = self.current_room
        item = room.find_item(item_name)
        if item is None:
            return self._result(Outcome.ITEM_NOT_PRESENT, f"There is no {item_name} here.")

        room.items = [i for i in room.items if i is not item]
        self.inventory.add_item(item)

        message = f"You picked up the {item.name}."
        if self.check_win_condition():
            message += "\n" + self.world.win_message
        return self._result(Outcome.OK, message)

    def has_all_required_parts(self) -> bool:
        return all(self.inventory.has_item(name) for name in self.world.required_parts)

    def check_lose_condition(self, target: Room) -> bool:
        return target is self.world.gated_room and not self.has_all_required_parts()

    def check_win_condition(self) -> bool:
        if self.status is Status.ONGOING:
            if self.current_room is self.world.win_room and self.has_all_required_parts():
                self.status = Status.WON
        return self.status is Status.WON

    def inventory_message(self) -> str:
        return self.inventory.describe()

    def get_snapshot(self) -> Snapshot:
        room = self.current_room
        return Snapshot(
            room_name=room.name,
            room_description=room.description,
            visible_items=room.item_names(),
            available_exits=room.exit_labels(),
            inventory_names=self.inventory.list_names(),
            status=self.status,
            lost_at=self.lost_at,
            started_at=self._started_at,
        )

    # -- text commands --

    def handle(self, command: str) -> CommandResult:
        cmd = " ".join(command.split())
        if not cmd:
            return self._result(Outcome.UNKNOWN_COMMAND, "Say something.")

        # an exact exit label wins over command words like "look" or "i"
        if cmd in self.current_room.exits:
            return self.move(cmd)

        lowered = cmd.lower()
        if lowered in LOOK_WORDS:
            return self._result(Outcome.OK, describe_room(self.current_room))
        if lowered in INVENTORY_WORDS:
            return self._result(Outcome.OK, self.inventory_message())
        if lowered == "restart":
            self.reset()
            return self._result(Outcome.OK, describe_room(self.current_room))

        if lowered in TAKE_VERBS:
            return self._result(Outcome.UNKNOWN_COMMAND, "Take what?")
        for verb in TAKE_VERBS:
            if lowered.startswith(verb + " "):
                arg = cmd[len(verb) + 1:]
                return self.pick_up(_match(arg, self.current_room.item_names()))

        if lowered in MOVE_VERBS:
            return self._result(Outcome.UNKNOWN_COMMAND, "Go where?")
        for verb in MOVE_VERBS:
            if lowered.startswith(verb + " "):
                arg = cmd[len(verb) + 1:]
                return self.move(_match(arg, self.current_room.exit_labels()))

        direction = _match(cmd, self.current_room.exit_labels())
        if direction in self.current_room.exits:
            return self.move(direction)

        return self._result(Outcome.UNKNOWN_COMMAND, f"Unknown command: '{cmd}'.")

    def _rejected(self) -> CommandResult:
        return self._result(
            Outcome.INVALID_IN_SESSION_STATE,
            f"The game is over ({self.status.value}). Restart to play again.",
        )

    def _result(self, outcome: Outcome, message: str) -> CommandResult:
        return CommandResult(outcome=outcome, message=message, snapshot=self.get_snapshot())

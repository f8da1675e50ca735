from __future__ import annotations

from stranded.game.models import CommandResult, Snapshot, Status


def render_snapshot(snapshot: Snapshot) -> str:
    lines: list[str] = []
    lines.append(f"== {snapshot.room_name} ==")
    lines.append("")
    lines.append(snapshot.room_description)
    lines.append("")

    if snapshot.visible_items:
        lines.append("You see: " + ", ".join(snapshot.visible_items))
    if snapshot.available_exits:
        lines.append("Exits: " + ", ".join(snapshot.available_exits))
    else:
        lines.append("Exits: none")

    if snapshot.inventory_names:
        lines.append("Inventory: " + ", ".join(snapshot.inventory_names))
    else:
        lines.append("Inventory: (empty)")

    return "\n".join(lines)


def render_result(result: CommandResult) -> str:
    snapshot = result.snapshot
    if snapshot.status is Status.WON:
        return "*** YOU WIN ***\n" + result.message
    if snapshot.status is Status.LOST:
        where = f" at the {snapshot.lost_at}" if snapshot.lost_at else ""
        return f"*** GAME OVER{where} ***\n" + result.message
    return result.message + "\n\n" + render_snapshot(snapshot)

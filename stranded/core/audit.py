from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from stranded.game.models import CommandResult


def append_audit(event: dict[str, Any], path: str = "./stranded_audit.jsonl") -> None:
    event = dict(event)
    event["ts"] = datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("a", encoding="utf-8") as f:
        f.write(json.dumps(event, ensure_ascii=False) + "\n")


def command_event(command: str, result: CommandResult) -> dict[str, Any]:
    return {
        "event": "command",
        "command": command,
        "outcome": result.outcome.value,
        "room": result.snapshot.room_name,
        "status": result.snapshot.status.value,
    }


def game_over_event(result: CommandResult, elapsed_seconds: float) -> dict[str, Any]:
    return {
        "event": "game_over",
        "status": result.snapshot.status.value,
        "room": result.snapshot.room_name,
        "lost_at": result.snapshot.lost_at,
        "inventory": list(result.snapshot.inventory_names),
        "elapsed_seconds": round(elapsed_seconds, 3),
    }

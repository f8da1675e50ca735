from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any
import yaml


CONFIG_NAME = "stranded.yaml"
CONFIG_ENV = "STRANDED_CONFIG"


@dataclass(frozen=True)
class StrandedConfig:
    world_path: str | None
    audit_enabled: bool
    audit_path: str
    show_timer: bool


def load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def resolve_config_path(config_path: str | None) -> Path | None:
    if config_path:
        return Path(config_path)

    env_path = os.getenv(CONFIG_ENV)
    if env_path:
        return Path(env_path)

    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / CONFIG_NAME
        if candidate.exists():
            return candidate

    return None


def _resolve_relative(base: Path, value: str) -> str:
    if Path(value).is_absolute():
        return value
    return str((base / value).resolve())


def load_config(path: str | Path | None) -> StrandedConfig:
    if path is None:
        return StrandedConfig(
            world_path=None,
            audit_enabled=False,
            audit_path=str(Path("stranded_audit.jsonl").resolve()),
            show_timer=True,
        )

    config_path = Path(path).resolve()
    raw = load_yaml(config_path)
    base = config_path.parent

    world_path = (raw.get("world") or {}).get("path")
    if world_path:
        world_path = _resolve_relative(base, str(world_path))

    audit = raw.get("audit") or {}
    audit_path = _resolve_relative(base, str(audit.get("path", "./stranded_audit.jsonl")))

    return StrandedConfig(
        world_path=world_path,
        audit_enabled=bool(audit.get("enabled", False)),
        audit_path=audit_path,
        show_timer=bool((raw.get("display") or {}).get("show_timer", True)),
    )

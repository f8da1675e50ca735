from __future__ import annotations

from importlib import metadata
from pathlib import Path
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.table import Table

from stranded.core.audit import append_audit, command_event, game_over_event
from stranded.core.config import StrandedConfig, load_config, resolve_config_path
from stranded.game.engine import GameEngine
from stranded.game.loader import default_world_path, load_default_world, load_world
from stranded.game.models import CommandResult, Outcome, Status
from stranded.game.render import render_result, render_snapshot
from stranded.game.world import World


app = typer.Typer(add_completion=False, help="Stranded: collect your ship parts and get off this planet")
console = Console()

QUIT_WORDS = {"quit", "exit", "q"}


def _get_version() -> str:
    try:
        return metadata.version("stranded")
    except metadata.PackageNotFoundError:
        return "0.0.0+local"


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the Stranded version and exit.",
        is_eager=True,
    ),
):
    if version:
        console.print(_get_version())
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit()


def _load_cfg(config: Optional[str]) -> StrandedConfig:
    try:
        return load_config(resolve_config_path(config))
    except FileNotFoundError as e:
        console.print(f"❌ {e}")
        raise typer.Exit(code=1)


def _world_factory(cfg: StrandedConfig) -> Callable[[], World]:
    if cfg.world_path:
        path = Path(cfg.world_path)
        return lambda: load_world(path)
    return load_default_world


def _get_env(config: Optional[str]) -> tuple[StrandedConfig, GameEngine]:
    cfg = _load_cfg(config)
    try:
        engine = GameEngine(_world_factory(cfg))
    except (OSError, ValueError) as e:
        console.print(f"❌ Could not load world: {e}")
        raise typer.Exit(code=2)
    return cfg, engine


def _dispatch(cfg: StrandedConfig, engine: GameEngine, command: str) -> CommandResult:
    was_over = engine.status.terminal
    result = engine.handle(command)
    if cfg.audit_enabled:
        append_audit(command_event(command, result), cfg.audit_path)
        if result.snapshot.status.terminal and not was_over:
            append_audit(game_over_event(result, engine.elapsed().total_seconds()), cfg.audit_path)
    return result


def _print_result(cfg: StrandedConfig, engine: GameEngine, result: CommandResult) -> None:
    style = None if result.outcome is Outcome.OK else "yellow"
    if result.snapshot.status is Status.WON:
        style = "bold green"
    elif result.snapshot.status is Status.LOST:
        style = "bold red"
    console.print(render_result(result), style=style, markup=False, highlight=False)

    if result.snapshot.status.terminal and cfg.show_timer:
        seconds = int(engine.elapsed().total_seconds())
        console.print(f"Time: {seconds // 60:02d}:{seconds % 60:02d}", style="dim")


@app.command("play")
def play(
    config: Optional[str] = typer.Option(None, "--config", help="Path to stranded.yaml"),
):
    cfg, engine = _get_env(config)
    console.print(render_snapshot(engine.get_snapshot()), markup=False, highlight=False)
    console.print("Type 'help' for commands, 'quit' to leave.", style="dim")

    while True:
        try:
            command = console.input("[bold]> [/bold]")
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        if command.strip().lower() in QUIT_WORDS:
            break
        if command.strip().lower() == "help":
            console.print(
                "go <exit> | <exit> | take <item> | look | inventory | restart | quit",
                style="dim",
            )
            continue

        result = _dispatch(cfg, engine, command)
        _print_result(cfg, engine, result)


@app.command("run")
def run(
    commands: list[str] = typer.Argument(..., help="Commands to play in order, e.g. 'go north' 'take Engine Part'"),
    config: Optional[str] = typer.Option(None, "--config", help="Path to stranded.yaml"),
):
    cfg, engine = _get_env(config)
    result = None
    for command in commands:
        console.print(f"> {command}", style="bold", markup=False, highlight=False)
        result = _dispatch(cfg, engine, command)
        _print_result(cfg, engine, result)

    if result is not None and result.snapshot.status is Status.LOST:
        raise typer.Exit(code=5)


@app.command("map")
def show_map(
    config: Optional[str] = typer.Option(None, "--config", help="Path to stranded.yaml"),
):
    _, engine = _get_env(config)
    world = engine.world

    table = Table(title=f"World: {world.world_id}")
    table.add_column("Room", style="bold")
    table.add_column("Exits")
    table.add_column("Items")
    table.add_column("Role")

    for name, room in world.rooms.items():
        exits = ", ".join(f"{d} -> {t.name}" for d, t in room.exits.items()) or "-"
        items = ", ".join(room.item_names()) or "-"
        roles = []
        if name == world.start_room_name:
            roles.append("start")
        if name == world.win_room_name:
            roles.append("win")
        if name == world.gated_room_name:
            roles.append("gated")
        table.add_row(name, exits, items, ", ".join(roles))

    console.print(table)
    console.print("Required parts: " + ", ".join(sorted(world.required_parts)), markup=False)
    for room, direction, target in world.one_way_exits():
        console.print(f"⚠️  one-way exit: {room} --{direction}--> {target} (no way back)", markup=False)


@app.command("validate")
def validate(
    path: Optional[str] = typer.Argument(None, help="World JSON file (defaults to the configured world)"),
    config: Optional[str] = typer.Option(None, "--config", help="Path to stranded.yaml"),
):
    if path is None:
        cfg = _load_cfg(config)
        path = cfg.world_path or str(default_world_path())

    try:
        world = load_world(Path(path))
    except (OSError, ValueError) as e:
        console.print(f"❌ Invalid world {path}: {e}", markup=False)
        raise typer.Exit(code=2)

    console.print(
        f"✅ {world.world_id}: {len(world.rooms)} rooms, {len(world.all_item_names())} items",
        markup=False,
    )
    for room, direction, target in world.one_way_exits():
        console.print(f"⚠️  one-way exit: {room} --{direction}--> {target}", markup=False)
    reachable = set(world.reachable_rooms())
    for name in world.rooms:
        if name not in reachable:
            console.print(f"⚠️  unreachable room: {name}", markup=False)


if __name__ == "__main__":
    app()

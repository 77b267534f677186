#!/usr/bin/env python
"""Moderator console for a Werewolf game.

Usage:
    werewolf-moderator scenario.yaml                  # Replay a scripted game
    werewolf-moderator scenario.yaml --interactive    # Replay, then keep moderating by hand
    werewolf-moderator scenario.yaml --save-log log.yaml

Scenario file:
    players:
      - {name: Alice, role: Paladin}
      - {name: Bob, role: Wolf}
    config:                          # optional, same keys as a config file
      turn_order: [Paladin, Wolf]
    steps:
      - {role: Paladin, action: protect, target: Alice}
      - {role: Wolf, action: kill, target: Alice}
      - {vote: Bob}
      - close_voting
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from moderator.config import GameConfig, load_config
from moderator.engine import ModeratorGame, SubmissionResult
from moderator.events import Lifecycle
from moderator.models import Player, Role, create_players

CLOSE_VOTING = "close_voting"


def load_scenario(path: str) -> tuple[list[Player], list[Any], Optional[GameConfig]]:
    """Read a scenario YAML file.

    Returns:
        Tuple of (players, steps, config) where config is None if the file
        has no config section.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    players = create_players(
        [(entry["name"], Role(entry["role"])) for entry in data.get("players", [])]
    )
    config = GameConfig.model_validate(data["config"]) if data.get("config") else None
    return players, data.get("steps", []), config


def apply_step(game: ModeratorGame, step: Any) -> SubmissionResult:
    """Submit one scenario step to the game."""
    if step == CLOSE_VOTING:
        return game.close_voting()
    if isinstance(step, dict) and "vote" in step:
        return game.submit_vote(step["vote"])
    if isinstance(step, dict) and "role" in step:
        return game.submit_night_action(step["role"], step.get("action", "pass"), step.get("target"))
    raise ValueError(f"Unrecognized scenario step: {step!r}")


def run_steps(game: ModeratorGame, steps: list[Any], console: Console) -> int:
    """Replay steps, reporting rejected ones. Returns the rejection count."""
    rejected = 0
    for index, step in enumerate(steps, start=1):
        result = apply_step(game, step)
        if not result:
            rejected += 1
            for violation in result.violations:
                console.print(f"[yellow]Step {index} rejected:[/yellow] {violation.message}")
        if game.lifecycle == Lifecycle.ENDED:
            break
    return rejected


def render_players(game: ModeratorGame) -> Table:
    """Roster table with role and status."""
    table = Table(title="Players")
    table.add_column("Id", justify="right")
    table.add_column("Name")
    table.add_column("Role")
    table.add_column("Status")
    for player in game.players:
        status = "[green]alive[/green]" if player.is_alive else "[red]dead[/red]"
        table.add_row(str(player.id), player.name, player.role.value, status)
    return table


def render_log(game: ModeratorGame) -> Panel:
    """Action log, newest entry on top."""
    body = "\n".join(game.log.messages()) or "(no events)"
    return Panel(body, title="Action Log")


def render_status(game: ModeratorGame) -> str:
    if game.lifecycle == Lifecycle.ENDED:
        return f"[bold]Game over:[/bold] {game.winner.value}"
    if game.current_role is not None:
        return f"[bold]Night {game.round}[/bold] - {game.current_role.value}'s turn"
    return f"[bold]Day {game.round}[/bold] - village discussion"


def run_interactive(game: ModeratorGame, console: Console) -> None:
    """Prompt the moderator for submissions until the game ends or they quit."""
    while game.lifecycle == Lifecycle.PLAYING:
        console.print(render_status(game))
        living = [p.name for p in game.state.living_players()]
        if game.current_role is not None:
            action = Prompt.ask("Action (or 'quit')", default="pass")
            if action == "quit":
                return
            target = None
            if action != "pass":
                target = Prompt.ask("Target", choices=[p.name for p in game.players])
            result = game.submit_night_action(game.current_role, action, target)
        else:
            choice = Prompt.ask("Vote for", choices=living + [CLOSE_VOTING, "quit"])
            if choice == "quit":
                return
            if choice == CLOSE_VOTING:
                result = game.close_voting()
            else:
                result = game.submit_vote(choice)

        for violation in result.violations:
            console.print(f"[yellow]Rejected:[/yellow] {violation.message}")
        latest = game.log.latest()
        if result and latest is not None:
            console.print(f"[dim]{latest}[/dim]")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Werewolf moderator assistant",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        "scenario",
        type=str,
        help="Scenario YAML file with players and optional steps"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Config YAML file (overrides the scenario's config section)"
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Keep moderating by hand after the scripted steps"
    )
    parser.add_argument(
        "--save-log",
        type=str,
        default=None,
        help="Save the action log to this YAML file"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show engine debug logging"
    )

    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    console = Console()

    if not Path(args.scenario).exists():
        console.print(f"[red]Scenario file not found: {args.scenario}[/red]")
        return 1

    players, steps, config = load_scenario(args.scenario)
    if args.config is not None:
        config = load_config(args.config)

    game = ModeratorGame(players, config=config)
    game.start()

    rejected = run_steps(game, steps, console)
    if args.interactive:
        run_interactive(game, console)

    console.print(render_players(game))
    console.print(render_log(game))
    console.print(render_status(game))
    if rejected:
        console.print(f"{rejected} step(s) rejected")

    if args.save_log:
        try:
            game.log.save_to_file(args.save_log)
            console.print(f"Action log saved to {args.save_log}")
        except OSError as e:
            console.print(f"[red]Failed to save log: {e}[/red]")
            return 1

    return 0


if __name__ == "__main__":
    exit(main())

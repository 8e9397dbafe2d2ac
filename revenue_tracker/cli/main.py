"""
CLI interface for Revenue Tracker.

Renders the ledger in the terminal and forwards user intents to it.
"""

import sys
from pathlib import Path
from typing import Optional

import structlog
import typer
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, IntPrompt, Prompt

from revenue_tracker.cli.render import build_view
from revenue_tracker.config.loader import (
    TrackerConfig,
    default_config,
    dump_tracker_config,
    load_tracker_config
)
from revenue_tracker.config.logging_setup import configure_logging
from revenue_tracker.core.gateway import EditableField, ValidationError
from revenue_tracker.core.tracker import RevenueTracker

app = typer.Typer()
console = Console()
logger = structlog.get_logger(__name__)

EXIT_CODE_OK = 0
EXIT_CODE_ERROR = 1

COMMANDS = ["add", "edit", "remove", "clear", "show", "quit"]

# Field names offered at the prompt mapped to editable fields
EDIT_FIELDS = {
    "name": EditableField.NAME,
    "hours": EditableField.WEEKLY_HOURS,
    "rate": EditableField.RATE,
}

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to a YAML configuration file"
)


def _load_config(config_path: Optional[Path]) -> TrackerConfig:
    if config_path is None:
        return default_config()
    return load_tracker_config(str(config_path))


def _start(config_path: Optional[Path]):
    """Load config, set up logging and build a seeded tracker."""
    config = _load_config(config_path)
    configure_logging(config.log_level)
    tracker = RevenueTracker.from_config(config)
    logger.info("tracker_started", clients=len(tracker), config=str(config_path))
    return config, tracker


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """Revenue Tracker CLI."""
    if ctx.invoked_subcommand is None:
        console.print("Revenue Tracker - Use --help to see available commands")


@app.command()
def report(config_path: Optional[Path] = CONFIG_OPTION):
    """Print the summary panel and client table."""
    try:
        config, tracker = _start(config_path)
        console.print(build_view(tracker, config.currency_symbol))
    except Exception as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(EXIT_CODE_ERROR)
    sys.exit(EXIT_CODE_OK)


@app.command()
def init(
    path: Path = typer.Argument(
        Path("revenue-tracker.yaml"),
        help="Where to write the configuration file"
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing file"
    )
):
    """Write the default configuration file."""
    if path.exists() and not force:
        console.print(f"[red]Error:[/] {path} already exists (use --force to overwrite)")
        sys.exit(EXIT_CODE_ERROR)
    try:
        dump_tracker_config(default_config(), str(path))
    except OSError as e:
        console.print(f"[red]Error writing configuration:[/] {escape(str(e))}")
        sys.exit(EXIT_CODE_ERROR)
    console.print(f"[green]✓[/] Configuration written to {path}")
    sys.exit(EXIT_CODE_OK)


@app.command()
def interactive(config_path: Optional[Path] = CONFIG_OPTION):
    """
    Edit the ledger interactively.

    Commands: add, edit, remove, clear, show, quit. The view is redrawn
    after every change. End of input (Ctrl-D) also quits.
    """
    try:
        config, tracker = _start(config_path)
    except Exception as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(EXIT_CODE_ERROR)

    symbol = config.currency_symbol
    tracker.subscribe(lambda revision: console.print(build_view(tracker, symbol)))
    console.print(build_view(tracker, symbol))

    try:
        while True:
            command = Prompt.ask("Command", choices=COMMANDS, default="show", console=console)
            if command == "quit":
                break
            if command == "show":
                console.print(build_view(tracker, symbol))
            elif command == "add":
                _prompt_add(tracker)
            elif command == "edit":
                _prompt_edit(tracker)
            elif command == "remove":
                client_id = IntPrompt.ask("Client id", console=console)
                tracker.remove_client(client_id)
            elif command == "clear":
                _prompt_clear(tracker)
    except (EOFError, KeyboardInterrupt):
        console.print()

    sys.exit(EXIT_CODE_OK)


def _prompt_add(tracker: RevenueTracker) -> None:
    name = Prompt.ask("Client name", default="", show_default=False, console=console)
    hours = Prompt.ask("Weekly hours", default="", show_default=False, console=console)
    rate = Prompt.ask("Hourly rate", default="", show_default=False, console=console)
    try:
        client_id = tracker.add_client(name, hours, rate)
    except ValidationError as e:
        console.print(f"[red]{escape(e.message)}[/]")
        return
    console.print(f"[green]✓[/] Added client #{client_id}")


def _prompt_edit(tracker: RevenueTracker) -> None:
    client_id = IntPrompt.ask("Client id", console=console)
    if tracker.find(client_id) is None:
        console.print(f"[yellow]No client with id {client_id}[/]")
        return
    field = Prompt.ask("Field", choices=list(EDIT_FIELDS), console=console)
    value = Prompt.ask("New value", default="", show_default=False, console=console)
    tracker.edit_field(client_id, EDIT_FIELDS[field], value)


def _prompt_clear(tracker: RevenueTracker) -> None:
    count = len(tracker)
    if count == 0:
        return
    if Confirm.ask(
        f"Remove all {count} client(s)? This cannot be undone.",
        default=False,
        console=console
    ):
        tracker.clear_all()


if __name__ == "__main__":
    app()

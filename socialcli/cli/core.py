"""Shared CLI application context and setup helpers."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, replace
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from socialcli import __logo__, __version__
from socialcli.config.schema import Config
from socialcli.core.batch import BatchOperationExecutor
from socialcli.core.errors import ConfirmationDeclined, SocialCliError
from socialcli.core.formatter import OutputFormatter
from socialcli.core.models import BatchResult, FieldSpec
from socialcli.core.ports import AutoConfirm, ConfirmPort
from socialcli.core.resolver import IdentifierResolver
from socialcli.host import GroupMembers, HostStore, Notifications, build_lookups

from .sinks import TyperConfirm

app = typer.Typer(
    name="socialcli",
    help=f"{__logo__} socialcli - manage groups, members and notifications",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

FORMAT_HELP = "Render output in a particular format: table, csv, json, yaml, ids, count"
FIELDS_HELP = "Limit the output to specific fields (comma-separated)"


@dataclass(slots=True)
class CliState:
    """Per-invocation settings resolved by the root callback."""

    config: Config
    store_path: Path
    session: CommandSession | None = None


def configure_logging(level: str) -> None:
    """Route loguru to stderr at ``level``."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format="<level>{level: <8}</level> {name}: {message}")


def version_callback(value: bool) -> None:
    if value:
        console.print(f"{__logo__} socialcli v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(None, "--version", "-v", callback=version_callback, is_eager=True),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable debug logging"),
    store: str = typer.Option(None, "--store", help="Host store file (overrides config)"),
) -> None:
    """socialcli - manage groups, members and notifications."""
    from socialcli.config.loader import load_config

    config = load_config()
    level = "DEBUG" if verbose else os.environ.get("SOCIALCLI_LOG_LEVEL", "").strip() or config.log_level
    configure_logging(level)
    store_path = Path(store).expanduser() if store else config.resolved_store_path
    ctx.obj = CliState(config=config, store_path=store_path)


def get_state(ctx: typer.Context) -> CliState:
    state = ctx.find_object(CliState)
    if state is None:
        from socialcli.config.loader import load_config

        config = load_config()
        state = CliState(config=config, store_path=config.resolved_store_path)
        ctx.obj = state
    return state


@dataclass(slots=True)
class CommandSession:
    """Host services and framework components wired for one command."""

    config: Config
    store: HostStore
    resolver: IdentifierResolver
    formatter: OutputFormatter
    confirm: ConfirmPort
    members: GroupMembers
    notifications: Notifications

    @property
    def executor(self) -> BatchOperationExecutor:
        return BatchOperationExecutor(self.resolver, self.confirm)

    def field_spec(self, fields: str | None, fmt: str | None) -> FieldSpec:
        return FieldSpec.parse(fields, fmt or self.config.output.default_format)


def make_confirm(yes: bool) -> ConfirmPort:
    """``--yes`` answers every prompt; otherwise ask on the terminal."""
    return AutoConfirm(True) if yes else TyperConfirm()


def open_session(ctx: typer.Context, *, yes: bool = False) -> CommandSession:
    """Open the host store once per invocation and build the framework around it.

    Group callbacks and the command they run share the same store.
    """
    state = get_state(ctx)
    if state.session is None:
        store = HostStore.open(state.store_path)
        state.session = CommandSession(
            config=state.config,
            store=store,
            resolver=IdentifierResolver(build_lookups(store)),
            formatter=OutputFormatter(console),
            confirm=make_confirm(False),
            members=GroupMembers(store),
            notifications=Notifications(store),
        )
    return replace(state.session, confirm=make_confirm(yes))


@contextmanager
def run_command() -> Iterator[None]:
    """Turn framework errors into a one-line diagnostic and exit status 1."""
    try:
        yield
    except ConfirmationDeclined as e:
        err_console.print(f"[yellow]{escape(e.message)}[/yellow]")
        raise typer.Exit(1)
    except SocialCliError as e:
        err_console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise typer.Exit(1)


def success(message: str) -> None:
    console.print(f"[green]✓[/green] {escape(message)}")


def fail(message: str) -> None:
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(1)


def report_batch(result: BatchResult, *, porcelain: bool = False) -> None:
    """Print one line per target, then exit 1 if any target failed."""
    for outcome in result.outcomes:
        if outcome.ok:
            if porcelain:
                console.out(str(outcome.target.resolved_id), highlight=False)
            else:
                success(outcome.message)
        else:
            err_console.print(f"[red]✗[/red] {escape(outcome.target.label)}: {escape(outcome.message)}")

    if len(result.outcomes) > 1 and not porcelain:
        console.print(
            f"{result.succeeded_count} succeeded, {result.failed_count} failed "
            f"({len(result.outcomes)} total)"
        )
    if not result.ok:
        raise typer.Exit(1)


@app.command()
def onboard(
    ctx: typer.Context,
    demo: bool = typer.Option(False, "--demo", help="Seed the store with sample users, groups and notifications"),
) -> None:
    """Initialize socialcli configuration and host store."""
    from socialcli.config.loader import get_config_path, save_config
    from socialcli.host import HostState, save_host_state, seed_demo_state

    state = get_state(ctx)
    config_path = get_config_path()

    if config_path.exists() or state.store_path.exists():
        console.print(f"[yellow]Config or store already exists ({config_path}, {state.store_path})[/yellow]")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit()

    save_config(state.config)
    console.print(f"[green]✓[/green] Created config at {config_path}")
    save_host_state(seed_demo_state() if demo else HostState(), state.store_path)
    console.print(f"[green]✓[/green] Created host store at {state.store_path}")

    console.print(f"\n{__logo__} socialcli is ready!")
    console.print("\nNext steps:")
    console.print("  1. List members: [cyan]socialcli group member list <group>[/cyan]")
    console.print("  2. Generate data: [cyan]socialcli notification generate --count 20[/cyan]")


@app.command()
def status(ctx: typer.Context) -> None:
    """Show config and host store status."""
    from socialcli.config.loader import get_config_path

    state = get_state(ctx)
    config_path = get_config_path()
    console.print(f"{__logo__} socialcli Status\n")
    console.print(f"Config: {config_path} {'[green]✓[/green]' if config_path.exists() else '[red]✗[/red]'}")
    console.print(
        f"Store: {state.store_path} {'[green]✓[/green]' if state.store_path.exists() else '[red]✗[/red]'}"
    )
    if not state.store_path.exists():
        return

    with run_command():
        session = open_session(ctx)
        host = session.store.state
        console.print(f"Users: {len(host.users)}")
        console.print(f"Groups: {len(host.groups)}")
        console.print(f"Memberships: {len(host.memberships)}")
        console.print(f"Notifications: {len(host.notifications)}")
        console.print(f"Active components: {', '.join(host.active_components) or '-'}")

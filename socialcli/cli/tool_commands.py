"""Maintenance tool CLI commands."""

from __future__ import annotations

import typer

from socialcli.host import RepairTool, reinstall_emails, run_repair

from .core import app, open_session, run_command, success

tool_app = typer.Typer(help="Repair counts and restore defaults", no_args_is_help=True)
app.add_typer(tool_app, name="tool")

REPAIR_HELP = "Tool to run: " + ", ".join(tool.value for tool in RepairTool)


@tool_app.command("repair")
def tool_repair(
    ctx: typer.Context,
    name: str = typer.Argument(..., help=REPAIR_HELP),
) -> None:
    """Repair counts and records."""
    with run_command():
        session = open_session(ctx)
        success(run_repair(name, session.store))


tool_app.command("fix", hidden=True)(tool_repair)


@tool_app.command("reinstall-emails")
def tool_reinstall_emails(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Answer yes to the confirmation message"),
) -> None:
    """Delete stored email templates and install the defaults."""
    with run_command():
        session = open_session(ctx, yes=yes)
        session.executor.require_confirmation("Are you sure you want to reinstall the emails?")
        success(reinstall_emails(session.store))

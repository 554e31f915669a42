"""CLI commands for socialcli."""

from socialcli.cli import group_commands as _group_commands  # noqa: F401
from socialcli.cli import notification_commands as _notification_commands  # noqa: F401
from socialcli.cli import tool_commands as _tool_commands  # noqa: F401
from socialcli.cli.core import app, console

__all__ = ["app", "console"]


if __name__ == "__main__":
    app()

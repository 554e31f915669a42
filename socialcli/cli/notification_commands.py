"""Notification CLI commands."""

from __future__ import annotations

from typing import Any

import typer

from socialcli.core.batch import make_targets
from socialcli.core.generator import SyntheticDataGenerator, random_choice_provider
from socialcli.core.models import EntityRef, EntityType

from .core import (
    FIELDS_HELP,
    FORMAT_HELP,
    app,
    console,
    err_console,
    fail,
    open_session,
    report_batch,
    run_command,
    success,
)
from .sinks import RichProgress

notification_app = typer.Typer(help="Manage notifications", no_args_is_help=True)
app.add_typer(notification_app, name="notification")

NOTIFICATION_FIELDS = (
    "id",
    "user_id",
    "item_id",
    "secondary_item_id",
    "component_name",
    "component_action",
    "date_notified",
    "is_new",
)


@notification_app.command("create")
def notification_create(
    ctx: typer.Context,
    user_id: str = typer.Option(..., "--user-id", "-u", help="User that receives the notification (login or ID)"),
    component: str = typer.Option(None, "--component", help="Component name; a random active component when omitted"),
    action: str = typer.Option("", "--action", help="Component action"),
    item_id: int = typer.Option(0, "--item-id", help="Item the notification refers to"),
    secondary_item_id: int = typer.Option(0, "--secondary-item-id", help="Secondary item id"),
    date: str = typer.Option(None, "--date", help="Date notified (YYYY-MM-DD HH:MM:SS); now when omitted"),
    silent: bool = typer.Option(False, "--silent", help="Suppress success output"),
    porcelain: bool = typer.Option(False, "--porcelain", help="Output only the new notification id"),
) -> None:
    """Create a notification item."""
    with run_command():
        session = open_session(ctx)
        uid = session.resolver.resolve(EntityType.USER, user_id).resolved_id
        component_name = (component or "").strip() or session.notifications.random_component()
        notification_id = session.notifications.add(
            user_id=uid,
            component_name=component_name,
            component_action=action,
            item_id=item_id,
            secondary_item_id=secondary_item_id,
            date_notified=date,
        )

    if silent:
        return
    if porcelain:
        console.out(str(notification_id), highlight=False)
    else:
        success(f"Successfully created new notification (ID #{notification_id}).")


notification_app.command("add", hidden=True)(notification_create)


@notification_app.command("get")
def notification_get(
    ctx: typer.Context,
    notification_id: str = typer.Argument(..., help="Identifier for the notification"),
    fields: str = typer.Option(None, "--fields", help=FIELDS_HELP),
    fmt: str = typer.Option(None, "--format", help=FORMAT_HELP),
) -> None:
    """Get information about a notification."""
    with run_command():
        session = open_session(ctx)
        spec = session.field_spec(fields, fmt)
        ref = session.resolver.resolve(EntityType.NOTIFICATION, notification_id)
        notification = session.notifications.get(ref.resolved_id)
        session.formatter.display_item(notification, spec, default_fields=NOTIFICATION_FIELDS)


notification_app.command("see", hidden=True)(notification_get)


@notification_app.command("delete")
def notification_delete(
    ctx: typer.Context,
    notification_ids: list[str] = typer.Argument(..., help="One or more notification ids"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Answer yes to the confirmation message"),
) -> None:
    """Delete notifications."""
    with run_command():
        session = open_session(ctx, yes=yes)

        def delete(ref: EntityRef) -> str:
            session.notifications.delete(ref.resolved_id)
            return f"Notification #{ref.resolved_id} deleted."

        result = session.executor.execute(
            make_targets(EntityType.NOTIFICATION, notification_ids),
            delete,
            confirm=True,
            prompt=f"Are you sure you want to delete {len(notification_ids)} notification(s)?",
        )
        report_batch(result)


notification_app.command("trash", hidden=True)(notification_delete)


@notification_app.command("generate")
def notification_generate(
    ctx: typer.Context,
    count: int = typer.Option(None, "--count", "-n", help="How many notifications to generate"),
    component: str = typer.Option(None, "--component", help="Component name (default from config)"),
    action: str = typer.Option(None, "--action", help="Component action (default from config)"),
    silent: bool = typer.Option(False, "--silent", help="No progress bar or summary"),
) -> None:
    """Generate random notifications for random users."""
    with run_command():
        session = open_session(ctx)
        defaults = session.config.generate
        total = defaults.default_count if count is None else count
        component_name = defaults.default_component if component is None else component
        component_action = defaults.default_action if action is None else action

        base: dict[str, Any] = {"component_action": component_action}
        choices = {"user_id": session.notifications.user_ids}
        if component_name.strip():
            base["component_name"] = component_name
        else:
            choices["component_name"] = session.notifications.active_components

        generator = SyntheticDataGenerator(RichProgress(console))
        created = generator.generate(
            total,
            random_choice_provider(base, choices),
            lambda fields: session.notifications.add(**fields, commit=False),
            silent=silent,
            label="Generating notifications",
        )
        if created:
            session.store.commit()

    failed = total - len(created)
    if not silent:
        success(f"Generated {len(created)} of {total} notification(s).")
    if failed:
        err_console.print(f"[red]✗[/red] {failed} notification(s) could not be created.")
        raise typer.Exit(1)


@notification_app.command("list")
def notification_list(
    ctx: typer.Context,
    user_id: str = typer.Option(None, "--user-id", "-u", help="Only notifications for this user (login or ID)"),
    component: str = typer.Option(None, "--component", help="Only this component"),
    action: str = typer.Option(None, "--action", help="Only this component action"),
    count: int = typer.Option(None, "--count", help="How many notifications to list (default from config)"),
    fields: str = typer.Option(None, "--fields", help=FIELDS_HELP),
    fmt: str = typer.Option(None, "--format", help=FORMAT_HELP),
) -> None:
    """Get a list of notifications."""
    with run_command():
        session = open_session(ctx)
        spec = session.field_spec(fields, fmt)
        uid = session.resolver.resolve(EntityType.USER, user_id).resolved_id if user_id else None
        limit = session.config.listing.default_count if count is None else count
        items = session.notifications.query(user_id=uid, component=component, action=action, limit=limit)
        if not items:
            fail("No notification items found.")
        session.formatter.render(items, spec, default_fields=NOTIFICATION_FIELDS)

"""Group membership CLI commands."""

from __future__ import annotations

import typer

from socialcli.core.batch import make_targets
from socialcli.core.errors import ValidationError
from socialcli.core.models import EntityRef, EntityType, GroupRole
from socialcli.utils.helpers import split_csv

from .core import (
    FIELDS_HELP,
    FORMAT_HELP,
    app,
    fail,
    open_session,
    report_batch,
    run_command,
    success,
)

group_app = typer.Typer(help="Manage groups")
app.add_typer(group_app, name="group")
member_app = typer.Typer(help="Manage group members", no_args_is_help=True)
group_app.add_typer(member_app, name="member")

MEMBER_FIELDS = ("user_id", "user_login", "fullname", "date_modified", "role")

GROUP_OPTION_HELP = "Identifier for the group. Accepts either a slug or a numeric ID."
USER_OPTION_HELP = "Identifier for the user. Accepts either a user_login or a numeric ID (repeatable)."


@member_app.callback()
def member_callback(ctx: typer.Context) -> None:
    """Manage group members."""
    if ctx.resilient_parsing:
        return
    with run_command():
        session = open_session(ctx)
        if not session.store.is_component_active("groups"):
            fail("The Groups component is not active.")


@member_app.command("add")
def member_add(
    ctx: typer.Context,
    group_id: str = typer.Option(..., "--group-id", "-g", help=GROUP_OPTION_HELP),
    user_ids: list[str] = typer.Option(..., "--user-id", "-u", help=USER_OPTION_HELP),
    role: str = typer.Option("member", "--role", "-r", help="Group member role (member, mod, admin)"),
    porcelain: bool = typer.Option(False, "--porcelain", help="Output only the added user ids"),
) -> None:
    """Add a member to a group."""
    try:
        member_role = GroupRole.parse(role)
    except ValidationError:
        member_role = GroupRole.MEMBER

    with run_command():
        session = open_session(ctx)
        group = session.resolver.resolve(EntityType.GROUP, group_id)
        gid = group.resolved_id

        def join(user: EntityRef) -> str:
            session.members.join(gid, user.resolved_id)
            if member_role is not GroupRole.MEMBER:
                session.members.promote(gid, user.resolved_id, member_role)
            return f"Added user #{user.resolved_id} to group #{gid} as {member_role.value}."

        result = session.executor.execute(make_targets(EntityType.USER, user_ids), join)
        report_batch(result, porcelain=porcelain)


member_app.command("join", hidden=True)(member_add)


@member_app.command("remove")
def member_remove(
    ctx: typer.Context,
    group_id: str = typer.Option(..., "--group-id", "-g", help=GROUP_OPTION_HELP),
    user_ids: list[str] = typer.Option(..., "--user-id", "-u", help=USER_OPTION_HELP),
    yes: bool = typer.Option(False, "--yes", "-y", help="Answer yes to the confirmation message"),
) -> None:
    """Remove members from a group."""
    with run_command():
        session = open_session(ctx, yes=yes)
        session.executor.require_confirmation(
            f"Are you sure you want to remove {len(user_ids)} member(s) from group '{group_id}'?"
        )
        gid = session.resolver.resolve(EntityType.GROUP, group_id).resolved_id

        def remove(user: EntityRef) -> str:
            session.members.remove(gid, user.resolved_id)
            return f"Member #{user.resolved_id} removed from the group #{gid}."

        report_batch(session.executor.execute(make_targets(EntityType.USER, user_ids), remove))


member_app.command("delete", hidden=True)(member_remove)


@member_app.command("list")
def member_list(
    ctx: typer.Context,
    group_id: str = typer.Argument(..., help="Identifier for the group. Can be a numeric ID or the group slug."),
    role: str = typer.Option(None, "--role", help="Comma-separated roles to include (member, mod, admin, banned)"),
    fields: str = typer.Option(None, "--fields", help=FIELDS_HELP),
    fmt: str = typer.Option(None, "--format", help=FORMAT_HELP),
) -> None:
    """Get a list of group memberships."""
    with run_command():
        session = open_session(ctx)
        spec = session.field_spec(fields, fmt)
        gid = session.resolver.resolve(EntityType.GROUP, group_id).resolved_id
        roles = split_csv(role) or ["member", "mod", "admin"]
        members = session.members.members(gid, roles)
        if not members:
            fail("No group members found.")
        session.formatter.render(members, spec, default_fields=MEMBER_FIELDS, id_field="user_id")


@member_app.command("get-groups")
def member_get_groups(
    ctx: typer.Context,
    user_id: str = typer.Option(..., "--user-id", "-u", help="Identifier for the user. Accepts either a user_login or a numeric ID."),
    is_admin: bool = typer.Option(None, "--is-admin/--not-admin", help="Only groups the user administers (or not)"),
    is_mod: bool = typer.Option(None, "--is-mod/--not-mod", help="Only groups the user moderates (or not)"),
    order: str = typer.Option("ASC", "--order", help="Sort by group id: ASC or DESC"),
) -> None:
    """Get a list of groups a user is a member of."""
    sort_order = order.strip().upper()
    if sort_order not in {"ASC", "DESC"}:
        fail("Invalid order. Use: ASC|DESC")

    with run_command():
        session = open_session(ctx)
        uid = session.resolver.resolve(EntityType.USER, user_id).resolved_id
        groups = session.members.user_groups(uid, is_admin=is_admin, is_mod=is_mod, order=sort_order)
        if not groups:
            fail("This user is not a member of any group.")
        success(f"Found {len(groups)} group(s) from member #{uid}.")
        success(f"Current group(s) from member #{uid}: {', '.join(str(m.group_id) for m in groups)}.")


member_app.command("list-groups", hidden=True)(member_get_groups)


@member_app.command("promote")
def member_promote(
    ctx: typer.Context,
    group_id: str = typer.Option(..., "--group-id", "-g", help=GROUP_OPTION_HELP),
    user_ids: list[str] = typer.Option(..., "--user-id", "-u", help=USER_OPTION_HELP),
    role: str = typer.Option(..., "--role", "-r", help="Group role to promote the member (mod, admin)"),
) -> None:
    """Promote members to a new role within a group."""
    with run_command():
        member_role = GroupRole.parse(role)
        if member_role is GroupRole.MEMBER:
            fail("You need a valid role to promote the member.")
        session = open_session(ctx)
        gid = session.resolver.resolve(EntityType.GROUP, group_id).resolved_id

        def promote(user: EntityRef) -> str:
            session.members.promote(gid, user.resolved_id, member_role)
            return f"Member #{user.resolved_id} promoted to {member_role.value} in group #{gid}."

        report_batch(session.executor.execute(make_targets(EntityType.USER, user_ids), promote))


@member_app.command("demote")
def member_demote(
    ctx: typer.Context,
    group_id: str = typer.Option(..., "--group-id", "-g", help=GROUP_OPTION_HELP),
    user_ids: list[str] = typer.Option(..., "--user-id", "-u", help=USER_OPTION_HELP),
) -> None:
    """Demote members to the 'member' status."""
    with run_command():
        session = open_session(ctx)
        gid = session.resolver.resolve(EntityType.GROUP, group_id).resolved_id

        def demote(user: EntityRef) -> str:
            session.members.demote(gid, user.resolved_id)
            return f'User #{user.resolved_id} demoted to the "member" status in group #{gid}.'

        report_batch(session.executor.execute(make_targets(EntityType.USER, user_ids), demote))


@member_app.command("ban")
def member_ban(
    ctx: typer.Context,
    group_id: str = typer.Option(..., "--group-id", "-g", help=GROUP_OPTION_HELP),
    user_ids: list[str] = typer.Option(..., "--user-id", "-u", help=USER_OPTION_HELP),
    yes: bool = typer.Option(False, "--yes", "-y", help="Answer yes to the confirmation message"),
) -> None:
    """Ban members from a group."""
    with run_command():
        session = open_session(ctx, yes=yes)
        session.executor.require_confirmation(
            f"Are you sure you want to ban {len(user_ids)} member(s) from group '{group_id}'?"
        )
        gid = session.resolver.resolve(EntityType.GROUP, group_id).resolved_id

        def ban(user: EntityRef) -> str:
            session.members.ban(gid, user.resolved_id)
            return f"Member #{user.resolved_id} banned from the group #{gid}."

        report_batch(session.executor.execute(make_targets(EntityType.USER, user_ids), ban))


@member_app.command("unban")
def member_unban(
    ctx: typer.Context,
    group_id: str = typer.Option(..., "--group-id", "-g", help=GROUP_OPTION_HELP),
    user_ids: list[str] = typer.Option(..., "--user-id", "-u", help=USER_OPTION_HELP),
    yes: bool = typer.Option(False, "--yes", "-y", help="Answer yes to the confirmation message"),
) -> None:
    """Unban members from a group."""
    with run_command():
        session = open_session(ctx, yes=yes)
        session.executor.require_confirmation(
            f"Are you sure you want to unban {len(user_ids)} member(s) from group '{group_id}'?"
        )
        gid = session.resolver.resolve(EntityType.GROUP, group_id).resolved_id

        def unban(user: EntityRef) -> str:
            session.members.unban(gid, user.resolved_id)
            return f"Member #{user.resolved_id} unbanned from the group #{gid}."

        report_batch(session.executor.execute(make_targets(EntityType.USER, user_ids), unban))

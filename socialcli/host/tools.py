"""Maintenance tools: count repairs and default email reinstall."""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum

from loguru import logger

from socialcli.core.errors import OperationFailedError, ValidationError
from socialcli.host.schema import BlogRecord, EmailTemplate
from socialcli.host.store import HostStore

DEFAULT_EMAILS: tuple[tuple[str, str], ...] = (
    ("activity-comment", "{{poster.name}} replied to one of your updates"),
    ("activity-at-message", "{{poster.name}} mentioned you in a status update"),
    ("groups-at-message", "{{poster.name}} mentioned you in an update"),
    ("core-user-registration", "[{{{site.name}}}] Activate your account"),
    ("friends-request", "New friendship request from {{initiator.name}}"),
    ("friends-request-accepted", "{{friend.name}} accepted your friendship request"),
    ("groups-details-updated", "Group details updated"),
    ("groups-invitation", "You have an invitation to the group: \"{{group.name}}\""),
    ("groups-member-promoted", "You have been promoted in the group: \"{{group.name}}\""),
    ("groups-membership-request", "{{requesting-user.name}} wants to join the group \"{{group.name}}\""),
    ("messages-unread", "New message from {{sender.name}}"),
)


class RepairTool(StrEnum):
    FRIEND_COUNT = "friend-count"
    GROUP_COUNT = "group-count"
    BLOG_RECORDS = "blog-records"
    COUNT_MEMBERS = "count-members"
    LAST_ACTIVITY = "last-activity"


def _require_component(store: HostStore, component: str) -> None:
    if not store.is_component_active(component):
        raise OperationFailedError(f"The {component} component is not active.")


def repair_friend_count(store: HostStore) -> str:
    _require_component(store, "friends")
    counts: dict[int, int] = {}
    for friendship in store.state.friendships:
        if not friendship.is_confirmed:
            continue
        for user_id in (friendship.initiator_user_id, friendship.friend_user_id):
            counts[user_id] = counts.get(user_id, 0) + 1
    for user in store.state.users:
        user.total_friend_count = counts.get(user.id, 0)
    return "Counting the number of friends for each user. Complete!"


def repair_group_count(store: HostStore) -> str:
    _require_component(store, "groups")
    memberships = store.state.memberships
    for user in store.state.users:
        user.total_group_count = sum(1 for m in memberships if m.user_id == user.id and m.is_active)
    for group in store.state.groups:
        group.total_member_count = sum(1 for m in memberships if m.group_id == group.id and m.is_active)
    return "Counting the number of groups for each user. Complete!"


def repair_blog_records(store: HostStore) -> str:
    _require_component(store, "blogs")
    store.state.blog_records = [
        BlogRecord(blog_id=blog.id, user_id=blog.owner_id)
        for blog in sorted(store.state.blogs, key=lambda b: b.id)
        if store.user(blog.owner_id) is not None
    ]
    return "Repopulating Blogs records. Complete!"


def repair_count_members(store: HostStore) -> str:
    store.state.site.total_member_count = len(store.state.users)
    return "Counting the number of active members on the site. Complete!"


def repair_last_activity(store: HostStore) -> str:
    for user in store.state.users:
        if not user.last_activity:
            user.last_activity = user.registered or None
    return "Determining last activity dates for each user. Complete!"


REPAIR_TOOLS: dict[RepairTool, Callable[[HostStore], str]] = {
    RepairTool.FRIEND_COUNT: repair_friend_count,
    RepairTool.GROUP_COUNT: repair_group_count,
    RepairTool.BLOG_RECORDS: repair_blog_records,
    RepairTool.COUNT_MEMBERS: repair_count_members,
    RepairTool.LAST_ACTIVITY: repair_last_activity,
}


def parse_repair_tool(name: str) -> RepairTool:
    key = (name or "").strip().lower().replace("_", "-")
    try:
        return RepairTool(key)
    except ValueError:
        raise ValidationError("There is no repair tool with that name.") from None


def run_repair(name: str, store: HostStore) -> str:
    """Run one repair tool by name and commit the store."""
    tool = parse_repair_tool(name)
    message = REPAIR_TOOLS[tool](store)
    store.commit()
    logger.info("repair tool {} finished", tool.value)
    return message


def reinstall_emails(store: HostStore) -> str:
    """Replace stored email templates with the defaults."""
    store.state.emails = [EmailTemplate(slug=slug, subject=subject) for slug, subject in DEFAULT_EMAILS]
    store.commit()
    return "Emails have been successfully reinstalled."

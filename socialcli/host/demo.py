"""Small deterministic dataset for trying the CLI against a fresh store."""

from __future__ import annotations

from socialcli.host.schema import (
    Blog,
    Friendship,
    Group,
    HostState,
    Membership,
    Notification,
    User,
)

_DATE = "2024-01-15 09:30:00"


def seed_demo_state() -> HostState:
    users = [
        User(id=1, login="admin", display_name="Site Admin", email="admin@example.org", registered=_DATE),
        User(id=10, login="alice", display_name="Alice Moreau", email="alice@example.org", registered=_DATE),
        User(id=20, login="bob", display_name="Bob Okafor", email="bob@example.org", registered=_DATE),
        User(id=30, login="carol", display_name="Carol Lindqvist", email="carol@example.org", registered=_DATE),
    ]
    groups = [
        Group(id=3, slug="foo", name="Foo Club", creator_id=1, date_created=_DATE),
        Group(id=45, slug="bar", name="Bar Society", creator_id=10, date_created=_DATE),
    ]
    memberships = [
        Membership(id=1, group_id=3, user_id=1, is_admin=True, date_modified=_DATE),
        Membership(id=2, group_id=3, user_id=10, date_modified=_DATE),
        Membership(id=3, group_id=45, user_id=10, is_admin=True, date_modified=_DATE),
        Membership(id=4, group_id=45, user_id=30, is_mod=True, date_modified=_DATE),
    ]
    notifications = [
        Notification(
            id=520,
            user_id=10,
            item_id=3,
            component_name="groups",
            component_action="membership_request_accepted",
            date_notified=_DATE,
        ),
        Notification(
            id=521,
            user_id=20,
            item_id=7,
            component_name="activity",
            component_action="comment_reply",
            date_notified=_DATE,
        ),
    ]
    friendships = [
        Friendship(id=1, initiator_user_id=10, friend_user_id=20),
        Friendship(id=2, initiator_user_id=10, friend_user_id=30),
        Friendship(id=3, initiator_user_id=20, friend_user_id=30, is_confirmed=False),
    ]
    blogs = [Blog(id=1, owner_id=1, domain="example.org")]

    state = HostState(
        users=users,
        groups=groups,
        memberships=memberships,
        notifications=notifications,
        friendships=friendships,
        blogs=blogs,
    )
    for group in state.groups:
        group.total_member_count = sum(1 for m in memberships if m.group_id == group.id and m.is_active)
    for user in state.users:
        user.total_group_count = sum(1 for m in memberships if m.user_id == user.id and m.is_active)
    state.site.total_member_count = len(users)
    return state

"""Group membership operations of the reference host."""

from __future__ import annotations

from collections.abc import Collection
from typing import Any, Literal, TypeAlias

from loguru import logger

from socialcli.core.errors import NotFoundError, OperationFailedError, ValidationError
from socialcli.core.models import GroupRole
from socialcli.host.schema import Membership
from socialcli.host.store import HostStore
from socialcli.utils.helpers import now_timestamp

MEMBER_LIST_ROLES = frozenset({"member", "mod", "admin", "banned"})
SortOrder: TypeAlias = Literal["ASC", "DESC"]


class GroupMembers:
    """Join/leave/role changes for group members, committed per call."""

    def __init__(self, store: HostStore) -> None:
        self._store = store

    def join(self, group_id: int, user_id: int) -> Membership:
        self._require(group_id, user_id)
        membership = self._store.membership(user_id, group_id)
        if membership is not None and membership.is_banned:
            raise OperationFailedError(f"User #{user_id} is banned from group #{group_id}.")
        if membership is not None and membership.is_confirmed:
            raise OperationFailedError(f"User #{user_id} is already a member of group #{group_id}.")

        if membership is None:
            membership = Membership(
                id=self._store.next_membership_id(),
                group_id=group_id,
                user_id=user_id,
            )
            self._store.state.memberships.append(membership)
        membership.is_confirmed = True
        membership.invite_sent = False
        membership.date_modified = now_timestamp()
        self._recount(group_id, user_id)
        self._store.commit()
        logger.info("user {} joined group {}", user_id, group_id)
        return membership

    def remove(self, group_id: int, user_id: int) -> None:
        membership = self._active_membership(group_id, user_id, "remove")
        self._store.state.memberships.remove(membership)
        self._recount(group_id, user_id)
        self._store.commit()
        logger.info("user {} removed from group {}", user_id, group_id)

    def promote(self, group_id: int, user_id: int, role: GroupRole) -> Membership:
        if role is GroupRole.MEMBER:
            raise ValidationError("You need a valid role to promote the member.")
        membership = self._active_membership(group_id, user_id, "promote")
        if membership.role == role.value:
            raise OperationFailedError(f"User #{user_id} is already {role.value} of group #{group_id}.")
        membership.is_admin = role is GroupRole.ADMIN
        membership.is_mod = role is GroupRole.MOD
        membership.date_modified = now_timestamp()
        self._store.commit()
        return membership

    def demote(self, group_id: int, user_id: int) -> Membership:
        membership = self._active_membership(group_id, user_id, "demote")
        if membership.role == GroupRole.MEMBER.value:
            raise OperationFailedError(f"User #{user_id} already has the member role in group #{group_id}.")
        membership.is_admin = False
        membership.is_mod = False
        membership.date_modified = now_timestamp()
        self._store.commit()
        return membership

    def ban(self, group_id: int, user_id: int) -> Membership:
        self._require(group_id, user_id)
        membership = self._store.membership(user_id, group_id)
        if membership is None:
            raise OperationFailedError(f"Could not ban the member: user #{user_id} is not in group #{group_id}.")
        if membership.is_banned:
            raise OperationFailedError(f"User #{user_id} is already banned from group #{group_id}.")
        membership.is_banned = True
        membership.is_admin = False
        membership.is_mod = False
        membership.date_modified = now_timestamp()
        self._recount(group_id, user_id)
        self._store.commit()
        return membership

    def unban(self, group_id: int, user_id: int) -> Membership:
        self._require(group_id, user_id)
        membership = self._store.membership(user_id, group_id)
        if membership is None or not membership.is_banned:
            raise OperationFailedError(f"Could not unban the member: user #{user_id} is not banned from group #{group_id}.")
        membership.is_banned = False
        membership.date_modified = now_timestamp()
        self._recount(group_id, user_id)
        self._store.commit()
        return membership

    def members(self, group_id: int, roles: Collection[str] = ("member", "mod", "admin")) -> list[dict[str, Any]]:
        """Rows describing a group's members, filtered by role."""
        unknown = sorted(set(roles) - MEMBER_LIST_ROLES)
        if unknown:
            raise ValidationError(f"Invalid role filter: {', '.join(unknown)}.")
        if self._store.group(group_id) is None:
            raise NotFoundError(f"No group found by that slug or ID: {group_id}.", entity_type="group", token=str(group_id))

        rows: list[dict[str, Any]] = []
        for membership in self._store.state.memberships:
            if membership.group_id != group_id or not membership.is_confirmed:
                continue
            role = "banned" if membership.is_banned else membership.role
            if role not in roles:
                continue
            user = self._store.user(membership.user_id)
            rows.append(
                {
                    "user_id": membership.user_id,
                    "user_login": user.login if user else "",
                    "fullname": user.display_name if user else "",
                    "date_modified": membership.date_modified,
                    "role": role,
                    "is_banned": membership.is_banned,
                }
            )
        rows.sort(key=lambda row: row["user_id"])
        return rows

    def user_groups(
        self,
        user_id: int,
        *,
        is_confirmed: bool | None = True,
        is_banned: bool | None = False,
        is_admin: bool | None = None,
        is_mod: bool | None = None,
        invite_sent: bool | None = None,
        order: SortOrder = "ASC",
    ) -> list[Membership]:
        """Memberships of one user, filtered by flags (None means any)."""
        filters = {
            "is_confirmed": is_confirmed,
            "is_banned": is_banned,
            "is_admin": is_admin,
            "is_mod": is_mod,
            "invite_sent": invite_sent,
        }
        found = [
            m
            for m in self._store.state.memberships
            if m.user_id == user_id
            and all(want is None or getattr(m, name) == want for name, want in filters.items())
        ]
        found.sort(key=lambda m: m.group_id, reverse=order == "DESC")
        return found

    def _require(self, group_id: int, user_id: int) -> None:
        if self._store.group(group_id) is None:
            raise NotFoundError(f"No group found by that slug or ID: {group_id}.", entity_type="group", token=str(group_id))
        if self._store.user(user_id) is None:
            raise NotFoundError(f"No user found by that username or ID: {user_id}.", entity_type="user", token=str(user_id))

    def _active_membership(self, group_id: int, user_id: int, verb: str) -> Membership:
        self._require(group_id, user_id)
        membership = self._store.membership(user_id, group_id)
        if membership is None or not membership.is_active:
            raise OperationFailedError(f"Could not {verb} the member: user #{user_id} is not a member of group #{group_id}.")
        return membership

    def _recount(self, group_id: int, user_id: int) -> None:
        memberships = self._store.state.memberships
        group = self._store.group(group_id)
        if group is not None:
            group.total_member_count = sum(1 for m in memberships if m.group_id == group_id and m.is_active)
        user = self._store.user(user_id)
        if user is not None:
            user.total_group_count = sum(1 for m in memberships if m.user_id == user_id and m.is_active)

"""JSON file store backing the reference host."""

from __future__ import annotations

import json
import os
from collections.abc import Iterable
from pathlib import Path

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from socialcli.core.errors import OperationFailedError
from socialcli.host.schema import Group, HostState, Membership, Notification, User


def load_host_state(path: Path) -> HostState:
    """Load host state from disk. Returns an empty state when missing."""
    if not path.exists():
        return HostState()
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return HostState.model_validate(data)
    except (json.JSONDecodeError, PydanticValidationError) as e:
        raise OperationFailedError(f"Host store {path} is unreadable: {e}") from e


def save_host_state(state: HostState, path: Path) -> None:
    """Atomically write host state to disk."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp-{os.getpid()}")
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(state.model_dump(), f, indent=2, ensure_ascii=False)
    os.replace(tmp_path, path)


class HostStore:
    """In-memory view of the host state with explicit commits."""

    def __init__(self, state: HostState, path: Path | None = None) -> None:
        self.state = state
        self.path = path
        self._last_ids: dict[str, int] = {}

    @classmethod
    def open(cls, path: Path) -> HostStore:
        return cls(load_host_state(path), path)

    def commit(self) -> None:
        if self.path is None:
            return
        save_host_state(self.state, self.path)
        logger.debug("host store written to {}", self.path)

    # ── Id allocation ────────────────────────────────────────────────────

    def next_membership_id(self) -> int:
        return self._allocate("membership", (m.id for m in self.state.memberships))

    def next_notification_id(self) -> int:
        return self._allocate("notification", (n.id for n in self.state.notifications))

    def _allocate(self, kind: str, existing: Iterable[int]) -> int:
        # Scan once per store; later ids count up from the cached maximum.
        if kind not in self._last_ids:
            self._last_ids[kind] = max(existing, default=0)
        self._last_ids[kind] += 1
        return self._last_ids[kind]

    # ── Finders ──────────────────────────────────────────────────────────

    def user(self, user_id: int) -> User | None:
        return next((u for u in self.state.users if u.id == user_id), None)

    def user_by_login(self, login: str) -> User | None:
        key = login.strip().lower()
        return next((u for u in self.state.users if u.login.lower() == key), None)

    def group(self, group_id: int) -> Group | None:
        return next((g for g in self.state.groups if g.id == group_id), None)

    def group_by_slug(self, slug: str) -> Group | None:
        key = slug.strip().lower()
        return next((g for g in self.state.groups if g.slug.lower() == key), None)

    def notification(self, notification_id: int) -> Notification | None:
        return next((n for n in self.state.notifications if n.id == notification_id), None)

    def membership(self, user_id: int, group_id: int) -> Membership | None:
        return next(
            (m for m in self.state.memberships if m.user_id == user_id and m.group_id == group_id),
            None,
        )

    def is_component_active(self, component: str) -> bool:
        return component in self.state.active_components

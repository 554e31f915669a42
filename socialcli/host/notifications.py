"""Notification operations of the reference host."""

from __future__ import annotations

import random

from loguru import logger

from socialcli.core.errors import NotFoundError, OperationFailedError
from socialcli.host.schema import Notification
from socialcli.host.store import HostStore
from socialcli.utils.helpers import now_timestamp


class Notifications:
    """Create, fetch, delete and query notification items."""

    def __init__(self, store: HostStore, *, rng: random.Random | None = None) -> None:
        self._store = store
        self._rng = rng or random.Random()

    def add(
        self,
        *,
        user_id: int,
        component_name: str,
        component_action: str = "",
        item_id: int = 0,
        secondary_item_id: int = 0,
        date_notified: str | None = None,
        is_new: bool = True,
        commit: bool = True,
    ) -> int:
        """Store a notification and return its id.

        Bulk callers pass ``commit=False`` and call ``HostStore.commit`` once.
        """
        if self._store.user(user_id) is None:
            raise OperationFailedError(f"Could not create notification: no user #{user_id}.")
        if not component_name.strip():
            raise OperationFailedError("Could not create notification: missing component.")

        notification = Notification(
            id=self._store.next_notification_id(),
            user_id=user_id,
            item_id=item_id,
            secondary_item_id=secondary_item_id,
            component_name=component_name.strip(),
            component_action=component_action.strip(),
            date_notified=date_notified or now_timestamp(),
            is_new=is_new,
        )
        self._store.state.notifications.append(notification)
        if commit:
            self._store.commit()
        logger.debug("notification {} created for user {}", notification.id, user_id)
        return notification.id

    def get(self, notification_id: int) -> Notification:
        notification = self._store.notification(notification_id)
        if notification is None:
            raise NotFoundError(
                f"No notification found by that ID: {notification_id}.",
                entity_type="notification",
                token=str(notification_id),
            )
        return notification

    def delete(self, notification_id: int) -> None:
        notification = self.get(notification_id)
        self._store.state.notifications.remove(notification)
        self._store.commit()
        logger.info("notification {} deleted", notification_id)

    def query(
        self,
        *,
        user_id: int | None = None,
        component: str | None = None,
        action: str | None = None,
        is_new: bool | None = None,
        limit: int = 50,
    ) -> list[Notification]:
        found = [
            n
            for n in self._store.state.notifications
            if (user_id is None or n.user_id == user_id)
            and (component is None or n.component_name == component)
            and (action is None or n.component_action == action)
            and (is_new is None or n.is_new == is_new)
        ]
        found.sort(key=lambda n: n.id)
        return found[: max(limit, 0)]

    def active_components(self) -> list[str]:
        return list(self._store.state.active_components)

    def random_component(self) -> str:
        components = self.active_components()
        if not components:
            raise OperationFailedError("No active components to pick from.")
        return self._rng.choice(components)

    def user_ids(self) -> list[int]:
        return [u.id for u in self._store.state.users]

    def random_user_id(self) -> int:
        ids = self.user_ids()
        if not ids:
            raise OperationFailedError("No users to pick from.")
        return self._rng.choice(ids)

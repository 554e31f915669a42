"""Per-entity-type lookup capabilities over the host store."""

from __future__ import annotations

from socialcli.core.models import EntityType
from socialcli.core.ports import EntityLookupPort
from socialcli.host.store import HostStore


class UserLookup:
    """Users resolve by numeric id or login."""

    def __init__(self, store: HostStore) -> None:
        self._store = store

    def exists_by_id(self, entity_id: int) -> bool:
        return self._store.user(entity_id) is not None

    def lookup_by_key(self, key: str) -> int | None:
        user = self._store.user_by_login(key)
        return user.id if user else None


class GroupLookup:
    """Groups resolve by numeric id or slug."""

    def __init__(self, store: HostStore) -> None:
        self._store = store

    def exists_by_id(self, entity_id: int) -> bool:
        return self._store.group(entity_id) is not None

    def lookup_by_key(self, key: str) -> int | None:
        group = self._store.group_by_slug(key)
        return group.id if group else None


class NotificationLookup:
    """Notifications have no human-readable key."""

    def __init__(self, store: HostStore) -> None:
        self._store = store

    def exists_by_id(self, entity_id: int) -> bool:
        return self._store.notification(entity_id) is not None

    def lookup_by_key(self, key: str) -> int | None:
        return None


def build_lookups(store: HostStore) -> dict[EntityType, EntityLookupPort]:
    return {
        EntityType.USER: UserLookup(store),
        EntityType.GROUP: GroupLookup(store),
        EntityType.NOTIFICATION: NotificationLookup(store),
    }

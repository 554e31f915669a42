"""Resolve CLI tokens (numeric ids, slugs, logins) to verified entity ids."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from loguru import logger

from socialcli.core.errors import NotFoundError, ValidationError
from socialcli.core.models import EntityRef, EntityType
from socialcli.core.ports import EntityLookupPort

_KEY_NAMES: dict[EntityType, str] = {
    EntityType.USER: "username or ID",
    EntityType.GROUP: "slug or ID",
}


def parse_positive_int(token: str) -> int | None:
    """Return the integer value of a strictly positive decimal token."""
    compact = token.strip()
    if not compact.isdigit():
        return None
    value = int(compact)
    return value if value > 0 else None


class IdentifierResolver:
    """Translates raw tokens into resolved ``EntityRef`` values."""

    def __init__(self, lookups: Mapping[EntityType, EntityLookupPort]) -> None:
        self._lookups = dict(lookups)

    def supports(self, entity_type: EntityType) -> bool:
        return entity_type in self._lookups

    def resolve(self, entity_type: EntityType, raw_token: str) -> EntityRef:
        """Resolve one token or raise ``NotFoundError``/``ValidationError``.

        Positive integers are checked as ids first; any other token, or an
        integer with no matching id, goes through the key lookup.
        """
        token = str(raw_token).strip()
        if not token:
            raise ValidationError(f"Missing {entity_type.value} identifier.")

        lookup = self._lookups.get(entity_type)
        if lookup is None:
            raise ValidationError(f"No lookup registered for entity type '{entity_type.value}'.")

        ref = EntityRef(entity_type=entity_type, raw_token=token)
        numeric = parse_positive_int(token)
        if numeric is not None and lookup.exists_by_id(numeric):
            logger.debug("resolved {} token {!r} as id {}", entity_type.value, token, numeric)
            return ref.resolve(numeric)

        found = lookup.lookup_by_key(token)
        if found is not None and found > 0:
            logger.debug("resolved {} token {!r} by key to id {}", entity_type.value, token, found)
            return ref.resolve(found)

        raise NotFoundError(
            f"No {entity_type.value} found by that {_KEY_NAMES.get(entity_type, 'ID')}: {token}.",
            entity_type=entity_type.value,
            token=token,
        )

    def resolve_ref(self, ref: EntityRef) -> EntityRef:
        if ref.is_resolved:
            return ref
        return self.resolve(ref.entity_type, ref.raw_token)

    def resolve_many(self, entity_type: EntityType, tokens: Iterable[str]) -> list[EntityRef]:
        """Resolve tokens in order, failing on the first unresolvable one."""
        return [self.resolve(entity_type, token) for token in tokens]

"""Port interfaces the framework consumes from the host and the terminal."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class EntityLookupPort(Protocol):
    """Existence and key lookup for one entity type."""

    def exists_by_id(self, entity_id: int) -> bool:
        """Return True when an entity with this numeric id exists."""

    def lookup_by_key(self, key: str) -> int | None:
        """Return the id for a human-readable key (slug, login), or None."""


@runtime_checkable
class ProgressPort(Protocol):
    """Ticking progress indicator for long-running loops."""

    def start(self, total: int, label: str = "") -> None:
        """Begin reporting progress towards ``total`` steps."""

    def tick(self, advance: int = 1) -> None:
        """Advance the indicator."""

    def finish(self) -> None:
        """Signal completion."""


@runtime_checkable
class ConfirmPort(Protocol):
    """Interactive yes/no confirmation."""

    def ask(self, prompt: str) -> bool:
        """Return True when the operator confirms ``prompt``."""


class NullProgress:
    """Progress sink that reports nothing (silent mode)."""

    def start(self, total: int, label: str = "") -> None:
        return None

    def tick(self, advance: int = 1) -> None:
        return None

    def finish(self) -> None:
        return None


class AutoConfirm:
    """Confirmation sink that answers every prompt with a fixed value."""

    def __init__(self, answer: bool = True) -> None:
        self._answer = answer

    def ask(self, prompt: str) -> bool:
        return self._answer

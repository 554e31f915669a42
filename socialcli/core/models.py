"""Domain models for the resource-command framework."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum

from socialcli.core.errors import ValidationError


class EntityType(StrEnum):
    """Kinds of domain objects commands operate on."""

    USER = "user"
    GROUP = "group"
    NOTIFICATION = "notification"


class OutcomeStatus(StrEnum):
    SUCCESS = "success"
    ERROR = "error"


class OutputFormat(StrEnum):
    """Textual encodings supported by the output formatter."""

    TABLE = "table"
    CSV = "csv"
    JSON = "json"
    YAML = "yaml"
    IDS = "ids"
    COUNT = "count"


class GroupRole(StrEnum):
    MEMBER = "member"
    MOD = "mod"
    ADMIN = "admin"

    @classmethod
    def parse(cls, raw: str | None) -> GroupRole:
        value = (raw or "").strip().lower()
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(role.value for role in cls)
            raise ValidationError(f"Invalid role '{raw}'. Use one of: {choices}.") from None


@dataclass(frozen=True, slots=True, kw_only=True, eq=False)
class EntityRef:
    """A CLI token naming one entity, optionally resolved to its numeric id.

    Resolved refs compare by identity (type and id), so ``bar`` and ``45``
    are equal once both resolve to group 45. Unresolved refs compare by token.
    """

    entity_type: EntityType
    raw_token: str
    resolved_id: int | None = None

    def _identity(self) -> tuple[object, ...]:
        if self.resolved_id is not None:
            return (self.entity_type, self.resolved_id)
        return (self.entity_type, None, self.raw_token)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EntityRef):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    @property
    def is_resolved(self) -> bool:
        return self.resolved_id is not None

    @property
    def label(self) -> str:
        if self.resolved_id is not None:
            return f"{self.entity_type.value} #{self.resolved_id}"
        return f"{self.entity_type.value} '{self.raw_token}'"

    def resolve(self, resolved_id: int) -> EntityRef:
        return replace(self, resolved_id=resolved_id)


@dataclass(frozen=True, slots=True, kw_only=True)
class OperationOutcome:
    """Result of applying one operation to one target."""

    target: EntityRef
    status: OutcomeStatus
    message: str
    error_kind: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS


@dataclass(frozen=True, slots=True)
class BatchResult:
    """Ordered per-target outcomes of one batch invocation."""

    outcomes: tuple[OperationOutcome, ...] = ()

    @property
    def succeeded(self) -> tuple[OperationOutcome, ...]:
        return tuple(o for o in self.outcomes if o.ok)

    @property
    def failed(self) -> tuple[OperationOutcome, ...]:
        return tuple(o for o in self.outcomes if not o.ok)

    @property
    def succeeded_count(self) -> int:
        return len(self.succeeded)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def ok(self) -> bool:
        return self.failed_count == 0


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldSpec:
    """Field projection and encoding chosen for one render call."""

    requested_fields: tuple[str, ...] = ()
    format: OutputFormat = OutputFormat.TABLE

    @classmethod
    def parse(cls, fields: str | None, fmt: str | OutputFormat = OutputFormat.TABLE) -> FieldSpec:
        try:
            output_format = OutputFormat(str(fmt).strip().lower())
        except ValueError:
            choices = "|".join(f.value for f in OutputFormat)
            raise ValidationError(f"Invalid format '{fmt}'. Use: {choices}.") from None
        requested = tuple(part.strip() for part in (fields or "").split(",") if part.strip())
        return cls(requested_fields=requested, format=output_format)


@dataclass(slots=True)
class GenerationJob:
    """Progress bookkeeping for one bulk generation run."""

    total: int
    silent: bool = False
    completed: int = 0
    failed: int = 0
    created_ids: list[int] = field(default_factory=list)

    @property
    def remaining(self) -> int:
        return max(self.total - self.completed, 0)

    def advance(self, created_id: int | None) -> None:
        self.completed += 1
        if created_id is None:
            self.failed += 1
        else:
            self.created_ids.append(created_id)

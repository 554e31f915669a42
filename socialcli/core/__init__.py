"""Generic resource-command framework: resolution, batches, output, generation."""

from socialcli.core.batch import BatchOperationExecutor, make_targets
from socialcli.core.errors import (
    ConfirmationDeclined,
    NotFoundError,
    OperationFailedError,
    SocialCliError,
    ValidationError,
)
from socialcli.core.formatter import OutputFormatter
from socialcli.core.generator import SyntheticDataGenerator, random_choice_provider
from socialcli.core.models import (
    BatchResult,
    EntityRef,
    EntityType,
    FieldSpec,
    GenerationJob,
    GroupRole,
    OperationOutcome,
    OutcomeStatus,
    OutputFormat,
)
from socialcli.core.resolver import IdentifierResolver

__all__ = [
    "BatchOperationExecutor",
    "BatchResult",
    "ConfirmationDeclined",
    "EntityRef",
    "EntityType",
    "FieldSpec",
    "GenerationJob",
    "GroupRole",
    "IdentifierResolver",
    "NotFoundError",
    "OperationFailedError",
    "OperationOutcome",
    "OutcomeStatus",
    "OutputFormat",
    "OutputFormatter",
    "SocialCliError",
    "SyntheticDataGenerator",
    "ValidationError",
    "make_targets",
    "random_choice_provider",
]

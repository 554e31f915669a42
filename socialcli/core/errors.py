"""Error taxonomy shared by the command framework."""

from __future__ import annotations


class SocialCliError(Exception):
    """Base class for errors a command reports to the operator."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__


class ValidationError(SocialCliError):
    """Malformed or missing input, detected before resolution or mutation."""


class NotFoundError(SocialCliError):
    """An identifier resolved to no existing entity."""

    def __init__(self, message: str, *, entity_type: str = "", token: str = "") -> None:
        super().__init__(message)
        self.entity_type = entity_type
        self.token = token


class OperationFailedError(SocialCliError):
    """The host declined a mutation on a valid, resolved entity."""


class ConfirmationDeclined(SocialCliError):
    """An operator-gated batch was aborted before any mutation."""

    def __init__(self, message: str = "Aborted: confirmation declined.") -> None:
        super().__init__(message)


# Errors a batch or generator records per target instead of aborting.
RECOVERABLE_ERRORS: tuple[type[SocialCliError], ...] = (
    ValidationError,
    NotFoundError,
    OperationFailedError,
)

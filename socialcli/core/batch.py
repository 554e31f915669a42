"""Apply one operation to an ordered list of targets with partial-failure tolerance."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TypeAlias

from loguru import logger

from socialcli.core.errors import RECOVERABLE_ERRORS, ConfirmationDeclined
from socialcli.core.models import (
    BatchResult,
    EntityRef,
    EntityType,
    OperationOutcome,
    OutcomeStatus,
)
from socialcli.core.ports import ConfirmPort
from socialcli.core.resolver import IdentifierResolver

Operation: TypeAlias = Callable[[EntityRef], str]


def make_targets(entity_type: EntityType, tokens: Iterable[str]) -> list[EntityRef]:
    """Build unresolved refs for raw CLI tokens, keeping their order."""
    return [EntityRef(entity_type=entity_type, raw_token=str(token)) for token in tokens]


class BatchOperationExecutor:
    """Runs an operation over many targets and aggregates per-target outcomes."""

    def __init__(self, resolver: IdentifierResolver, confirm: ConfirmPort) -> None:
        self._resolver = resolver
        self._confirm = confirm

    def execute(
        self,
        targets: Sequence[EntityRef],
        operation: Operation,
        *,
        confirm: bool = False,
        prompt: str = "Are you sure?",
    ) -> BatchResult:
        """Process ``targets`` in order and return one outcome per target.

        When ``confirm`` is set the operator is asked once, before anything
        is resolved or mutated; a declined prompt raises ``ConfirmationDeclined``.
        Resolution and operation failures are recorded and the batch continues.
        """
        if confirm:
            self.require_confirmation(prompt)

        outcomes: list[OperationOutcome] = []
        for target in targets:
            outcomes.append(self._run_one(target, operation))

        result = BatchResult(tuple(outcomes))
        logger.info(
            "batch finished: {} succeeded, {} failed",
            result.succeeded_count,
            result.failed_count,
        )
        return result

    def require_confirmation(self, prompt: str = "Are you sure?") -> None:
        """Ask once; raise ``ConfirmationDeclined`` unless the operator agrees."""
        if not self._confirm.ask(prompt):
            logger.info("operation declined at confirmation")
            raise ConfirmationDeclined()

    def _run_one(self, target: EntityRef, operation: Operation) -> OperationOutcome:
        try:
            resolved = self._resolver.resolve_ref(target)
            message = operation(resolved)
        except RECOVERABLE_ERRORS as e:
            logger.warning("{} failed: {}", target.label, e.message)
            return OperationOutcome(
                target=target,
                status=OutcomeStatus.ERROR,
                message=e.message,
                error_kind=e.kind,
            )
        return OperationOutcome(target=resolved, status=OutcomeStatus.SUCCESS, message=message)

"""Bulk creation of synthetic records with progress reporting."""

from __future__ import annotations

import random
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeAlias

from loguru import logger

from socialcli.core.errors import RECOVERABLE_ERRORS, ValidationError
from socialcli.core.models import GenerationJob
from socialcli.core.ports import NullProgress, ProgressPort

FieldProvider: TypeAlias = Callable[[], dict[str, Any]]
CreateOperation: TypeAlias = Callable[[dict[str, Any]], int]


def random_choice_provider(
    base: Mapping[str, Any],
    choices: Mapping[str, Callable[[], Sequence[Any]]],
    *,
    rng: random.Random | None = None,
) -> FieldProvider:
    """Build a provider that copies ``base`` and fills each ``choices`` key.

    Candidate sequences are fetched on every call so the pick reflects
    current state (e.g. the components active right now).
    """
    picker = rng or random.Random()

    def provide() -> dict[str, Any]:
        fields = dict(base)
        for name, candidates in choices.items():
            pool = list(candidates())
            if not pool:
                raise ValidationError(f"No candidates available for '{name}'.")
            fields[name] = picker.choice(pool)
        return fields

    return provide


class SyntheticDataGenerator:
    """Repeatedly invokes a create operation with provider-built fields."""

    def __init__(self, progress: ProgressPort | None = None) -> None:
        self._progress = progress or NullProgress()

    def generate(
        self,
        count: int,
        field_provider: FieldProvider,
        create_op: CreateOperation,
        *,
        silent: bool = False,
        label: str = "Generating",
    ) -> list[int]:
        """Create ``count`` records and return the created ids in order.

        A failed iteration is counted on the job and skipped.
        """
        if count < 0:
            raise ValidationError("Count must be zero or greater.")

        job = GenerationJob(total=count, silent=silent)
        progress: ProgressPort = NullProgress() if silent else self._progress
        progress.start(count, label)
        try:
            for _ in range(count):
                job.advance(self._create_one(job, field_provider, create_op))
                progress.tick()
        finally:
            progress.finish()

        if job.failed:
            logger.warning("generation finished with {} of {} failures", job.failed, job.total)
        else:
            logger.debug("generated {} record(s)", len(job.created_ids))
        return list(job.created_ids)

    @staticmethod
    def _create_one(
        job: GenerationJob,
        field_provider: FieldProvider,
        create_op: CreateOperation,
    ) -> int | None:
        try:
            return create_op(field_provider())
        except RECOVERABLE_ERRORS as e:
            logger.debug(
                "iteration {} of {} failed ({} remaining): {}",
                job.completed + 1,
                job.total,
                job.remaining - 1,
                e.message,
            )
            return None

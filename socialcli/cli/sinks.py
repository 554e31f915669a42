"""Terminal implementations of the confirmation and progress ports."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)


class TyperConfirm:
    """Blocks on a yes/no prompt; end of input counts as no."""

    def ask(self, prompt: str) -> bool:
        try:
            return typer.confirm(prompt, default=False)
        except typer.Abort:
            return False


class RichProgress:
    """Progress bar on the shared console."""

    def __init__(self, console: Console) -> None:
        self._console = console
        self._progress: Progress | None = None
        self._task: TaskID | None = None

    def start(self, total: int, label: str = "") -> None:
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self._console,
        )
        self._progress.start()
        self._task = self._progress.add_task(label or "Working", total=total)

    def tick(self, advance: int = 1) -> None:
        if self._progress is not None and self._task is not None:
            self._progress.advance(self._task, advance)

    def finish(self) -> None:
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task = None

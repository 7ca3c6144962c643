"""
Rich progress display for the override transfers of an install.
"""

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

from ftb2pack.models.outcome import FetchOutcome, FetchStatus


class ProgressManager:
    """One overall bar across all files of a version, fed by fetch outcomes."""

    def __init__(self, console: Console, enabled: bool = True):
        self.console = console
        self.enabled = enabled
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=40),
            MofNCompleteColumn(),
            "•",
            TimeElapsedColumn(),
            console=console,
            transient=False,
        )
        self._task_id: TaskID | None = None

    def start_files(self, total: int, description: str = "Fetching overrides"):
        if not self.enabled:
            return
        self._task_id = self.progress.add_task(description, total=total)

    def record(self, outcome: FetchOutcome) -> None:
        """Callback for InstallManager: advances the bar by one file."""
        if self._task_id is None:
            return
        if outcome.status is FetchStatus.FAILED:
            self.progress.console.print(
                f"[red]✗[/red] {outcome.name} [dim]({outcome.error})[/dim]"
            )
        self.progress.advance(self._task_id)

    async def __aenter__(self):
        if self.enabled:
            self.progress.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.enabled:
            self.progress.stop()

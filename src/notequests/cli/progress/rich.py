"""Live Rich display of a running reconcile."""

from __future__ import annotations

from types import TracebackType

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TaskID, TextColumn, TimeElapsedColumn

from notequests.contracts.geo import TileRect
from notequests.contracts.quest import QuestStatus
from notequests.engine.progress import ReconcileProgress, ReconcileStage


class RichReconcileProgress(ReconcileProgress):
    """One spinner line per region with running visible and hidden note counts.

    The line ends with the created and removed totals once listeners are notified::

        with RichReconcileProgress() as progress, NoteQuests.from_config(config, progress=progress) as sdk:
            sdk.reconcile(tiles)
    """

    def __init__(self, console: Console | None = None) -> None:
        self._progress = Progress(
            SpinnerColumn(finished_text="[green]✓[/green]"),
            TextColumn("{task.description}"),
            TextColumn("[cyan]{task.fields[visible_notes]}[/] visible [dim]{task.fields[hidden_notes]}[/] hidden"),
            TextColumn("{task.fields[delta]}"),
            TimeElapsedColumn(),
            console=console or Console(stderr=True),
        )
        self._task: TaskID | None = None
        self._tiles = ""
        self._visible = 0
        self._hidden = 0

    def __enter__(self) -> RichReconcileProgress:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    def fetch_started(self, tiles: TileRect) -> None:
        self._tiles = tiles.key
        self._visible = self._hidden = 0
        self._task = self._progress.add_task(
            f"tiles {self._tiles}", total=None, visible_notes=0, hidden_notes=0, delta=""
        )

    def note_fetched(self, status: QuestStatus) -> None:
        if status is QuestStatus.VISIBLE:
            self._visible += 1
        else:
            self._hidden += 1
        self._update(visible_notes=self._visible, hidden_notes=self._hidden)

    def quests_stored(self, visible: int, hidden: int) -> None:
        self._update(visible_notes=visible, hidden_notes=hidden, delta="[dim]stored[/]")

    def quests_notified(self, created: int, removed: int) -> None:
        self._update(delta=f"[green]+{created}[/] [red]-{removed}[/]", total=1, completed=1)

    def stage_failed(self, stage: ReconcileStage, error: BaseException) -> None:
        self._update(description=f"[red]✗[/red] tiles {self._tiles}", delta=f"[red]{stage.value} failed[/]")

    def _update(self, **fields: object) -> None:
        if self._task is not None:
            self._progress.update(self._task, **fields)  # type: ignore[arg-type]

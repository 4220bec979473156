"""
Cooperative single-flight task scheduler.

Tasks are generators yielding TaskProgress. The host calls tick() once per
UI frame; each tick resumes the active task exactly once. Between two
yields a task runs uninterrupted, so a file copy or a render group is never
observed half-done.
"""

from typing import Generator, Optional

from loguru import logger

from wwise_linker.core.output import log

from .exceptions import (
    AssetDatabaseConnectionError,
    NothingToDoError,
    PreconditionError,
    QueryError,
    TaskAlreadyRunningError,
)
from .models import TaskKind, TaskProgress, TaskReport, TaskState
from .session import NoticeCallback, log_notice

Task = Generator[TaskProgress, None, Optional[TaskReport]]

# Errors that end a task with a user notice rather than a crash log
_NOTICE_TITLES = {
    AssetDatabaseConnectionError: "Not connected",
    PreconditionError: "Error",
    QueryError: "Query failed",
    NothingToDoError: "Notice",
}

_COMPLETION_TEXT = {
    TaskKind.IMPORT: "Import complete",
    TaskKind.RENDER: "Render complete",
}


def _notice_title(error: Exception) -> Optional[str]:
    for error_type, title in _NOTICE_TITLES.items():
        if isinstance(error, error_type):
            return title
    return None


class TaskScheduler:
    """Runs at most one task at a time, one step per tick.

    State machine: Idle -> Running(task) -> Idle. A task that raises is
    terminated and the scheduler returns to Idle; there is no queue.
    """

    def __init__(self, notify: Optional[NoticeCallback] = None):
        self.notify = notify or log_notice
        self.state = TaskState()
        self.last_report: Optional[TaskReport] = None
        self.last_error: Optional[Exception] = None

    @property
    def is_running(self) -> bool:
        return not self.state.is_idle

    @property
    def progress_fraction(self) -> float:
        return self.state.progress_fraction

    @property
    def status_text(self) -> str:
        return self.state.status_text

    def start(self, kind: TaskKind, task: Task) -> bool:
        """Make ``task`` the running task.

        Returns:
            False (and a notice) if another task is still running
        """
        if self.is_running:
            task.close()
            message = str(TaskAlreadyRunningError())
            logger.info(f"Rejected {kind.value} task: {self.state.kind.value} is running")
            self.notify("Busy", message)
            return False

        self.last_report = None
        self.last_error = None
        self.state = TaskState(
            kind=kind,
            progress_fraction=0.0,
            status_text=f"Preparing {kind.value}...",
            continuation=task,
        )
        logger.debug(f"Started {kind.value} task")
        return True

    def tick(self) -> bool:
        """Resume the running task once.

        Returns:
            True while the task is still running after this step
        """
        if not self.is_running:
            return False

        try:
            progress = next(self.state.continuation)
        except StopIteration as stop:
            self._finish(stop.value)
            return False
        except Exception as e:
            self._fail(e)
            return False

        if isinstance(progress, TaskProgress):
            self.state.apply(progress)
        return True

    def run_to_completion(self, max_ticks: Optional[int] = None) -> Optional[TaskReport]:
        """Tick until idle. Used by non-interactive callers and tests."""
        ticks = 0
        while self.tick():
            ticks += 1
            if max_ticks is not None and ticks >= max_ticks:
                break
        return self.last_report

    def abandon(self) -> None:
        """Drop the running task without rollback (host surface closed)."""
        if not self.is_running:
            return
        kind = self.state.kind
        self.state.continuation.close()
        self.state = TaskState(status_text=f"{kind.value.capitalize()} abandoned")
        logger.info(f"Abandoned {kind.value} task")

    def _finish(self, report: Optional[TaskReport]) -> None:
        kind = self.state.kind
        self.last_report = report
        self.state = TaskState(progress_fraction=1.0, status_text=_COMPLETION_TEXT.get(kind, "Done"))
        logger.debug(f"Finished {kind.value} task: {report}")

    def _fail(self, error: Exception) -> None:
        kind = self.state.kind
        continuation = self.state.continuation
        self.last_error = error
        self.state = TaskState(status_text=f"{kind.value.capitalize()} failed")
        continuation.close()

        title = _notice_title(error)
        if title is not None:
            log(str(error), level="warning")
            self.notify(title, str(error))
        else:
            logger.opt(exception=error).error(f"{kind.value} task crashed")
            log(f"[ERROR] {error}", level="error")

"""Tests for the cooperative task scheduler."""

from wwise_linker.domain.exceptions import NothingToDoError, PreconditionError
from wwise_linker.domain.models import ImportReport, TaskKind, TaskProgress
from wwise_linker.domain.scheduler import TaskScheduler


def counting_task(steps: int, report=None):
    for i in range(steps):
        yield TaskProgress(i / steps, f"step {i + 1}")
    return report or ImportReport(succeeded=steps)


def crashing_task():
    yield TaskProgress(0.0, "about to crash")
    raise RuntimeError("boom")


class TestTaskScheduler:
    """Tests for TaskScheduler."""

    def test_starts_idle(self):
        scheduler = TaskScheduler()
        assert not scheduler.is_running
        assert scheduler.state.kind is TaskKind.NONE
        assert scheduler.tick() is False

    def test_one_step_per_tick(self):
        scheduler = TaskScheduler()
        scheduler.start(TaskKind.IMPORT, counting_task(3))

        assert scheduler.tick() is True
        assert scheduler.status_text == "step 1"
        assert scheduler.tick() is True
        assert scheduler.status_text == "step 2"
        assert scheduler.progress_fraction == 1 / 3

    def test_finishes_with_report(self):
        scheduler = TaskScheduler()
        scheduler.start(TaskKind.IMPORT, counting_task(2))

        report = scheduler.run_to_completion()

        assert report.succeeded == 2
        assert not scheduler.is_running
        assert scheduler.progress_fraction == 1.0
        assert scheduler.status_text == "Import complete"

    def test_start_while_running_is_rejected(self):
        notices = []
        scheduler = TaskScheduler(notify=lambda title, msg: notices.append(title))
        import_task = counting_task(3)
        scheduler.start(TaskKind.IMPORT, import_task)
        scheduler.tick()

        accepted = scheduler.start(TaskKind.RENDER, counting_task(1))

        assert accepted is False
        assert notices == ["Busy"]
        assert scheduler.state.kind is TaskKind.IMPORT
        assert scheduler.state.continuation is import_task
        assert scheduler.status_text == "step 1"

    def test_crashed_task_returns_to_idle(self):
        scheduler = TaskScheduler()
        scheduler.start(TaskKind.RENDER, crashing_task())

        assert scheduler.tick() is True
        assert scheduler.tick() is False

        assert not scheduler.is_running
        assert isinstance(scheduler.last_error, RuntimeError)
        assert scheduler.status_text == "Render failed"
        # A new task can start right away
        assert scheduler.start(TaskKind.IMPORT, counting_task(1)) is True

    def test_precondition_error_produces_notice(self):
        notices = []

        def task():
            raise PreconditionError("save the project first")
            yield

        scheduler = TaskScheduler(notify=lambda title, msg: notices.append((title, msg)))
        scheduler.start(TaskKind.IMPORT, task())
        scheduler.tick()

        assert notices == [("Error", "save the project first")]
        assert not scheduler.is_running

    def test_nothing_to_do_produces_notice(self):
        notices = []

        def task():
            raise NothingToDoError("select items")
            yield

        scheduler = TaskScheduler(notify=lambda title, msg: notices.append(title))
        scheduler.start(TaskKind.RENDER, task())
        scheduler.tick()
        assert notices == ["Notice"]

    def test_abandon_closes_task(self):
        closed = []

        def task():
            try:
                yield TaskProgress(0.0, "working")
                yield TaskProgress(0.5, "still working")
            finally:
                closed.append(True)

        scheduler = TaskScheduler()
        scheduler.start(TaskKind.IMPORT, task())
        scheduler.tick()
        scheduler.abandon()

        assert closed == [True]
        assert not scheduler.is_running

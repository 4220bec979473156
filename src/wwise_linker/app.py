"""
Wwise Linker application facade.

Everything a window needs: connection management, starting the import and
render tasks, managing the list of imported sources and a per-frame tick.
The facade holds no display code; a host UI polls snapshot() each frame.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from loguru import logger

from wwise_linker.core.config import Config, is_valid_port
from wwise_linker.core.output import LogBuffer, log, set_ui_buffer
from wwise_linker.domain.exceptions import NothingToDoError
from wwise_linker.domain.import_task import ImportTask
from wwise_linker.domain.models import TaskKind
from wwise_linker.domain.query import QueryResolver
from wwise_linker.domain.render_task import RenderTask
from wwise_linker.domain.scheduler import TaskScheduler
from wwise_linker.domain.session import Session


@dataclass
class RecordRow:
    """One line of the imported sources list."""

    index: int
    name: str
    original_file_path: str
    live: bool


@dataclass
class AppSnapshot:
    """Display state for one UI frame."""

    status_text: str
    connected: bool
    connection_label: str
    running: bool
    progress_fraction: float
    progress_text: str
    records: List[RecordRow] = field(default_factory=list)
    log_lines: List[str] = field(default_factory=list)


class LinkerApp:
    """Presentation-facing entry points of the linker."""

    def __init__(
        self,
        session: Session,
        scheduler: Optional[TaskScheduler] = None,
        log_buffer: Optional[LogBuffer] = None,
    ):
        self.session = session
        self.scheduler = scheduler or TaskScheduler(notify=session.notify)
        self.log_buffer = log_buffer or LogBuffer(session.config.ui.log_max_lines)
        self.status_text = "Ready"
        self.selected_index = -1

    @classmethod
    def for_reaper(cls, api: Any, config: Optional[Config] = None) -> "LinkerApp":
        """Build an app wired to REAPER, WAAPI and Perforce."""
        from wwise_linker.providers import ReaperHost, WaapiClient, create_version_control

        config = config or Config()
        host = ReaperHost(api, config.render)
        session = Session(
            database=WaapiClient(timeout=config.waapi.timeout_seconds),
            host=host,
            version_control=create_version_control(config.perforce),
            config=config,
            notify=host.show_message,
        )
        return cls(session)

    def attach_log(self) -> None:
        """Route user-facing log lines into this app's log buffer."""
        set_ui_buffer(self.log_buffer)

    # region Connection

    @property
    def connected(self) -> bool:
        return self.session.database.is_connected

    @property
    def connection_label(self) -> str:
        return "Connected" if self.connected else "Disconnected"

    def connect(self) -> bool:
        waapi = self.session.config.waapi
        return self.session.database.connect(waapi.host, waapi.port)

    def disconnect(self) -> None:
        self.session.database.disconnect()

    def retry_connection(self, port_text: str) -> bool:
        """Reconnect, optionally on a new port typed by the user."""
        try:
            port = int(str(port_text).strip())
        except ValueError:
            port = -1
        if not is_valid_port(port):
            self.session.notify("Error", "Invalid port, enter a number between 1 and 65535")
            return False

        self.disconnect()
        self.session.config.waapi.port = port
        return self.connect()

    # endregion

    # region Tasks

    def start_import(self) -> bool:
        if not self.scheduler.is_running and not self.connected:
            self.session.notify("Not connected", "Connect to Wwise first")
            return False
        started = self.scheduler.start(TaskKind.IMPORT, self._import_flow())
        if started:
            self.status_text = "Importing from Wwise..."
        return started

    def start_render(self) -> bool:
        started = self.scheduler.start(TaskKind.RENDER, self._render_flow())
        if started:
            self.status_text = "Rendering..."
        return started

    def _import_flow(self):
        sources = QueryResolver(self.session.database).resolve_selection()
        if not sources:
            raise NothingToDoError(
                "No audio source files found. Select objects containing audio sources in Wwise."
            )
        report = yield from ImportTask(self.session).run(sources)
        self.status_text = f"Import complete, {self.session.registry.count()} files in list"
        return report

    def _render_flow(self):
        selection = self.session.host.selected_items()
        report = yield from RenderTask(self.session).run(selection)
        self.status_text = "Render complete"
        return report

    def tick(self) -> bool:
        """Advance the running task by one step. Call once per UI frame."""
        running = self.scheduler.tick()
        if not running and self.scheduler.last_error is not None:
            self.status_text = self.scheduler.status_text
        return running

    # endregion

    # region Imported sources list

    def select_all_imported_items(self) -> int:
        items = [record.timeline_item_ref for record in self.session.registry.live_records()]
        self.session.host.set_selection(items)
        self.status_text = f"Selected {len(items)} items"
        return len(items)

    def select_record(self, index: int) -> bool:
        """Select the timeline item of one listed record, if it still exists."""
        registry = self.session.registry
        if not 0 <= index < registry.count():
            return False
        self.selected_index = index
        record = registry[index]
        if not registry.is_live(record):
            logger.debug(f"Item of {record.name} no longer exists")
            return False
        self.session.host.set_selection([record.timeline_item_ref])
        return True

    def clear_list(self) -> None:
        self.session.registry.clear()
        self.selected_index = -1
        self.status_text = "List cleared"

    def clear_log(self) -> None:
        self.log_buffer.clear()

    # endregion

    def snapshot(self) -> AppSnapshot:
        registry = self.session.registry
        rows = [
            RecordRow(
                index=i,
                name=record.name,
                original_file_path=record.original_file_path,
                live=registry.is_live(record),
            )
            for i, record in enumerate(registry.all())
        ]
        return AppSnapshot(
            status_text=self.status_text,
            connected=self.connected,
            connection_label=self.connection_label,
            running=self.scheduler.is_running,
            progress_fraction=self.scheduler.progress_fraction,
            progress_text=self.scheduler.status_text,
            records=rows,
            log_lines=self.log_buffer.lines(),
        )

    def shutdown(self) -> None:
        """Window closed: abandon any running task and disconnect."""
        if self.scheduler.is_running:
            log("Window closed while a task was running; task abandoned", level="warning")
        self.scheduler.abandon()
        self.disconnect()

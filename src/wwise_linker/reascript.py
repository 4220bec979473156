"""
Drive the linker from ReaScript actions.

REAPER keeps one Python interpreter for all ReaScripts of a session, so the
app (connection, imported sources list, import counter) is created by the
first action and shared by every later one. Import and render are deferred
tasks: REAPER calls the deferred function once per UI cycle, which is the
scheduler's tick. The other actions run at once. New log lines are echoed to
the REAPER console so the user can follow progress without a dedicated window.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from wwise_linker.app import LinkerApp
from wwise_linker.core.config import Config, load_config
from wwise_linker.core.output import LogBuffer, log, setup_loguru

TASK_ACTIONS = ("import", "render")
COMMAND_ACTIONS = (
    "show_list",
    "select_all",
    "select_item",
    "clear_list",
    "clear_log",
    "retry_connection",
    "disconnect",
)
ACTIONS = TASK_ACTIONS + COMMAND_ACTIONS

DIALOG_TITLE = "Wwise Linker"


class ReaperConsole:
    """Echoes new lines of a log buffer to the REAPER console."""

    def __init__(self, api: Any, buffer: LogBuffer):
        self.api = api
        self.buffer = buffer
        self.cursor = buffer.cursor

    def flush(self) -> None:
        lines, self.cursor = self.buffer.lines_since(self.cursor)
        if lines:
            self.api.RPR_ShowConsoleMsg("\n".join(lines) + "\n")

    def clear(self) -> None:
        self.cursor = self.buffer.cursor
        self.api.RPR_ClearConsole()


@dataclass
class ScriptContext:
    """State shared by all actions of one REAPER session."""

    app: LinkerApp
    console: ReaperConsole


_context: Optional[ScriptContext] = None


def configure_logging(config: Config) -> None:
    log_file = Path(config.logging.log_file) if config.logging.log_file else None
    setup_loguru(
        log_file,
        level=config.logging.level,
        max_file_size_mb=config.logging.max_file_size_mb,
        backup_count=config.logging.backup_count,
        console_output=config.logging.console_output,
    )


def get_context(api: Any) -> ScriptContext:
    """Return the session's context, creating it on the first action."""
    global _context
    if _context is None:
        config = load_config()
        configure_logging(config)
        app = LinkerApp.for_reaper(api, config)
        app.attach_log()
        _context = ScriptContext(app=app, console=ReaperConsole(api, app.log_buffer))
        logger.info("Wwise Linker session started")
    return _context


class ReaScriptRunner:
    """Runs one action inside REAPER; tasks advance one step per defer cycle."""

    def __init__(self, api: Any, action: str):
        if action not in ACTIONS:
            raise ValueError(f"Unknown action {action!r}, expected one of {ACTIONS}")
        self.api = api
        self.action = action
        context = get_context(api)
        self.app = context.app
        self.console = context.console

    def start(self) -> bool:
        """Run the action. Returns True if a task was started and needs deferring."""
        if self.action == "import":
            if not self.app.connected:
                self.app.connect()
            started = self.app.start_import()
        elif self.action == "render":
            started = self.app.start_render()
        else:
            getattr(self, f"_{self.action}")()
            started = False
        self.console.flush()
        if not started:
            self.finish()
        return started

    def step(self) -> bool:
        """One defer cycle. Returns True while the script should defer again."""
        running = self.app.tick()
        self.console.flush()
        if not running:
            self.finish()
        return running

    def finish(self) -> None:
        self.console.flush()
        logger.info(f"ReaScript {self.action} finished: {self.app.status_text}")

    def _prompt(self, caption: str, default: str) -> Optional[str]:
        """Ask for one value. Returns None when the dialog is cancelled."""
        result = self.api.RPR_GetUserInputs(DIALOG_TITLE, 1, caption, default, 64)
        if not result[0]:
            return None
        return result[4]

    def _show_list(self) -> None:
        snapshot = self.app.snapshot()
        log(f"=== Wwise Linker: {snapshot.connection_label}, {snapshot.status_text} ===")
        if snapshot.running:
            log(f"{snapshot.progress_text} ({snapshot.progress_fraction:.0%})")
        if not snapshot.records:
            log("No imported audio sources")
        for row in snapshot.records:
            marker = "" if row.live else " (item deleted)"
            log(f"{row.index + 1:3d}. {row.name}{marker}  {row.original_file_path}")

    def _select_all(self) -> None:
        self.app.select_all_imported_items()
        log(self.app.status_text)

    def _select_item(self) -> None:
        text = self._prompt("List number", "1")
        if text is None:
            return
        try:
            index = int(text.strip()) - 1
        except ValueError:
            log(f"Not a list number: {text!r}", level="warning")
            return
        if self.app.select_record(index):
            log(f"Selected {self.app.session.registry[index].name}")
        else:
            log(f"List entry {index + 1} has no item in the project", level="warning")

    def _clear_list(self) -> None:
        self.app.clear_list()
        log(self.app.status_text)

    def _clear_log(self) -> None:
        self.app.clear_log()
        self.console.clear()

    def _retry_connection(self) -> None:
        text = self._prompt("WAAPI port", str(self.app.session.config.waapi.port))
        if text is None:
            return
        self.app.retry_connection(text)
        log(f"Wwise: {self.app.connection_label}")

    def _disconnect(self) -> None:
        self.app.shutdown()
        log("Disconnected from Wwise")

"""
Unified output system using Loguru.
User-facing messages go to the log file and, depending on mode, to the
in-memory log buffer shown by the host UI or to stdout.
"""

import sys
import threading
from collections import deque
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from loguru import logger

from .config import get_data_dir


class LogBuffer:
    """Bounded buffer of timestamped log lines for display.

    Multi-line messages are split so every entry is a single line. When the
    buffer is full the oldest lines are dropped.
    """

    def __init__(self, max_lines: int = 500, clock: Optional[Callable[[], datetime]] = None):
        self.max_lines = max_lines
        self._lines: deque[str] = deque(maxlen=max_lines)
        self._clock = clock or datetime.now
        self._lock = threading.Lock()
        # Set whenever lines are appended; the UI clears it after scrolling
        self.scroll_to_bottom = False
        self._total_appended = 0

    def append(self, message: str) -> None:
        timestamp = self._clock().strftime("%H:%M:%S")
        with self._lock:
            for line in message.splitlines():
                if line:
                    self._lines.append(f"[{timestamp}] {line}")
                    self._total_appended += 1
            self.scroll_to_bottom = True

    def clear(self) -> None:
        with self._lock:
            self._lines.clear()

    def lines(self) -> List[str]:
        with self._lock:
            return list(self._lines)

    @property
    def cursor(self) -> int:
        """Position after the newest line, for use with lines_since()."""
        with self._lock:
            return self._total_appended

    def lines_since(self, cursor: int) -> tuple[List[str], int]:
        """Return lines appended after ``cursor`` and the new cursor.

        Lines already dropped from the buffer are skipped.
        """
        with self._lock:
            total = self._total_appended
            new_count = min(total - cursor, len(self._lines))
            if new_count <= 0:
                return [], total
            return list(self._lines)[-new_count:], total

    def __len__(self) -> int:
        return len(self._lines)


# UI mode tracking (set when a host UI owns the display)
_ui_buffer: Optional[LogBuffer] = None
_ui_mode_lock = threading.Lock()


def get_log_file_path() -> Path:
    """Get the path to the default log file."""
    return get_data_dir() / "wwise-linker.log"


def setup_loguru(
    log_file: Optional[Path] = None,
    level: str = "INFO",
    max_file_size_mb: int = 10,
    backup_count: int = 5,
    console_output: bool = False,
) -> None:
    """
    Configure loguru for file logging.

    Args:
        log_file: Path to log file (default: ~/.local/share/wwise-linker/wwise-linker.log)
        level: Minimum level for file logging (DEBUG, INFO, WARNING, ERROR)
        max_file_size_mb: Rotate the file once it grows past this size
        backup_count: Number of rotated files to keep
        console_output: Also write records to stderr
    """
    log_file = log_file or get_log_file_path()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger.remove()

    logger.add(
        log_file,
        rotation=f"{max_file_size_mb} MB",
        retention=backup_count,
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
        enqueue=False,
    )

    if console_output:
        logger.add(sys.stderr, level=level, format="{level}: {message}")

    logger.info(f"Loguru initialized: {log_file} (level={level})")


def set_ui_buffer(buffer: LogBuffer) -> None:
    """Enable UI mode - log() appends to ``buffer`` instead of printing."""
    global _ui_buffer
    with _ui_mode_lock:
        _ui_buffer = buffer
        logger.debug("UI mode enabled - log() will route through the log buffer")


def clear_ui_buffer() -> None:
    """Disable UI mode - restores stdout printing."""
    global _ui_buffer
    with _ui_mode_lock:
        _ui_buffer = None
        logger.debug("UI mode disabled - log() will print to stdout")


def log(message: str, level: str = "info") -> None:
    """
    Unified logging: writes to file AND to the active display.

    Args:
        message: User-facing message
        level: Log level (debug, info, warning, error)
    """
    log_func = getattr(logger, level)
    log_func(message)

    with _ui_mode_lock:
        if _ui_buffer is not None:
            _ui_buffer.append(message)
        elif level != "debug":
            print(message)

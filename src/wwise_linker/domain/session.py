"""
Linker session - the state shared by the import and render tasks.

One session exists per host window. It owns the registry and the
collaborator handles; tasks receive it by reference.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from loguru import logger

from wwise_linker.core.config import Config

from .interfaces import AssetDatabaseClient, TimelineHost, VersionControlClient
from .registry import SourceRegistry

# Called with (title, message) for modal notices
NoticeCallback = Callable[[str, str], None]


def log_notice(title: str, message: str) -> None:
    logger.warning(f"{title}: {message}")


@dataclass
class Session:
    """Everything a task needs, passed explicitly instead of via globals."""

    database: AssetDatabaseClient
    host: TimelineHost
    version_control: VersionControlClient
    config: Config = field(default_factory=Config)
    registry: Optional[SourceRegistry] = None
    notify: NoticeCallback = log_notice
    import_counter: int = 0

    def __post_init__(self) -> None:
        if self.registry is None:
            self.registry = SourceRegistry(self.host.is_item_valid)

    def next_container_name(self) -> str:
        """Name for the track of the next import run."""
        self.import_counter += 1
        return self.config.import_.track_name_template.format(n=self.import_counter)


@contextmanager
def undo_group(host: TimelineHost, name: str) -> Iterator[None]:
    """Wrap host edits in one undo step, closed even if the task is abandoned."""
    host.begin_undo_group(name)
    try:
        yield
    finally:
        host.end_undo_group()

"""Linker domain - the synchronization and task engine.

This domain handles:
- Resolving the Wwise selection into audio file sources
- Tracking imported sources and their timeline items
- Importing sources into the timeline as local copies
- Rendering edited items back over the originals
- Scheduling import/render as cooperative, progress-reporting tasks
"""

from .exceptions import (
    AssetDatabaseConnectionError,
    LinkerError,
    NothingToDoError,
    PreconditionError,
    QueryError,
    TaskAlreadyRunningError,
)
from .import_task import ImportTask
from .models import (
    ImportReport,
    RenderReport,
    SourceDescriptor,
    SourceRecord,
    TaskKind,
    TaskProgress,
    TaskState,
)
from .query import QueryResolver
from .registry import SourceRegistry
from .render_task import RenderTask, group_by_directory
from .scheduler import TaskScheduler
from .session import Session

__all__ = [
    "AssetDatabaseConnectionError",
    "LinkerError",
    "NothingToDoError",
    "PreconditionError",
    "QueryError",
    "TaskAlreadyRunningError",
    "ImportTask",
    "ImportReport",
    "RenderReport",
    "SourceDescriptor",
    "SourceRecord",
    "TaskKind",
    "TaskProgress",
    "TaskState",
    "QueryResolver",
    "SourceRegistry",
    "RenderTask",
    "group_by_directory",
    "TaskScheduler",
    "Session",
]

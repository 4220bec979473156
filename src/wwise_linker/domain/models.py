"""
Linker domain models.

Contains the data structures passed between the query, import, render and
scheduling steps.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PureWindowsPath, PurePosixPath
from typing import Any, List, NamedTuple

# Opaque handle to an item owned by the timeline host
ItemRef = Any


def _pure_path(path: str):
    # Wwise reports Windows paths; accept both separators regardless of platform
    if "\\" in path:
        return PureWindowsPath(path)
    return PurePosixPath(path)


def base_name(path: str) -> str:
    """Return the file name part of a Windows or POSIX path."""
    return _pure_path(path).name


def parent_directory(path: str) -> str:
    """Return the parent directory of a Windows or POSIX path."""
    return str(_pure_path(path).parent)


class SourceDescriptor(NamedTuple):
    """An audio file source resolved from the Wwise selection."""

    id: str  # Wwise object GUID
    name: str
    middleware_path: str  # Path in the Wwise hierarchy (\Actor-Mixer Hierarchy\...)
    original_file_path: str  # sound:originalWavFilePath


class SourceRecord(NamedTuple):
    """A source imported into the timeline.

    ``timeline_item_ref`` is a handle to a host-owned item. The host may
    delete the item at any time, so its validity is checked by the registry
    on every lookup.
    """

    id: str
    name: str
    middleware_path: str
    original_file_path: str
    local_file_path: str
    timeline_item_ref: Any

    @classmethod
    def from_descriptor(
        cls, descriptor: SourceDescriptor, local_file_path: str, item: ItemRef
    ) -> "SourceRecord":
        return cls(
            id=descriptor.id,
            name=descriptor.name,
            middleware_path=descriptor.middleware_path,
            original_file_path=descriptor.original_file_path,
            local_file_path=local_file_path,
            timeline_item_ref=item,
        )

    @property
    def output_directory(self) -> str:
        return parent_directory(self.original_file_path)


class TaskKind(str, Enum):
    NONE = "none"
    IMPORT = "import"
    RENDER = "render"


class TaskProgress(NamedTuple):
    """Value yielded by a task at each suspension point."""

    fraction: float
    status: str


@dataclass
class ItemFailure:
    """A single item that could not be imported or rendered."""

    name: str
    reason: str


@dataclass
class TaskReport:
    """Outcome counters of a finished task."""

    succeeded: int = 0
    failed: int = 0
    failures: List[ItemFailure] = field(default_factory=list)

    def record_success(self) -> None:
        self.succeeded += 1

    def record_failure(self, name: str, reason: str) -> None:
        self.failed += 1
        self.failures.append(ItemFailure(name=name, reason=reason))

    @property
    def total(self) -> int:
        return self.succeeded + self.failed


@dataclass
class ImportReport(TaskReport):
    """Summary of an import run."""


@dataclass
class RenderReport(TaskReport):
    """Summary of a render run."""

    groups: int = 0
    checkouts: int = 0


@dataclass
class TaskState:
    """Scheduler-owned state of the active task."""

    kind: TaskKind = TaskKind.NONE
    progress_fraction: float = 0.0
    status_text: str = ""
    continuation: Any = None  # Suspended generator

    @property
    def is_idle(self) -> bool:
        return self.kind is TaskKind.NONE

    def apply(self, progress: TaskProgress) -> None:
        self.progress_fraction = min(max(progress.fraction, 0.0), 1.0)
        self.status_text = progress.status

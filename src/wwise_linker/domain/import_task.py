"""
Import Wwise sources into the timeline.

Each original file is copied into the project's staging folder and the
local copy is placed on a fresh track. The task is a generator that yields
a TaskProgress before every file so the scheduler can hand control back to
the host between files.
"""

import os
import shutil
from pathlib import Path
from typing import Any, Generator, List, Optional

from loguru import logger

from wwise_linker.core.output import log

from .exceptions import PreconditionError
from .models import (
    ImportReport,
    SourceDescriptor,
    SourceRecord,
    TaskProgress,
    base_name,
)
from .session import Session, undo_group

UNDO_NAME = "Import Wwise Audio Sources"


def is_readable_file(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.R_OK)


def copy_file(src: str, dst: str) -> None:
    """Copy ``src`` over ``dst``, replacing any existing file.

    Raises:
        OSError: If the copy fails
    """
    try:
        os.remove(dst)
    except FileNotFoundError:
        pass
    shutil.copyfile(src, dst)


def resolve_staging_directory(session: Session) -> Path:
    """Return (and create) the folder receiving local working copies.

    Raises:
        PreconditionError: The project is unsaved or the folder cannot be created
    """
    project_dir = session.host.current_project_directory()
    if not project_dir:
        raise PreconditionError("Cannot determine the REAPER project path, save the project first.")

    staging = Path(project_dir) / session.config.import_.staging_subdir
    try:
        staging.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PreconditionError(f"Cannot create staging directory {staging}: {e}") from e
    return staging


class ImportTask:
    """Copies sources locally, places them on a new track and records them."""

    def __init__(self, session: Session):
        self.session = session

    def run(
        self, descriptors: List[SourceDescriptor]
    ) -> Generator[TaskProgress, None, ImportReport]:
        """Import ``descriptors`` in order.

        Raises:
            PreconditionError: No staging directory (before any file is touched)
        """
        host = self.session.host
        staging = resolve_staging_directory(self.session)
        gap = self.session.config.import_.gap_seconds
        total = len(descriptors)
        report = ImportReport()

        log("=== Importing audio sources from Wwise ===")
        log(f"Found {total} audio source files")
        log(f"Media directory: {staging}")

        with undo_group(host, UNDO_NAME):
            container = host.create_container(self.session.next_container_name())
            position = 0.0

            for index, descriptor in enumerate(descriptors, start=1):
                yield TaskProgress(
                    (index - 1) / total, f"Importing ({index}/{total}) {descriptor.name}"
                )

                duration = self._import_one(descriptor, staging, container, position, report)
                if duration is not None:
                    position += duration + gap

        log(f"=== Import finished: {report.succeeded} succeeded, {report.failed} failed ===")
        return report

    def _import_one(
        self,
        descriptor: SourceDescriptor,
        staging: Path,
        container: Any,
        position: float,
        report: ImportReport,
    ) -> Optional[float]:
        """Stage and place a single source.

        Returns:
            Duration of the placed clip, or None when the item failed
        """
        original = descriptor.original_file_path
        file_name = base_name(original)
        local_path = str(staging / file_name)

        if not is_readable_file(original):
            report.record_failure(descriptor.name, "source missing")
            log(f"[FAIL] Source file missing: {original}", level="warning")
            return None

        try:
            copy_file(original, local_path)
        except OSError as e:
            report.record_failure(descriptor.name, "copy failed")
            log(f"[FAIL] Cannot copy file: {original} ({e})", level="warning")
            return None
        log(f"Copied: {file_name} -> {staging.name}")

        placement = self.session.host.place_media(container, local_path, position)
        if placement is None:
            report.record_failure(descriptor.name, "placement failed")
            log(f"[FAIL] Cannot import: {local_path}", level="warning")
            return None

        item, duration = placement
        self.session.registry.insert(SourceRecord.from_descriptor(descriptor, local_path, item))
        report.record_success()
        logger.debug(f"Placed {file_name} at {position:.3f}s ({duration:.3f}s)")
        log(f"[OK] {descriptor.name}")
        return duration

"""
Render timeline items back over their Wwise originals.

Selected items are mapped to registry records and grouped by the directory
of their original file, because the host renders to one directory at a
time. For each group the files are checked out, the group is rendered and
every expected output is checked for presence.
"""

import os
from typing import Dict, Generator, List

from wwise_linker.core.output import log

from .exceptions import NothingToDoError
from .models import ItemRef, RenderReport, SourceRecord, TaskProgress, base_name
from .registry import SourceRegistry
from .session import Session, undo_group

UNDO_NAME = "Render to Wwise"


def resolve_render_set(registry: SourceRegistry, selection: List[ItemRef]) -> List[SourceRecord]:
    """Map selected items to records, silently dropping unknown items."""
    records = []
    for item in selection:
        record = registry.find_by_timeline_ref(item)
        if record is not None:
            records.append(record)
    return records


def group_by_directory(records: List[SourceRecord]) -> Dict[str, List[SourceRecord]]:
    """Group records by the parent directory of their original file."""
    groups: Dict[str, List[SourceRecord]] = {}
    for record in records:
        groups.setdefault(record.output_directory, []).append(record)
    return groups


def directory_label(directory: str) -> str:
    return base_name(directory) or directory


class RenderTask:
    """Checks out, renders and verifies the selected imported items."""

    def __init__(self, session: Session):
        self.session = session

    def run(self, host_selection: List[ItemRef]) -> Generator[TaskProgress, None, RenderReport]:
        """Render ``host_selection`` over the original files.

        Raises:
            NothingToDoError: Nothing selected, nothing imported, or no
                selected item belongs to an import
        """
        host = self.session.host
        registry = self.session.registry
        version_control = self.session.version_control

        if not host_selection:
            raise NothingToDoError("Select the items to render first.")
        if registry.count() == 0:
            raise NothingToDoError(
                "No Wwise audio sources recorded. Run 'Import from Wwise' first."
            )

        render_set = resolve_render_set(registry, host_selection)
        if not render_set:
            raise NothingToDoError(
                "The selected items are not in the list of imported Wwise audio sources."
            )

        groups = group_by_directory(render_set)
        total = len(render_set)
        processed = 0
        report = RenderReport(groups=len(groups))

        log("=== Rendering to Wwise ===")

        with undo_group(host, UNDO_NAME):
            for directory, records in groups.items():
                label = directory_label(directory)
                yield TaskProgress(processed / total, f"Checking out {label}")

                log(f"Render directory: {directory}")
                for record in records:
                    log(f"P4 edit: {record.name}")
                    version_control.checkout(record.original_file_path)
                    report.checkouts += 1

                yield TaskProgress(processed / total, f"Rendering {label} ({len(records)} files)")

                host.set_selection([record.timeline_item_ref for record in records])
                host.render_selection_to_directory(directory)

                for record in records:
                    processed += 1
                    if os.path.exists(record.original_file_path):
                        report.record_success()
                        log(f"[OK] {record.name}")
                    else:
                        report.record_failure(record.name, "rendered file missing")
                        log(f"[FAIL] {record.name}", level="warning")

        log(f"=== Render finished: {report.succeeded} succeeded, {report.failed} failed ===")
        return report

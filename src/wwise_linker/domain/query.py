"""
Resolve the Wwise selection into audio file sources.

Each selected object is expanded to its descendants, filtered down to
AudioFileSource objects that point at an original file, and deduplicated
across the whole selection.
"""

from typing import Dict, Iterable, List

from loguru import logger

from wwise_linker.core.output import log

from .exceptions import AssetDatabaseConnectionError, QueryError
from .interfaces import AssetDatabaseClient, ObjectRow
from .models import SourceDescriptor

AUDIO_FILE_SOURCE_TYPE = "AudioFileSource"


def descriptor_from_row(row: ObjectRow) -> SourceDescriptor:
    """Build a SourceDescriptor from a descendant query row."""
    return SourceDescriptor(
        id=str(row.get("id", "")),
        name=str(row.get("name", "")),
        middleware_path=str(row.get("path", "")),
        original_file_path=str(row.get("originalFilePath") or ""),
    )


def filter_audio_sources(rows: Iterable[ObjectRow]) -> List[SourceDescriptor]:
    """Keep AudioFileSource rows that have an original file path."""
    sources = []
    for row in rows:
        if row.get("type") != AUDIO_FILE_SOURCE_TYPE:
            continue
        if not row.get("originalFilePath"):
            logger.debug(f"Skipping source without original file: {row.get('name')}")
            continue
        sources.append(descriptor_from_row(row))
    return sources


def deduplicate(groups: Iterable[List[SourceDescriptor]]) -> List[SourceDescriptor]:
    """Merge descriptor lists, keeping the first occurrence of each id."""
    seen: Dict[str, SourceDescriptor] = {}
    for group in groups:
        for descriptor in group:
            if descriptor.id not in seen:
                seen[descriptor.id] = descriptor
    return list(seen.values())


class QueryResolver:
    """Turns the current Wwise selection into a list of SourceDescriptors."""

    def __init__(self, client: AssetDatabaseClient):
        self.client = client

    def resolve_selection(self) -> List[SourceDescriptor]:
        """Resolve the selection into deduplicated audio file sources.

        Returns:
            Descriptors in selection order, each id at most once

        Raises:
            AssetDatabaseConnectionError: WAAPI is not connected
            QueryError: The selection query itself failed
        """
        if not self.client.is_connected:
            raise AssetDatabaseConnectionError("WAAPI is not connected, connect to Wwise first")

        selected = self.client.query_selection()
        if not selected:
            log("Nothing is selected in Wwise")
            return []

        log(f"Found {len(selected)} selected objects")
        for obj in selected:
            log(f" - {obj.get('name')} [{obj.get('id')}]")

        groups = []
        for obj in selected:
            log(f"Querying object: {obj.get('name')}")
            try:
                rows = self.client.query_descendants(str(obj.get("id")))
            except QueryError as e:
                log(f"Failed to query descendants of {obj.get('name')}: {e}", level="warning")
                continue

            log(f"Found {len(rows)} descendants")
            sources = filter_audio_sources(rows)
            for source in sources:
                log(f"[AudioFileSource] {source.name}")
            groups.append(sources)

        return deduplicate(groups)

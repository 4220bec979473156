"""
In-memory ledger of imported sources.

Records live for the session only. Duplicate ids are accepted: importing
the same Wwise source twice yields two records pointing at two items.
"""

from typing import Callable, Iterator, List, Optional

from .models import ItemRef, SourceRecord


def _always_valid(item: ItemRef) -> bool:
    return item is not None


class SourceRegistry:
    """Ordered collection of SourceRecords with timeline item lookups.

    ``is_item_valid`` is asked on every traversal whether an item still
    exists in the host; records pointing at deleted items are skipped.
    """

    def __init__(self, is_item_valid: Optional[Callable[[ItemRef], bool]] = None):
        self._records: List[SourceRecord] = []
        self._is_item_valid = is_item_valid or _always_valid

    def insert(self, record: SourceRecord) -> None:
        self._records.append(record)

    def clear(self) -> None:
        self._records.clear()

    def find_by_timeline_ref(self, item: ItemRef) -> Optional[SourceRecord]:
        """Return the first record placed as ``item``, if the item is still live."""
        if item is None or not self._is_item_valid(item):
            return None
        for record in self._records:
            if record.timeline_item_ref == item:
                return record
        return None

    def live_records(self) -> List[SourceRecord]:
        """Records whose timeline item still exists."""
        return [r for r in self._records if self._is_item_valid(r.timeline_item_ref)]

    def is_live(self, record: SourceRecord) -> bool:
        return self._is_item_valid(record.timeline_item_ref)

    def all(self) -> List[SourceRecord]:
        """All records in insertion order."""
        return list(self._records)

    def count(self) -> int:
        return len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[SourceRecord]:
        return iter(list(self._records))

    def __getitem__(self, index: int) -> SourceRecord:
        return self._records[index]

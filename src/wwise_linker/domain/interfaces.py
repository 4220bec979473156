"""
Collaborator interfaces for the linker engine.

The engine never talks to Wwise, REAPER or Perforce directly. It depends on
the three protocols below; providers/ contains the real adapters and the
tests use in-memory fakes.
"""

from typing import Any, Dict, List, Optional, Protocol, Tuple

from .models import ItemRef

# A row returned by query_descendants:
# {"id", "name", "type", "path", "originalFilePath"}
ObjectRow = Dict[str, Any]


class AssetDatabaseClient(Protocol):
    """Connection to the Wwise authoring database."""

    @property
    def is_connected(self) -> bool:
        ...

    def connect(self, host: str, port: int) -> bool:
        """Open the connection.

        Returns:
            True when the authoring application answered
        """
        ...

    def disconnect(self) -> None:
        ...

    def query_selection(self) -> List[ObjectRow]:
        """Objects currently selected in Wwise ({"id", "name", "path"}).

        Raises:
            AssetDatabaseConnectionError: Not connected or transport failure
            QueryError: Wwise returned an error status
        """
        ...

    def query_descendants(self, object_id: str) -> List[ObjectRow]:
        """All descendants of an object, with type and original file path.

        Raises:
            AssetDatabaseConnectionError: Not connected or transport failure
            QueryError: Wwise returned an error status
        """
        ...


class TimelineHost(Protocol):
    """The timeline editor owning tracks, items and rendering."""

    def current_project_directory(self) -> Optional[str]:
        """Directory of the saved project, or None for an unsaved project."""
        ...

    def create_container(self, name: str) -> Any:
        """Append a new track named ``name`` and return it."""
        ...

    def place_media(
        self, container: Any, file_path: str, position: float
    ) -> Optional[Tuple[ItemRef, float]]:
        """Place ``file_path`` on ``container`` at ``position`` seconds.

        Returns:
            (item, duration in seconds), or None if the media could not be placed
        """
        ...

    def selected_items(self) -> List[ItemRef]:
        ...

    def set_selection(self, items: List[ItemRef]) -> None:
        """Select exactly ``items``, deselecting everything else."""
        ...

    def is_item_valid(self, item: ItemRef) -> bool:
        """False once the item has been deleted in the host."""
        ...

    def render_selection_to_directory(self, directory: str) -> None:
        """Render the selected items into ``directory``. Blocks until done."""
        ...

    def begin_undo_group(self, name: str) -> None:
        ...

    def end_undo_group(self) -> None:
        ...


class VersionControlClient(Protocol):
    """Version control able to open a tracked file for edit."""

    def checkout(self, file_path: str) -> None:
        """Request a checkout. Fire-and-forget: no outcome is reported."""
        ...

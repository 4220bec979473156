"""In-memory fakes of Wwise, REAPER and Perforce shared by the tests."""

import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from wwise_linker.core.config import Config
from wwise_linker.domain.exceptions import AssetDatabaseConnectionError, QueryError
from wwise_linker.domain.session import Session


class FakeAssetDatabase:
    """Answers selection/descendant queries from dictionaries."""

    def __init__(
        self,
        selection: Optional[List[Dict[str, Any]]] = None,
        descendants: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        connected: bool = True,
    ):
        self.selection = selection or []
        self.descendants = descendants or {}
        self.failing_objects: Dict[str, str] = {}
        self.connected = connected
        self.descendant_calls: List[str] = []
        self.connect_calls: List[tuple] = []

    @property
    def is_connected(self) -> bool:
        return self.connected

    def connect(self, host: str, port: int) -> bool:
        self.connect_calls.append((host, port))
        self.connected = True
        return True

    def disconnect(self) -> None:
        self.connected = False

    def query_selection(self) -> List[Dict[str, Any]]:
        if not self.connected:
            raise AssetDatabaseConnectionError("WAAPI is not connected")
        return list(self.selection)

    def query_descendants(self, object_id: str) -> List[Dict[str, Any]]:
        if not self.connected:
            raise AssetDatabaseConnectionError("WAAPI is not connected")
        self.descendant_calls.append(object_id)
        if object_id in self.failing_objects:
            raise QueryError(self.failing_objects[object_id])
        return list(self.descendants.get(object_id, []))


class FakeItem:
    """Stands in for a REAPER MediaItem pointer."""

    def __init__(self, track: str, path: str, position: float, duration: float):
        self.track = track
        self.path = path
        self.position = position
        self.duration = duration

    def __repr__(self) -> str:
        return f"FakeItem({Path(self.path).name}@{self.position:.2f})"


class FakeTimelineHost:
    """Timeline with tracks, items, selection and a file-writing renderer."""

    def __init__(self, project_dir: Optional[Path] = None, clip_duration: float = 2.0):
        self.project_dir = project_dir
        self.clip_duration = clip_duration
        self.containers: List[str] = []
        self.items: List[FakeItem] = []
        self.deleted: List[FakeItem] = []
        self.selection: List[FakeItem] = []
        self.render_calls: List[tuple] = []
        self.undo_log: List[str] = []
        self.unplaceable: set = set()
        self.render_writes = True
        self.skip_render_names: set = set()

    def current_project_directory(self) -> Optional[str]:
        return str(self.project_dir) if self.project_dir else None

    def create_container(self, name: str) -> str:
        self.containers.append(name)
        return name

    def place_media(self, container: str, file_path: str, position: float):
        if Path(file_path).name in self.unplaceable:
            return None
        item = FakeItem(container, file_path, position, self.clip_duration)
        self.items.append(item)
        return item, self.clip_duration

    def selected_items(self) -> List[FakeItem]:
        return list(self.selection)

    def set_selection(self, items: List[FakeItem]) -> None:
        self.selection = list(items)

    def is_item_valid(self, item: Any) -> bool:
        return item in self.items

    def delete_item(self, item: FakeItem) -> None:
        self.items.remove(item)
        self.deleted.append(item)

    def render_selection_to_directory(self, directory: str) -> None:
        self.render_calls.append((directory, list(self.selection)))
        if not self.render_writes:
            return
        for item in self.selection:
            name = Path(item.path).name
            if name in self.skip_render_names:
                continue
            shutil.copyfile(item.path, Path(directory) / name)

    def begin_undo_group(self, name: str) -> None:
        self.undo_log.append(f"begin:{name}")

    def end_undo_group(self) -> None:
        self.undo_log.append("end")


class FakeVersionControl:
    def __init__(self):
        self.checkouts: List[str] = []

    def checkout(self, file_path: str) -> None:
        self.checkouts.append(file_path)


def source_row(object_id: str, original: Optional[str], name: Optional[str] = None,
               obj_type: str = "AudioFileSource") -> Dict[str, Any]:
    """Build a descendant row as returned by the asset database."""
    return {
        "id": object_id,
        "name": name or object_id,
        "type": obj_type,
        "path": f"\\Actor-Mixer Hierarchy\\Default Work Unit\\{name or object_id}",
        "originalFilePath": original,
    }


@pytest.fixture
def originals(tmp_path: Path) -> Path:
    """Folder standing in for the Wwise Originals/SFX directory."""
    folder = tmp_path / "Originals" / "SFX"
    folder.mkdir(parents=True)
    return folder


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    folder = tmp_path / "project"
    folder.mkdir()
    return folder


@pytest.fixture
def host(project_dir: Path) -> FakeTimelineHost:
    return FakeTimelineHost(project_dir)


@pytest.fixture
def database() -> FakeAssetDatabase:
    return FakeAssetDatabase()


@pytest.fixture
def version_control() -> FakeVersionControl:
    return FakeVersionControl()


@pytest.fixture
def notices() -> List[tuple]:
    return []


@pytest.fixture
def session(database, host, version_control, notices) -> Session:
    return Session(
        database=database,
        host=host,
        version_control=version_control,
        config=Config(),
        notify=lambda title, message: notices.append((title, message)),
    )


def drain(generator):
    """Run a task generator to the end, returning (progress list, report)."""
    progress = []
    while True:
        try:
            progress.append(next(generator))
        except StopIteration as stop:
            return progress, stop.value


@pytest.fixture(name="drain")
def drain_fixture():
    return drain


@pytest.fixture(name="source_row")
def source_row_fixture():
    return source_row

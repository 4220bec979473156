"""
REAPER timeline host adapter.

Wraps the ReaScript Python API. The ``RPR_*`` functions are only available
inside REAPER, so the entry script passes its ``reaper_python`` module in as
``api``. Functions with output parameters return tuples in ReaScript, hence
the index juggling below.
"""

import ntpath
import os
from typing import Any, List, Optional, Tuple

from loguru import logger

from wwise_linker.core.config import RenderConfig
from wwise_linker.domain.models import base_name

PROJECT_PATH_BUFFER = 4096
_NULL_SUFFIX = "0x0000000000000000"


def is_null_pointer(ptr: Any) -> bool:
    """ReaScript returns null pointers as strings like '(PCM_source*)0x0000000000000000'."""
    if not ptr:
        return True
    return isinstance(ptr, str) and ptr.endswith(_NULL_SUFFIX)


class ReaperHost:
    """TimelineHost implementation over the ReaScript API."""

    def __init__(self, api: Any, render_config: Optional[RenderConfig] = None):
        self.api = api
        self.render_config = render_config or RenderConfig()
        self._undo_names: List[str] = []

    def current_project_directory(self) -> Optional[str]:
        result = self.api.RPR_EnumProjects(-1, "", PROJECT_PATH_BUFFER)
        project_path = result[2] if isinstance(result, tuple) else ""
        if not project_path:
            return None
        directory = ntpath.dirname(project_path) if "\\" in project_path else os.path.dirname(project_path)
        return directory or None

    def create_container(self, name: str) -> Any:
        index = self.api.RPR_CountTracks(0)
        self.api.RPR_InsertTrackAtIndex(index, True)
        track = self.api.RPR_GetTrack(0, index)
        self.api.RPR_GetSetMediaTrackInfo_String(track, "P_NAME", name, True)
        logger.debug(f"Created track {name!r} at index {index}")
        return track

    def place_media(
        self, container: Any, file_path: str, position: float
    ) -> Optional[Tuple[Any, float]]:
        source = self.api.RPR_PCM_Source_CreateFromFile(file_path)
        if is_null_pointer(source):
            logger.warning(f"REAPER could not open {file_path}")
            return None

        item = self.api.RPR_AddMediaItemToTrack(container)
        take = self.api.RPR_AddTakeToMediaItem(item)
        self.api.RPR_SetMediaItemTake_Source(take, source)

        length_result = self.api.RPR_GetMediaSourceLength(source, False)
        length = float(length_result[0] if isinstance(length_result, tuple) else length_result)

        self.api.RPR_SetMediaItemInfo_Value(item, "D_POSITION", position)
        self.api.RPR_SetMediaItemInfo_Value(item, "D_LENGTH", length)
        # Take name drives the $item render pattern, so it must be the file name
        self.api.RPR_GetSetMediaItemTakeInfo_String(take, "P_NAME", base_name(file_path), True)
        self.api.RPR_UpdateItemInProject(item)
        return item, length

    def selected_items(self) -> List[Any]:
        count = self.api.RPR_CountSelectedMediaItems(0)
        return [self.api.RPR_GetSelectedMediaItem(0, i) for i in range(count)]

    def set_selection(self, items: List[Any]) -> None:
        self.api.RPR_SelectAllMediaItems(0, False)
        for item in items:
            self.api.RPR_SetMediaItemSelected(item, True)
        self.api.RPR_UpdateArrange()

    def is_item_valid(self, item: Any) -> bool:
        if is_null_pointer(item):
            return False
        return bool(self.api.RPR_ValidatePtr2(0, item, "MediaItem*"))

    def render_selection_to_directory(self, directory: str) -> None:
        config = self.render_config
        self.api.RPR_GetSetProjectInfo_String(0, "RENDER_PATTERN", config.render_pattern, True)
        self.api.RPR_GetSetProjectInfo(0, "RENDER_SETTINGS", config.render_settings, True)
        self.api.RPR_GetSetProjectInfo_String(0, "RENDER_FILE", directory, True)
        logger.debug(f"Rendering selection to {directory} (action {config.render_command_id})")
        self.api.RPR_Main_OnCommand(config.render_command_id, 0)

    def begin_undo_group(self, name: str) -> None:
        self._undo_names.append(name)
        self.api.RPR_Undo_BeginBlock()

    def end_undo_group(self) -> None:
        name = self._undo_names.pop() if self._undo_names else ""
        self.api.RPR_Undo_EndBlock(name, -1)
        self.api.RPR_UpdateArrange()

    def show_message(self, title: str, message: str) -> None:
        self.api.RPR_ShowMessageBox(message, title, 0)

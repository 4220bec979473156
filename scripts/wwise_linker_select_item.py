"""ReaScript: select the item of one entry of the imported sources list."""

import reaper_python

from wwise_linker.reascript import ReaScriptRunner

ReaScriptRunner(reaper_python, "select_item").start()

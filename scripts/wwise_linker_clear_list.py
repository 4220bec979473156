"""ReaScript: forget all imported sources."""

import reaper_python

from wwise_linker.reascript import ReaScriptRunner

ReaScriptRunner(reaper_python, "clear_list").start()

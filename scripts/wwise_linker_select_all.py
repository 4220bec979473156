"""ReaScript: select every imported item that still exists in the project."""

import reaper_python

from wwise_linker.reascript import ReaScriptRunner

ReaScriptRunner(reaper_python, "select_all").start()

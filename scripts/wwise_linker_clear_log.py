"""ReaScript: clear the Wwise Linker log and the REAPER console."""

import reaper_python

from wwise_linker.reascript import ReaScriptRunner

ReaScriptRunner(reaper_python, "clear_log").start()

"""ReaScript: stop any running task and disconnect from Wwise."""

import reaper_python

from wwise_linker.reascript import ReaScriptRunner

ReaScriptRunner(reaper_python, "disconnect").start()

"""ReaScript: print the connection state and the imported sources list to the console."""

import reaper_python

from wwise_linker.reascript import ReaScriptRunner

ReaScriptRunner(reaper_python, "show_list").start()

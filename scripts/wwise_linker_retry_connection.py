"""ReaScript: reconnect to Wwise, optionally on another WAAPI port."""

import reaper_python

from wwise_linker.reascript import ReaScriptRunner

ReaScriptRunner(reaper_python, "retry_connection").start()

"""ReaScript: render the selected items over their Wwise originals.

Install the wwise-linker package into the Python used by REAPER
(Options > Preferences > Plug-ins > ReaScript), then load this file as an action.
All Wwise Linker actions share one session: connection, imported list and logs.
"""

from reaper_python import *  # noqa: F401,F403

import reaper_python

from wwise_linker.reascript import ReaScriptRunner

runner = ReaScriptRunner(reaper_python, "render")


def wwise_linker_loop():
    if runner.step():
        RPR_defer("wwise_linker_loop()")  # noqa: F405


if runner.start():
    RPR_defer("wwise_linker_loop()")  # noqa: F405

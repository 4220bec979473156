"""Adapters for the external collaborators: Wwise, REAPER and Perforce."""

from .perforce import NullVersionControl, PerforceClient, create_version_control
from .reaper import ReaperHost
from .waapi import WaapiClient

__all__ = [
    "NullVersionControl",
    "PerforceClient",
    "create_version_control",
    "ReaperHost",
    "WaapiClient",
]

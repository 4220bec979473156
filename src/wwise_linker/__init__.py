"""Wwise Linker - round-trip audio between Wwise and REAPER."""

__version__ = "1.0.0"

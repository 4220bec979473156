"""Linker-specific exceptions for error handling."""


class LinkerError(Exception):
    """Base exception for Wwise Linker operations."""

    pass


class AssetDatabaseConnectionError(LinkerError, ConnectionError):
    """Raised when WAAPI is not connected or the connection dropped."""

    pass


class QueryError(LinkerError):
    """Raised when WAAPI answers a query with an error status."""

    def __init__(self, message: str, uri: str = None):
        self.uri = uri
        super().__init__(message or "Unknown error")


class PreconditionError(LinkerError):
    """Raised when a task cannot start, before any side effect."""

    pass


class NothingToDoError(LinkerError):
    """Raised when a task has no work (empty selection, nothing imported)."""

    pass


class TaskAlreadyRunningError(LinkerError):
    """Raised when a task is started while another one is running."""

    def __init__(self, message: str = None):
        super().__init__(message or "A task is already running, please wait for it to finish.")

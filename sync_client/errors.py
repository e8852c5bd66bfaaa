from typing import Optional


class ProgressSyncError(Exception):
    """Base class for progress sync failures."""


class NotAuthenticated(ProgressSyncError):
    """A progress mutation was attempted with no signed-in user."""


class LoadFailed(ProgressSyncError):
    """Fetching remote progress failed. The engine absorbs this and starts empty."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MutationFailed(ProgressSyncError):
    """An optimistic progress update was rejected or never reached the server."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ApiError(Exception):
    """Non-2xx answer from an account or content endpoint."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

"""Domain errors for releasekit."""

from typing import Any, Optional


class ReleaseError(RuntimeError):
    """Raised when a release step cannot continue safely."""

    def __init__(self, message: str, payload: Optional[Any] = None):
        super().__init__(message)
        self.payload = payload

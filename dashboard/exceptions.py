from __future__ import annotations

from typing import Optional


class BackendError(RuntimeError):
    """Raised when the asset backend cannot satisfy a request."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class BackendAuthError(BackendError):
    """Raised when the backend rejects the session (HTTP 401)."""

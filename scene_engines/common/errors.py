"""Errors shared by the store, blob and identity adapters."""
from __future__ import annotations

from typing import Optional


class UpstreamUnavailable(RuntimeError):
    """Backend unreachable, timed out, or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedDocument(ValueError):
    """Backend answered 2xx but the body is not the JSON we asked for."""

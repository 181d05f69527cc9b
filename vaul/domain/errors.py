"""Domain-level error types for use-case and adapter mapping.

Each class pins a stable ``code`` so views and tests can branch on the kind of
failure without parsing message text.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from .ports import UseCaseError

BACKEND_UNAVAILABLE = "BACKEND_UNAVAILABLE"
VALIDATION_REJECTED = "VALIDATION_REJECTED"
NOT_FOUND = "NOT_FOUND"
CLIPBOARD_DENIED = "CLIPBOARD_DENIED"


class BackendUnavailable(UseCaseError):
    """Store could not be reached or failed while handling the request."""

    def __init__(self, message: str = "Command store unavailable.", *, meta: Optional[Dict[str, Any]] = None):
        super().__init__(BACKEND_UNAVAILABLE, message, meta=meta)


class ValidationRejected(UseCaseError):
    """Input rejected before or by the store (for example an empty name)."""

    def __init__(self, message: str, *, meta: Optional[Dict[str, Any]] = None):
        super().__init__(VALIDATION_REJECTED, message, meta=meta)


class NotFound(UseCaseError):
    """Referenced command or category no longer exists."""

    def __init__(self, message: str, *, meta: Optional[Dict[str, Any]] = None):
        super().__init__(NOT_FOUND, message, meta=meta)


class ClipboardDenied(UseCaseError):
    """System clipboard refused the write."""

    def __init__(self, message: str = "Clipboard unavailable.", *, meta: Optional[Dict[str, Any]] = None):
        super().__init__(CLIPBOARD_DENIED, message, meta=meta)


__all__ = [
    "BACKEND_UNAVAILABLE",
    "CLIPBOARD_DENIED",
    "NOT_FOUND",
    "VALIDATION_REJECTED",
    "BackendUnavailable",
    "ClipboardDenied",
    "NotFound",
    "ValidationRejected",
]

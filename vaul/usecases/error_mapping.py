"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Optional

from vaul.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
    extract_error_hint,
)
from vaul.domain.errors import BackendUnavailable, NotFound, ValidationRejected
from vaul.domain.ports import UseCaseError


def map_store_error(exc: Exception, *, context: str) -> UseCaseError:
    """Map store adapter exceptions to typed use-case errors.

    Args:
        exc: Exception raised by a store port call.
        context: Short label of the attempted action, used in messages.

    Returns:
        ``UseCaseError`` subclass carrying a stable code.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiTimeoutError):
        return BackendUnavailable(f"{context}: store did not respond. Check connection.")
    if isinstance(exc, ApiClientError):
        status = exc.status or 0
        hint = exc.hint or extract_error_hint(exc.payload)
        if status == 404:
            return NotFound(_compose_error_message(f"{context}: not found", hint))
        if status in (400, 409, 422):
            return ValidationRejected(_compose_error_message(f"{context}: rejected", hint))
        if status in (401, 403):
            return BackendUnavailable(f"{context}: auth failed / API key invalid.")
        return BackendUnavailable(_compose_error_message(f"{context}: request failed (HTTP {status})", hint))
    if isinstance(exc, ApiServerError):
        return BackendUnavailable(f"{context}: store error, try again.")
    if isinstance(exc, ApiError):
        return BackendUnavailable(f"{context}: {exc}")
    if isinstance(exc, KeyError):
        detail = exc.args[0] if exc.args else ""
        return NotFound(_compose_error_message(f"{context}: not found", str(detail)))
    if isinstance(exc, ValueError):
        return ValidationRejected(_compose_error_message(f"{context}: rejected", str(exc)))
    if isinstance(exc, OSError):
        return BackendUnavailable(_compose_error_message(f"{context}: storage unavailable", str(exc)))
    return BackendUnavailable(_compose_error_message(f"{context}: failed", str(exc)))


def _compose_error_message(base: str, hint: Optional[str]) -> str:
    hint_text = (hint or "").strip()
    if hint_text:
        return f"{base}: {hint_text}"
    if base.endswith("."):
        return base
    return f"{base}."


__all__ = ["map_store_error"]

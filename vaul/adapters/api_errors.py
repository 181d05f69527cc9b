"""Errors raised by the REST store adapter.

``error_for_response`` turns a non-2xx response into the matching subclass.
``vaul.usecases.error_mapping`` later translates them into user-facing
``UseCaseError`` instances, so nothing above the adapter layer imports
``requests``.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

_HINT_KEYS = ("error", "detail", "message", "hint")
_MAX_HINT = 200


class ApiError(RuntimeError):
    """Base class for store API failures.

    Attributes:
        status: HTTP status, ``None`` for transport failures.
        hint: Short server-provided explanation, if any.
        payload: Decoded error body (JSON value or text snippet).
        context: Request label, for example ``"delete category[c1]"``.
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        hint: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.hint = hint
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx: blank name, unknown id, conflicting merge."""


class ApiServerError(ApiError):
    """HTTP 5xx from the store service."""


class ApiTimeoutError(ApiError):
    """The store could not be reached within the retry budget."""


def read_error_payload(resp: Any) -> Any:
    try:
        return resp.json()
    except ValueError:
        text = (getattr(resp, "text", "") or "").strip()
        return text[:400] or None


def extract_error_hint(payload: Any) -> Optional[str]:
    """First non-blank message found in an error body.

    Handles plain text, ``{"error": "..."}`` style objects and lists of such
    objects (validation errors are often reported as a list).
    """
    if isinstance(payload, str):
        return payload.strip()[:_MAX_HINT] or None
    if isinstance(payload, Mapping):
        for key in _HINT_KEYS:
            hint = extract_error_hint(payload.get(key))
            if hint:
                return hint
        return None
    if isinstance(payload, list):
        for item in payload:
            hint = extract_error_hint(item)
            if hint:
                return hint
    return None


def error_for_response(resp: Any, context: str) -> ApiError:
    status = int(resp.status_code)
    payload = read_error_payload(resp)
    hint = extract_error_hint(payload)
    message = f"{context}: {hint} (HTTP {status})" if hint else f"{context}: HTTP {status}"
    error_cls = ApiClientError if 400 <= status < 500 else ApiServerError
    return error_cls(message, status=status, hint=hint, payload=payload, context=context)


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "error_for_response",
    "extract_error_hint",
    "read_error_payload",
]

"""HTTP transport for the REST store.

``RetryingSession`` wraps one ``requests.Session``. Every call carries the
API key and the configured timeout; timeouts and connection errors are
retried and finally surface as ``ApiTimeoutError``. Status codes are left to
the caller (``StoreRestAdapter._ensure_ok``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from vaul.adapters.api_errors import ApiTimeoutError

_RETRYABLE = (req_exc.Timeout, req_exc.ConnectionError)


@dataclass(frozen=True)
class HttpConfig:
    request_timeout_s: int = 10
    retries: int = 2

    @property
    def attempts(self) -> int:
        return max(1, self.retries + 1)


class RetryingSession:
    def __init__(self, api_key: Optional[str], cfg: Optional[HttpConfig] = None) -> None:
        self._log = logging.getLogger(__name__)
        self.session = requests.Session()
        self.api_key = api_key
        self.cfg = cfg or HttpConfig()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        return headers

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        """Send ``method url`` and return the first response that arrives.

        Raises:
            ApiTimeoutError: every attempt timed out or failed to connect.
        """
        context = f"{method} {url}"
        last_exc: Optional[Exception] = None
        for attempt in range(1, self.cfg.attempts + 1):
            try:
                return self.session.request(
                    method,
                    url,
                    params=params,
                    json=json_body,
                    headers=self._headers(),
                    timeout=self.cfg.request_timeout_s,
                )
            except _RETRYABLE as exc:
                last_exc = exc
                self._log.debug("%s failed (attempt %d/%d): %s", context, attempt, self.cfg.attempts, exc)
        raise ApiTimeoutError(f"Store unreachable: {context}", context=context) from last_exc

    def get(self, url: str, *, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self.request("GET", url, params=params)

    def post(self, url: str, *, json_body: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self.request("POST", url, json_body=json_body)

    def put(self, url: str, *, json_body: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self.request("PUT", url, json_body=json_body)

    def delete(self, url: str, *, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self.request("DELETE", url, params=params)


__all__ = ["HttpConfig", "RetryingSession"]

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, TypeVar
from urllib.parse import quote

import requests

from vaul.domain.entities import Category, CategoryId, Command, CommandId
from vaul.domain.ports import StorePort

from .api_errors import error_for_response
from .change_notifier import ChangeNotifier
from .http_client import HttpConfig, RetryingSession

T = TypeVar("T")


class StoreRestAdapter(ChangeNotifier, StorePort):
    """REST adapter for a remote command/category store.

    Successful mutations notify this adapter's subscribers, so every surface
    sharing the adapter reloads after any of them writes.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: Optional[str] = None,
        request_timeout_s: int = 10,
        retries: int = 2,
    ) -> None:
        if not base_url or not base_url.strip():
            raise ValueError("StoreRestAdapter requires a base URL")
        super().__init__()
        self._log = logging.getLogger(__name__)
        self.base_url = base_url.strip().rstrip("/")
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, retries=retries)
        self.session = RetryingSession(api_key or None, self.cfg)

    # ---------- Commands ----------

    def list_commands(self) -> List[Command]:
        resp = self.session.get(self._make_url("/commands"))
        self._ensure_ok(resp, "commands")
        return self._parse_rows(self._json_list(resp, "commands"), Command.from_payload, "commands")

    def create_command(self, content: str, category: str = "") -> Command:
        body = {"content": content}
        if category:
            body["category"] = category
        resp = self.session.post(self._make_url("/commands"), json_body=body)
        self._ensure_ok(resp, "create command")
        created = Command.from_payload(self._json_object(resp, "create command"))
        self.notify_changed()
        return created

    def delete_command(self, command_id: CommandId) -> None:
        resp = self.session.delete(self._make_url(f"/commands/{quote(command_id, safe='')}"))
        self._ensure_ok(resp, f"delete command[{command_id}]")
        self.notify_changed()

    # ---------- Categories ----------

    def list_categories(self) -> List[Category]:
        resp = self.session.get(self._make_url("/categories"))
        self._ensure_ok(resp, "categories")
        return self._parse_rows(self._json_list(resp, "categories"), Category.from_payload, "categories")

    def create_category(self, name: str, color: str = "") -> Category:
        resp = self.session.post(self._make_url("/categories"), json_body={"name": name, "color": color})
        self._ensure_ok(resp, "create category")
        created = Category.from_payload(self._json_object(resp, "create category"))
        self.notify_changed()
        return created

    def update_category(self, category_id: CategoryId, name: str, color: str = "") -> None:
        resp = self.session.put(
            self._category_url(category_id),
            json_body={"name": name, "color": color},
        )
        self._ensure_ok(resp, f"update category[{category_id}]")
        self.notify_changed()

    def delete_category(self, category_id: CategoryId, reassign_to: str = "") -> None:
        resp = self.session.delete(
            self._category_url(category_id),
            params={"reassign_to": reassign_to},
        )
        self._ensure_ok(resp, f"delete category[{category_id}]")
        self.notify_changed()

    def merge_categories(self, source_id: CategoryId, target_id: CategoryId) -> None:
        resp = self.session.post(
            self._category_url(source_id, "/merge"),
            json_body={"target": target_id},
        )
        self._ensure_ok(resp, f"merge category[{source_id}->{target_id}]")
        self.notify_changed()

    # ---------- Helpers ----------

    def _make_url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _category_url(self, category_id: CategoryId, suffix: str = "") -> str:
        return self._make_url(f"/categories/{quote(category_id, safe='')}{suffix}")

    @staticmethod
    def _ensure_ok(resp: requests.Response, ctx: str) -> None:
        if not 200 <= resp.status_code < 300:
            raise error_for_response(resp, ctx)

    @staticmethod
    def _json_any(resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError:
            snippet = getattr(resp, "text", "")[:400]
            raise RuntimeError(f"Invalid JSON response: {snippet}")

    def _json_list(self, resp: requests.Response, ctx: str) -> List[dict]:
        data = self._json_any(resp)
        if data is None:
            return []
        if not isinstance(data, list):
            raise RuntimeError(f"{ctx}: expected list response")
        return [entry for entry in data if isinstance(entry, dict)]

    def _parse_rows(self, rows: List[dict], parse: Callable[[dict], T], ctx: str) -> List[T]:
        items: List[T] = []
        for row in rows:
            try:
                items.append(parse(row))
            except ValueError as exc:
                self._log.warning("Skipping invalid %s row from %s: %s", ctx, self.base_url, exc)
        return items

    def _json_object(self, resp: requests.Response, ctx: str) -> dict:
        data = self._json_any(resp)
        if not isinstance(data, dict):
            raise RuntimeError(f"{ctx}: expected object response")
        return data


__all__ = ["StoreRestAdapter"]

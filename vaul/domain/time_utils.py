from __future__ import annotations

"""Datetime helpers for timestamps stored alongside commands and categories."""

import re
from datetime import datetime, timezone
from typing import Any, Optional

_FRACTION = re.compile(r"\.(\d+)")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse persisted RFC 3339 timestamps into timezone-aware datetimes.

    Fractional seconds longer than microseconds (nanosecond precision written
    by other clients) are truncated. Blank or unparseable values yield ``None``.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value or "").strip()
        if not text:
            return None
        normalized = text.replace(" ", "T")
        if normalized.endswith("Z"):
            normalized = normalized[:-1] + "+00:00"
        normalized = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), normalized, count=1)
        try:
            parsed = datetime.fromisoformat(normalized)
        except ValueError:
            return None

    if parsed.tzinfo is None or parsed.tzinfo.utcoffset(parsed) is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return value.isoformat()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


__all__ = ["format_timestamp", "parse_timestamp", "utc_now"]

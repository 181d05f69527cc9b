from __future__ import annotations

import logging
from typing import Any, Callable, Optional

_log = logging.getLogger(__name__)


def safe_call(
    fn: Optional[Callable[..., Any]],
    *args: Any,
    on_error: Optional[Callable[[Exception], None]] = None,
) -> None:
    if fn is None:
        return
    try:
        fn(*args)
    except Exception as exc:
        if on_error:
            on_error(exc)
        else:
            _log.exception("Callback failed: %s", exc)


def center_over_parent(parent: Any, width: int, height: int) -> str:
    """Geometry string that centers a ``width``x``height`` window over ``parent``."""
    try:
        px = parent.winfo_rootx()
        py = parent.winfo_rooty()
        pw = parent.winfo_width()
        ph = parent.winfo_height()
        x = px + (pw - width) // 2
        y = py + (ph - height) // 2
        return f"{width}x{height}+{x}+{y}"
    except Exception:
        return f"{width}x{height}"


__all__ = ["center_over_parent", "safe_call"]

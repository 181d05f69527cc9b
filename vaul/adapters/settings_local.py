from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .store_local import default_data_dir

SETTINGS_FILE = "user_settings.json"


class SettingsLocal:
    """Persist user settings as JSON next to the local command store."""

    def __init__(self, root_dir: Union[str, Path, None] = None) -> None:
        self.root = Path(root_dir) if root_dir else default_data_dir()
        self.path = self.root / SETTINGS_FILE

    def load_user_settings(self) -> Optional[Dict[str, Any]]:
        """Return the saved payload, or ``None`` when nothing was saved yet."""
        if not self.path.exists():
            return None
        with self.path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path}: expected a JSON object")
        return data

    def save_user_settings(self, payload: Dict[str, Any]) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix="user_settings_", suffix=".tmp", dir=str(self.root))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, ensure_ascii=False, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


__all__ = ["SETTINGS_FILE", "SettingsLocal"]

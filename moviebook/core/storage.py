"""
Persisted client storage for the session token and user record.

Values are kept as strings in a single JSON file, so a corrupted or
hand-edited entry is detected by whoever parses it, not here.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class ClientStorage:
    """Small string key/value store backed by a JSON file (in memory when path is None)."""

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path) if path else None
        self._items: Dict[str, str] = self._read()

    def _read(self) -> Dict[str, str]:
        if self.path is None or not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"✗ Could not read client storage {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"✗ Client storage {self.path} is not an object; ignoring it")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self) -> None:
        if self.path is None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self._items, indent=2), encoding="utf-8")
        except OSError as e:
            # in-memory values stay current for this run
            logger.error(f"✗ Could not write client storage {self.path}: {e}")

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value
        self._write()

    def remove_item(self, key: str) -> None:
        if self._items.pop(key, None) is not None:
            self._write()

    def clear(self) -> None:
        self._items = {}
        self._write()

    def __contains__(self, key: str) -> bool:
        return key in self._items

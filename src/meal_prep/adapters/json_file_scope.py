"""File-backed key/value scope."""

import json
import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class JsonFileScope:
    """String key/value pairs persisted as one JSON object on disk."""

    path: Path

    def get_item(self, key: str) -> str | None:
        """Return the stored value for a key."""
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        """Store a value under a key."""
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        """Delete a key if present; the file goes away with its last key."""
        data = self._read()
        if data.pop(key, None) is None:
            return
        if data:
            self._write(data)
        else:
            self.path.unlink(missing_ok=True)

    def _read(self) -> dict[str, object]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data), encoding="utf-8")
        os.replace(tmp_path, self.path)

"""
Token Store
===========
Holds the bearer token between CLI runs, the way the browser kept it in
local storage. The file is read on every request; nothing is cached.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional


class TokenStore:
    """JSON-file backed store for access_token / refresh_token / user"""

    KEYS = ("access_token", "refresh_token", "user")

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path) if path else None
        self._memory: Dict[str, Any] = {}

    def _read(self) -> Dict[str, Any]:
        if self.path is None:
            return dict(self._memory)
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]):
        if self.path is None:
            self._memory = dict(data)
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def get(self, key: str) -> Optional[Any]:
        return self._read().get(key)

    def set(self, key: str, value: Any):
        data = self._read()
        data[key] = value
        self._write(data)

    @property
    def access_token(self) -> Optional[str]:
        token = self.get("access_token")
        if isinstance(token, str):
            # tokens pasted from the browser sometimes keep their JSON quotes
            token = token.strip().strip('"')
        return token or None

    def clear(self):
        """Forget the session (token expired or logged out)"""
        data = self._read()
        for key in self.KEYS:
            data.pop(key, None)
        self._write(data)

"""Configuration for snapshot replication."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional


class SyncConfig:
    """Replication settings loaded from a JSON payload."""

    def __init__(self, payload: Optional[Dict[str, object]] = None) -> None:
        payload = payload or {}
        self.instance = str(payload.get("instance", "default"))
        self.key_prefix = str(payload.get("key_prefix", "checkers_game_"))
        self.suppress_echo = bool(payload.get("suppress_echo", True))
        self.load_initial_state = bool(payload.get("load_initial_state", True))

    @property
    def state_key(self) -> str:
        """Shared-property key the snapshot for this table is stored under."""
        return f"{self.key_prefix}{self.instance}"

    @classmethod
    def from_json(cls, path: str | Path) -> "SyncConfig":
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(payload)

from __future__ import annotations

from typing import Optional, Protocol


class SettingsRepository(Protocol):
    """Key/value store for global settings records (``location``, ``schedule``, ``announcement``)."""

    def get(self, key: str) -> Optional[dict]:
        raise NotImplementedError

    def put(self, key: str, value: dict) -> None:
        raise NotImplementedError

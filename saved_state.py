import json
import logging
import os
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

_MISSING = object()


class SavedStateRegistry:
    """Values that outlive a composition.

    Restored values are consumed once by whoever asks for the key first;
    live providers are snapshotted on teardown.
    """

    def __init__(self, restored: Optional[Dict[str, Any]] = None):
        self._restored: Dict[str, Any] = dict(restored or {})
        self._providers: Dict[str, Callable[[], Any]] = {}

    def consume(self, key: str, default=_MISSING):
        if key in self._restored:
            return self._restored.pop(key)
        if default is _MISSING:
            return None
        return default

    def has_restored(self, key: str) -> bool:
        return key in self._restored

    def register(self, key: str, provider: Callable[[], Any]) -> None:
        if key in self._providers:
            raise ValueError(f"saved state key {key!r} is already registered")
        self._providers[key] = provider

    def unregister(self, key: str) -> None:
        self._providers.pop(key, None)

    def snapshot(self) -> Dict[str, Any]:
        # unconsumed restored values stay alive for the next composition
        data = dict(self._restored)
        for key, provider in self._providers.items():
            data[key] = provider()
        return data


class SavedStateStore:
    def __init__(self, path: str):
        self.path = path

    def load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Discarding unreadable saved state %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Discarding saved state %s: not an object", self.path)
            return {}
        logger.info("Restored %d saved state value(s)", len(data))
        return data

    def persist(self, data: Dict[str, Any]) -> bool:
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, sort_keys=True)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Could not write saved state %s: %s", self.path, e)
            return False
        logger.info("Saved %d state value(s)", len(data))
        return True

from typing import Dict, Optional

from .base import ConfigStore


class InMemoryConfigStore(ConfigStore):
    """
    Process-local store for tests and development.

    Same interface as SQLiteConfigStore; contents are lost on restart.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        self._data[key] = value

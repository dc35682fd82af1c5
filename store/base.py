import json
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .personalities import (
    DEFAULT_MAIN_PROMPT,
    DEFAULT_PERSONALITIES,
    Personality,
    normalize_personalities,
)

logger = logging.getLogger(__name__)

PROMPT_KEY = "main_prompt"
PERSONALITIES_KEY = "personalities"


class ConfigStoreError(Exception):
    """The configuration backend could not be read or written."""
    pass


class ConfigStore(ABC):
    """
    Key-value configuration boundary.

    Backends only implement get/put of strings. The typed readers below
    guarantee the proxy never sees an empty prompt or an empty personality
    list: missing or unparseable values are replaced by defaults, which are
    written back so the store converges to a valid state.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def put(self, key: str, value: str) -> None:
        raise NotImplementedError

    def read_main_prompt(self) -> str:
        stored = self.get(PROMPT_KEY)
        if stored and stored.strip():
            return stored.strip()

        self._write_back(PROMPT_KEY, DEFAULT_MAIN_PROMPT)
        return DEFAULT_MAIN_PROMPT

    def write_main_prompt(self, prompt: str) -> str:
        prompt = prompt.strip()
        if not prompt:
            raise ValueError("mainPrompt cannot be empty")
        self.put(PROMPT_KEY, prompt)
        return prompt

    def read_personalities(self) -> List[Personality]:
        raw = self.get(PERSONALITIES_KEY)

        stored = None
        if raw is not None:
            try:
                stored = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning("Stored personalities are not valid JSON, restoring defaults")

        if isinstance(stored, dict):
            stored = stored.get("personalities")

        if isinstance(stored, list):
            return normalize_personalities(stored)

        self._write_back(
            PERSONALITIES_KEY,
            json.dumps([item.model_dump() for item in DEFAULT_PERSONALITIES]),
        )
        return list(DEFAULT_PERSONALITIES)

    def write_personalities(self, personalities: Sequence[Personality]) -> List[Personality]:
        items = list(personalities)
        self.put(PERSONALITIES_KEY, json.dumps([item.model_dump() for item in items]))
        return items

    def _write_back(self, key: str, value: str) -> None:
        """Persist a default on read; a failing backend must not break reads."""
        try:
            self.put(key, value)
        except ConfigStoreError as e:
            logger.error(f"Could not persist default for '{key}': {e}")

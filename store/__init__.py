"""
Configuration store exports.

Holds the main prompt and the personality list read by the proxy on every
request and edited through the admin API.
"""

from .personalities import (
    DEFAULT_MAIN_PROMPT,
    DEFAULT_PERSONALITIES,
    Personality,
    normalize_personalities,
    select_personality,
    slugify,
    unique_id_from_name,
)
from .base import PERSONALITIES_KEY, PROMPT_KEY, ConfigStore, ConfigStoreError
from .memory import InMemoryConfigStore
from .sqlite import SQLiteConfigStore

__all__ = [
    "DEFAULT_MAIN_PROMPT",
    "DEFAULT_PERSONALITIES",
    "Personality",
    "normalize_personalities",
    "select_personality",
    "slugify",
    "unique_id_from_name",
    "PERSONALITIES_KEY",
    "PROMPT_KEY",
    "ConfigStore",
    "ConfigStoreError",
    "InMemoryConfigStore",
    "SQLiteConfigStore",
]

"""
Infrastructure configuration system.

Environment-based settings, read once per process into an immutable value
that is passed explicitly to the app factory. Provider backends are only
included when their credentials are present.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Literal, Optional, Tuple

from dotenv import load_dotenv

from inference import (
    CerebrasModelBackend,
    ModelBackend,
    OllamaModelBackend,
    ProviderChain,
    StubModelBackend,
    WorkersAIModelBackend,
)
from inference.cerebras import DEFAULT_CEREBRAS_MODEL
from inference.workers_ai import DEFAULT_WORKERS_AI_MODEL
from store import ConfigStore, InMemoryConfigStore, SQLiteConfigStore

# Load environment variables from .env at the project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


ProviderName = Literal["cerebras", "workers-ai", "ollama", "stub"]
ConfigStoreType = Literal["memory", "sqlite"]

DEFAULT_PROVIDER_ORDER: Tuple[str, ...] = ("cerebras", "workers-ai", "ollama")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


@dataclass(frozen=True)
class ProxyConfig:
    """Proxy configuration from environment."""

    # Upstream
    origin_base_url: Optional[str] = None
    upstream_timeout_s: float = 30.0

    # Admin
    admin_token: Optional[str] = None

    # Providers, tried in this order when configured
    provider_order: Tuple[str, ...] = DEFAULT_PROVIDER_ORDER
    provider_timeout_s: float = 20.0
    cerebras_api_key: Optional[str] = None
    cerebras_model: str = DEFAULT_CEREBRAS_MODEL
    cloudflare_account_id: Optional[str] = None
    cloudflare_api_token: Optional[str] = None
    workers_ai_model: str = DEFAULT_WORKERS_AI_MODEL
    ollama_base_url: Optional[str] = None
    ollama_model: str = "llama3.1"

    # Configuration store
    config_store: ConfigStoreType = "sqlite"
    config_db_path: str = "./proxy_config.db"

    # Server
    port: int = 8787
    log_level: str = "INFO"
    environment: str = "development"

    @classmethod
    def from_env(cls) -> "ProxyConfig":
        """
        Load configuration from environment variables.

        Only credentials decide whether a backend takes part in the chain;
        PROVIDER_ORDER only sets the order among configured ones.
        """
        order = os.getenv("PROVIDER_ORDER")
        provider_order = (
            tuple(name.strip().lower() for name in order.split(",") if name.strip())
            if order
            else DEFAULT_PROVIDER_ORDER
        )

        return cls(
            origin_base_url=os.getenv("ORIGIN_BASE_URL") or None,
            upstream_timeout_s=_env_float("UPSTREAM_TIMEOUT_S", 30.0),
            admin_token=os.getenv("ADMIN_TOKEN") or None,
            provider_order=provider_order,
            provider_timeout_s=_env_float("PROVIDER_TIMEOUT_S", 20.0),
            cerebras_api_key=os.getenv("CEREBRAS_API_KEY") or None,
            cerebras_model=os.getenv("CEREBRAS_MODEL", DEFAULT_CEREBRAS_MODEL),
            cloudflare_account_id=os.getenv("CLOUDFLARE_ACCOUNT_ID") or None,
            cloudflare_api_token=os.getenv("CLOUDFLARE_API_TOKEN") or None,
            workers_ai_model=os.getenv("WORKERS_AI_MODEL", DEFAULT_WORKERS_AI_MODEL),
            ollama_base_url=os.getenv("OLLAMA_BASE_URL") or None,
            ollama_model=os.getenv("OLLAMA_MODEL", "llama3.1"),
            config_store=os.getenv("CONFIG_STORE", "sqlite").lower(),  # type: ignore
            config_db_path=os.getenv("CONFIG_DB_PATH", "./proxy_config.db"),
            port=int(os.getenv("PORT", "8787")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            environment=os.getenv("ENVIRONMENT", "development"),
        )

    def create_backend(self, name: str) -> Optional[ModelBackend]:
        """Create one backend by name, or None when it is not configured."""
        if name == "cerebras":
            if not self.cerebras_api_key:
                return None
            return CerebrasModelBackend(
                api_key=self.cerebras_api_key,
                model_name=self.cerebras_model,
            )
        elif name == "workers-ai":
            if not (self.cloudflare_account_id and self.cloudflare_api_token):
                return None
            return WorkersAIModelBackend(
                account_id=self.cloudflare_account_id,
                api_token=self.cloudflare_api_token,
                model_name=self.workers_ai_model,
            )
        elif name == "ollama":
            if not self.ollama_base_url:
                return None
            return OllamaModelBackend(
                model_name=self.ollama_model,
                base_url=self.ollama_base_url,
            )
        elif name == "stub":
            return StubModelBackend()
        else:
            raise ValueError(f"Unknown provider '{name}' in PROVIDER_ORDER")

    def create_provider_chain(self) -> ProviderChain:
        """Build the ordered provider chain from configured credentials."""
        backends: List[ModelBackend] = []
        for name in self.provider_order:
            backend = self.create_backend(name)
            if backend is not None:
                backends.append(backend)
        return ProviderChain(backends, attempt_timeout_s=self.provider_timeout_s)

    def create_config_store(self) -> ConfigStore:
        """Create the configuration store backend."""
        if self.config_store == "memory":
            return InMemoryConfigStore()
        elif self.config_store == "sqlite":
            return SQLiteConfigStore(db_path=self.config_db_path)
        else:
            raise ValueError(f"Unknown CONFIG_STORE '{self.config_store}'")


def get_config() -> ProxyConfig:
    """Read proxy configuration from the environment."""
    return ProxyConfig.from_env()

"""
Infrastructure module exports.

Configuration for the proxy, its provider chain and its configuration store.
"""

from .config import ProxyConfig, get_config, ProviderName, ConfigStoreType, DEFAULT_PROVIDER_ORDER

__all__ = [
    "ProxyConfig",
    "get_config",
    "ProviderName",
    "ConfigStoreType",
    "DEFAULT_PROVIDER_ORDER",
]

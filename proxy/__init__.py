"""Proxy Layer - Module Exports"""

from .headers import (
    CONTROL_HEADERS,
    HEADER_ADMIN_TOKEN,
    HEADER_CUSTOMIZE_HOST,
    HEADER_CUSTOMIZED,
    HEADER_DEBUG,
    HEADER_ENABLED,
    HEADER_ERRORS,
    HEADER_PERSONALITY,
    HEADER_PROFILE,
)
from .gate import is_enabled, should_rewrite
from .upstream import (
    UpstreamConfigurationError,
    build_upstream_headers,
    build_upstream_request,
    build_upstream_url,
    resolve_origin,
)
from .assembler import ERROR_SEPARATOR, assemble_headers
from .router import router

__all__ = [
    # Headers
    "CONTROL_HEADERS",
    "HEADER_ADMIN_TOKEN",
    "HEADER_CUSTOMIZE_HOST",
    "HEADER_CUSTOMIZED",
    "HEADER_DEBUG",
    "HEADER_ENABLED",
    "HEADER_ERRORS",
    "HEADER_PERSONALITY",
    "HEADER_PROFILE",
    # Gate
    "is_enabled",
    "should_rewrite",
    # Upstream
    "UpstreamConfigurationError",
    "build_upstream_headers",
    "build_upstream_request",
    "build_upstream_url",
    "resolve_origin",
    # Assembler
    "ERROR_SEPARATOR",
    "assemble_headers",
    # Router
    "router",
]

"""
Response Assembler

Copies upstream headers onto the proxied response and adds the
customization result markers.

Invariants:
- x-customized is "true" only when the body actually changed
- x-errors is present only when some provider attempt failed
- x-generative-profile and cache-control: private only on customized bodies
- x-debug only when a provider produced the accepted batch
"""

from typing import Iterable, Optional, Tuple

from starlette.datastructures import MutableHeaders

from customization import RewriteOutcome

from .headers import (
    HEADER_CUSTOMIZED,
    HEADER_DEBUG,
    HEADER_ERRORS,
    HEADER_PROFILE,
    HOP_BY_HOP_HEADERS,
)

ERROR_SEPARATOR = "; "

# The rewritten body is re-encoded by the server, so these no longer apply
_BODY_HEADERS = frozenset({"content-length", "content-encoding"})


def _header_safe(value: str) -> str:
    """Header values must be single-line latin-1."""
    value = " ".join(value.split())
    return value.encode("latin-1", errors="replace").decode("latin-1")


def copy_upstream_headers(
    upstream_headers: Iterable[Tuple[str, str]],
    body_changed: bool = False,
) -> MutableHeaders:
    headers = MutableHeaders()
    for name, value in upstream_headers:
        lowered = name.lower()
        if lowered in HOP_BY_HOP_HEADERS:
            continue
        if body_changed and lowered in _BODY_HEADERS:
            continue
        headers.append(lowered, value)
    return headers


def assemble_headers(
    upstream_headers: Iterable[Tuple[str, str]],
    outcome: Optional[RewriteOutcome] = None,
) -> MutableHeaders:
    """
    Build the final response headers.

    Args:
        upstream_headers: (name, value) pairs from the origin response
        outcome: Result of the rewrite pass, or None for pass-through

    Returns:
        Headers ready to hand to a starlette Response
    """
    if outcome is None:
        headers = copy_upstream_headers(upstream_headers)
        headers[HEADER_CUSTOMIZED] = "false"
        return headers

    # The body was decoded and re-serialized even when nothing was rewritten
    headers = copy_upstream_headers(upstream_headers, body_changed=True)
    headers[HEADER_CUSTOMIZED] = "true" if outcome.customized else "false"

    if outcome.errors:
        headers[HEADER_ERRORS] = _header_safe(ERROR_SEPARATOR.join(outcome.errors))

    if outcome.customized and outcome.personality is not None:
        headers[HEADER_PROFILE] = outcome.personality.id
        headers["cache-control"] = "private"

    if outcome.provider:
        headers[HEADER_DEBUG] = f"provider={outcome.provider}; model={outcome.model}"

    return headers

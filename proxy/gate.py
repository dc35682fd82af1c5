"""
Rewrite Gate

Stateless predicate over one request/response pair. All three conditions
must hold; any single one failing means plain pass-through.
"""

from typing import Mapping

from .headers import ENABLED_VALUES, HEADER_ENABLED


def is_enabled(request_headers: Mapping[str, str]) -> bool:
    return request_headers.get(HEADER_ENABLED) in ENABLED_VALUES


def should_rewrite(
    method: str,
    request_headers: Mapping[str, str],
    response_headers: Mapping[str, str],
) -> bool:
    """
    Decide whether the upstream response is eligible for rewriting.

    Args:
        method: Inbound request method, must be exactly GET
        request_headers: Inbound headers, must carry x-generative-enabled: 1|true
        response_headers: Upstream headers, content-type must include text/html
    """
    if method != "GET":
        return False

    if not is_enabled(request_headers):
        return False

    content_type = response_headers.get("content-type") or ""
    return "text/html" in content_type

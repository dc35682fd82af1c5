"""
Upstream Request Builder

Points the inbound request at the configured (or client-overridden) origin
and removes internal control headers before it leaves the proxy.
"""

from typing import Iterable, List, Mapping, Optional, Tuple

import httpx

from .headers import CONTROL_HEADERS, HEADER_CUSTOMIZE_HOST, HOP_BY_HOP_HEADERS

# Encodings httpx can always decode without optional extras
DECODABLE_ENCODINGS = "gzip, deflate"

_DROPPED_REQUEST_HEADERS = CONTROL_HEADERS | HOP_BY_HOP_HEADERS | {"host", "content-length"}


class UpstreamConfigurationError(Exception):
    """No usable upstream origin for this request."""
    pass


def resolve_origin(request_headers: Mapping[str, str], default_origin: Optional[str]) -> str:
    """The x-customize-host header wins over the configured default."""
    origin = request_headers.get(HEADER_CUSTOMIZE_HOST) or default_origin
    if not origin:
        raise UpstreamConfigurationError(
            "No upstream origin: set ORIGIN_BASE_URL or send x-customize-host"
        )
    return origin


def _split_raw_path(url: httpx.URL) -> Tuple[str, str]:
    """Percent-encoded (path, query) of ``url``, exactly as received."""
    path, _, query = url.raw_path.decode("ascii").partition("?")
    return path or "/", query


def build_upstream_url(incoming_url: str, origin_base: str) -> str:
    """
    Rewrite scheme, host and port to the origin's; merge paths.

    The root path maps to the origin's base path. Any other path is prefixed
    with the origin's base path (minus its trailing slash). Path and query
    are carried in their encoded form, so escapes like %2F and %3F survive.
    """
    incoming = httpx.URL(incoming_url)
    try:
        origin = httpx.URL(origin_base)
    except httpx.InvalidURL as e:
        raise UpstreamConfigurationError(f"Invalid origin '{origin_base}': {e}") from e

    if origin.scheme not in ("http", "https") or not origin.host:
        raise UpstreamConfigurationError(f"Invalid origin '{origin_base}'")

    base_path, _ = _split_raw_path(origin)
    path, query = _split_raw_path(incoming)

    if path == "/":
        path = base_path
    elif base_path != "/":
        path = base_path.rstrip("/") + path

    target = f"{origin.scheme}://{origin.netloc.decode('ascii')}{path}"
    if query:
        target = f"{target}?{query}"
    return str(httpx.URL(target))


def build_upstream_headers(
    headers: Iterable[Tuple[str, str]],
    decodable: bool = False,
) -> List[Tuple[str, str]]:
    """
    Copy inbound headers minus control, hop-by-hop and host headers.

    Args:
        headers: Inbound (name, value) pairs; repeated names are kept
        decodable: Restrict accept-encoding so the body can be decoded
                   and rewritten
    """
    forwarded = [
        (name, value)
        for name, value in headers
        if name.lower() not in _DROPPED_REQUEST_HEADERS
    ]

    if decodable:
        forwarded = [(n, v) for n, v in forwarded if n.lower() != "accept-encoding"]
        forwarded.append(("accept-encoding", DECODABLE_ENCODINGS))

    return forwarded


def build_upstream_request(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    headers: Iterable[Tuple[str, str]],
    body: bytes,
    default_origin: Optional[str],
    decodable: bool = False,
) -> httpx.Request:
    """
    Build the request sent to the origin.

    Raises:
        UpstreamConfigurationError: no origin, or an unusable one
    """
    headers = list(headers)
    lookup = {name.lower(): value for name, value in headers}
    origin = resolve_origin(lookup, default_origin)

    return client.build_request(
        method,
        build_upstream_url(url, origin),
        headers=build_upstream_headers(headers, decodable=decodable),
        content=body or None,
    )

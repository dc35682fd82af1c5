"""
Proxy Route

Catch-all FastAPI route: forwards every request to the origin and, for
eligible HTML pages, rewrites the opt-in regions before responding.

Flow:
  build upstream request → fetch → gate → rewrite pipeline → assemble headers

Rules:
- Upstream failures are the only fatal errors (502)
- Provider failures never fail the request; they surface in x-errors
- Non-eligible responses are streamed through untouched
"""

import logging

import httpx
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response, StreamingResponse
from starlette.background import BackgroundTask

from customization import rewrite_generative_sections
from store import select_personality

from .assembler import assemble_headers
from .gate import is_enabled, should_rewrite
from .headers import HEADER_PERSONALITY
from .upstream import UpstreamConfigurationError, build_upstream_request

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Proxy"])

PROXY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _upstream_error(detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=502,
        content={"error": "Upstream fetch failed", "detail": detail},
    )


def _inbound_url(request: Request) -> str:
    """Inbound URL with the path still percent-encoded as the client sent it."""
    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return str(request.url)

    # Some servers include the query string in raw_path
    path = raw_path.split(b"?", 1)[0].decode("latin-1")
    url = f"{request.url.scheme}://{request.url.netloc}{path}"
    query = request.scope.get("query_string") or b""
    if query:
        url = f"{url}?{query.decode('latin-1')}"
    return url


@router.api_route("/{path:path}", methods=PROXY_METHODS, include_in_schema=False)
async def proxy(request: Request, path: str) -> Response:
    """Forward one request to the origin, rewriting eligible HTML."""
    state = request.app.state
    client: httpx.AsyncClient = state.http_client

    rewrite_requested = request.method == "GET" and is_enabled(request.headers)
    body = await request.body()

    try:
        upstream_request = build_upstream_request(
            client,
            request.method,
            _inbound_url(request),
            request.headers.items(),
            body,
            state.config.origin_base_url,
            decodable=rewrite_requested,
        )
    except UpstreamConfigurationError as e:
        logger.error(f"Upstream configuration error: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "detail": str(e)},
        )

    try:
        upstream = await client.send(upstream_request, stream=True)
    except httpx.RequestError as e:
        logger.error(
            f"Upstream fetch failed: {e}",
            extra={"upstream_url": str(upstream_request.url)},
        )
        return _upstream_error(str(e) or type(e).__name__)

    if not should_rewrite(request.method, request.headers, upstream.headers):
        return StreamingResponse(
            upstream.aiter_raw(),
            status_code=upstream.status_code,
            headers=assemble_headers(upstream.headers.multi_items()),
            background=BackgroundTask(upstream.aclose),
        )

    try:
        await upstream.aread()
    except httpx.HTTPError as e:
        logger.error(f"Upstream body read failed: {e}")
        return _upstream_error(str(e) or type(e).__name__)
    finally:
        await upstream.aclose()

    store = state.store
    main_prompt = store.read_main_prompt()
    personality = select_personality(
        store.read_personalities(),
        request.headers.get(HEADER_PERSONALITY),
    )

    html = upstream.text
    outcome = await rewrite_generative_sections(
        html,
        main_prompt=main_prompt,
        personality=personality,
        rewriter=state.rewriter,
    )

    if outcome.customized:
        # Characters the page's charset cannot hold become numeric references
        content = outcome.html.encode(upstream.encoding or "utf-8", errors="xmlcharrefreplace")
    else:
        content = upstream.content

    logger.info(
        f"GET {request.url.path} customized={outcome.customized}",
        extra={
            "customized": outcome.customized,
            "personality": personality.id,
            "provider": outcome.provider,
            "errors": len(outcome.errors),
        },
    )

    return Response(
        content=content,
        status_code=upstream.status_code,
        headers=assemble_headers(upstream.headers.multi_items(), outcome),
    )

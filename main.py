"""
FastAPI Application Entry Point

Integrates:
  - Admin API over the configuration store (/api/*)
  - Generative customization proxy (every other path)
  - Middleware for logging & error handling

Run: uvicorn main:create_app --factory --host 0.0.0.0 --port 8787
     python main.py
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from admin import router as admin_router
from customization import BatchRewriter
from inference import ProviderChain
from infra import ProxyConfig, get_config
from proxy import HEADER_ADMIN_TOKEN
from proxy import router as proxy_router
from store import ConfigStore

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(
    config: Optional[ProxyConfig] = None,
    store: Optional[ConfigStore] = None,
    provider_chain: Optional[ProviderChain] = None,
    upstream_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Create the proxy application.

    Args:
        config: Immutable configuration (read from the environment if omitted)
        store: Configuration store (built from config if omitted)
        provider_chain: Generation backends (built from config if omitted)
        upstream_transport: httpx transport for origin fetches (tests)
    """
    config = config or get_config()
    configure_logging(config.log_level)
    store = store or config.create_config_store()
    provider_chain = provider_chain if provider_chain is not None else config.create_provider_chain()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan: owns the shared upstream HTTP client.
        """
        # Startup
        app.state.http_client = httpx.AsyncClient(
            timeout=config.upstream_timeout_s,
            follow_redirects=False,
            transport=upstream_transport,
        )
        logger.info("=" * 60)
        logger.info("Generative proxy starting up...")
        logger.info(f"Origin: {config.origin_base_url or '(per-request x-customize-host)'}")
        logger.info(f"Providers: {', '.join(provider_chain.names) or 'none configured'}")
        logger.info(f"Environment: {config.environment}")
        logger.info("=" * 60)

        yield

        # Shutdown
        await app.state.http_client.aclose()
        logger.info("Generative proxy shutting down...")

    app = FastAPI(
        title="Generative Customization Proxy",
        description="Reverse proxy that rewrites opt-in page regions with a generative model",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.store = store
    app.state.provider_chain = provider_chain
    app.state.rewriter = BatchRewriter(provider_chain, timeout_s=config.provider_timeout_s)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["content-type", HEADER_ADMIN_TOKEN],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests."""
        logger.debug(f"{request.method} {request.url.path}")
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(f"Request error: {str(e)}", exc_info=True)
            return JSONResponse(
                status_code=500,
                content={"error": "Internal server error", "detail": str(e)},
            )

    # Admin routes first: the proxy route matches every path
    app.include_router(admin_router)
    app.include_router(proxy_router)

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_config()
    uvicorn.run(
        create_app(settings),
        host="0.0.0.0",
        port=settings.port,
    )

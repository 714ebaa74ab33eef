"""
ChatKit Session Proxy - Application Factory

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Exposes the HTTP routes

All business logic is in the modules, following black box principles.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request

from chatkit_proxy import __version__
from chatkit_proxy.config.provider import ConfigProvider, EnvConfigProvider
from chatkit_proxy.modules.api import HealthResponse
from chatkit_proxy.modules.api.routes import HEALTH_PATH, create_session_router
from chatkit_proxy.modules.session import SessionProxy
from chatkit_proxy.modules.upstream import ChatKitClient, build_http_client

logger = logging.getLogger(__name__)


def create_app(
    config_provider: Optional[ConfigProvider] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    include_docs: bool = True,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config_provider: Source of proxy configuration (environment by default)
        http_client: Upstream HTTP client; when omitted one is created at startup
            and closed at shutdown
        include_docs: Serve /docs and /openapi.json

    Returns:
        Configured FastAPI application
    """
    provider = config_provider or EnvConfigProvider()
    proxy_config = provider.get_proxy_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifecycle - initialize and cleanup resources.
        """
        logger.info("Starting ChatKit session proxy...")
        if not proxy_config.is_configured:
            logger.warning("OPENAI_API_KEY is not set; create-session requests will fail")

        owns_client = http_client is None
        client = http_client or build_http_client(proxy_config)

        upstream = ChatKitClient(proxy_config, client)
        app.state.session_proxy = SessionProxy(proxy_config, upstream)
        logger.info(f"Upstream sessions endpoint: {proxy_config.sessions_url}")

        try:
            yield
        finally:
            logger.info("Shutting down ChatKit session proxy...")
            app.state.session_proxy = None
            if owns_client:
                await client.aclose()

    app = FastAPI(
        title="ChatKit Session Proxy",
        description="Mints and reuses ChatKit sessions for browser visitors",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if include_docs else None,
        redoc_url="/redoc" if include_docs else None,
        openapi_url="/openapi.json" if include_docs else None,
    )
    app.state.proxy_config = proxy_config
    app.state.session_proxy = None

    app.include_router(create_session_router())

    @app.get(HEALTH_PATH, response_model=HealthResponse)
    async def health(request: Request) -> HealthResponse:
        """
        Health check endpoint.

        Reports whether the upstream API key is configured; it does not
        call the upstream service.
        """
        config = request.app.state.proxy_config
        return HealthResponse(
            status="healthy",
            upstream_configured=config.is_configured,
            environment=config.environment,
            version=__version__,
        )

    return app


app = create_app()

"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from api.handlers import (
    handle_health,
    handle_image,
    handle_options,
    handle_tbo,
    handle_travclan,
    handle_tripjack,
)
from api.middleware import PreflightCORSMiddleware
from api.static import RelayStaticFiles
from core.config import Config
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from services.relay_service import RelayService
from services.upstream import UpstreamClient


def create_app(
    config: Config,
    logger: RequestLogger,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        limits = httpx.Limits(max_connections=100, max_keepalive_connections=20)
        client = httpx.AsyncClient(
            timeout=config.upstream_timeout,
            limits=limits,
            follow_redirects=False,
            transport=transport,
        )
        app.state.relay_service = RelayService(
            config=config,
            logger=logger,
            upstream=UpstreamClient(client),
            header_builder=HeaderBuilder(),
        )
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(title="Flight Search Relay", version="0.1.0", lifespan=lifespan)

    # Reflect any request origin; credentialed requests need an explicit origin
    app.add_middleware(
        PreflightCORSMiddleware,
        allow_origin_regex=".*",
        allow_credentials=True,
        allow_methods=list(config.cors.allow_methods),
        allow_headers=list(config.cors.allow_headers),
        expose_headers=list(config.cors.expose_headers),
    )

    @app.get("/health")
    async def health(request: Request):
        return await handle_health(request)

    @app.get("/images/{path:path}")
    async def images(path: str):
        return await handle_image(config, "images", path)

    @app.get("/Images/{path:path}")
    async def images_upper(path: str):
        return await handle_image(config, "Images", path)

    @app.post("/api/travclan/flights")
    async def travclan_flights(request: Request):
        return await handle_travclan(request, config, logger)

    @app.post("/api/tripjack/flights")
    async def tripjack_flights(request: Request):
        return await handle_tripjack(request, config, logger)

    @app.post("/api/tbo/flights")
    async def tbo_flights(request: Request):
        return await handle_tbo(request, config, logger)

    @app.options("/{path:path}")
    async def options(request: Request):
        return await handle_options(request)

    # The log directory is never served, even when it sits under static_dir
    static = RelayStaticFiles(
        directory=config.proxy.static_dir,
        html=True,
        hidden=[config.logging.directory],
    )
    app.mount("/", static, name="static")

    return app

"""FastAPI application factory.

``create_app()`` with no argument builds its own ``Container`` from the
environment and closes it on shutdown; tests pass a container they own.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from storefront.infrastructure.bootstrap import Container
from storefront.infrastructure.http import (
    auth_routes,
    category_routes,
    order_routes,
    payment_routes,
    product_routes,
)
from storefront.infrastructure.http.errors import register_error_handlers

logger = logging.getLogger(__name__)


def create_app(container: Container | None = None) -> FastAPI:
    owns_container = container is None
    container = container or Container()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Storefront API starting (database: %s)",
                    container.engine.url.render_as_string(hide_password=True))
        yield
        if owns_container:
            container.close()

    app = FastAPI(
        title="storefront API",
        description="Catalog, checkout and order API for the storefront",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=container.settings.cors_origins,
        allow_credentials="*" not in container.settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/", response_class=PlainTextResponse)
    def banner():
        return "Storefront backend running"

    @app.get("/api/health")
    def health_check():
        return {"status": "ok"}

    for module in (auth_routes, product_routes, category_routes, order_routes, payment_routes):
        app.include_router(module.router)

    return app

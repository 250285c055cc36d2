"""Storefront FastAPI application.

Single-domain web server that processes commands synchronously via HTTP.
Every request runs inside the storefront domain context.

Usage:
    storefront                                   # console script, binds HOST:PORT
    uvicorn storefront.server:create_app --factory --port 3000
"""

import asyncio
import os
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from storefront.api import register_error_handlers, routers
from storefront.api.errors import AVAILABLE_ENDPOINTS, generate_request_id
from storefront.config import get_settings
from storefront.domain import storefront
from storefront.utils.logging import bind_request_context, clear_request_context, get_logger

__version__ = "1.0.0"

logger = get_logger(__name__)

API_PREFIX = "/api"
SESSION_HEADERS = ("session-id", "x-session-id")


def terminate_on_unhandled_error(loop: asyncio.AbstractEventLoop, context: dict) -> None:
    """Event-loop exception handler: log the failure and exit with status 1."""
    logger.critical(
        "unhandled_async_error",
        message=context.get("message"),
        exc_info=context.get("exception"),
    )
    os._exit(1)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    asyncio.get_running_loop().set_exception_handler(terminate_on_unhandled_error)
    logger.info(
        "storefront_started",
        environment=settings.environment,
        payment_gateway=settings.payment_gateway,
        host=settings.host,
        port=settings.port,
    )
    yield
    logger.info("storefront_stopped")


def create_app(init_domain: bool = True) -> FastAPI:
    """Build the application.

    Pass ``init_domain=False`` when the domain has already been initialised,
    e.g. by a test fixture.
    """
    settings = get_settings()
    if init_domain:
        storefront.init()

    app = FastAPI(
        title="Storefront API",
        description="Product catalogue, session carts, checkout and order history",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context for each request."""
        with storefront.domain_context():
            return await call_next(request)

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        request_id = generate_request_id()
        request.state.request_id = request_id
        session = next((request.headers[h] for h in SESSION_HEADERS if request.headers.get(h)), None)

        bind_request_context(
            request_id=request_id,
            session_id=session or settings.default_session_id,
            method=request.method,
            path=request.url.path,
        )
        try:
            response = await call_next(request)
            logger.debug("request_completed", status_code=response.status_code)
            return response
        finally:
            clear_request_context()

    for router in routers:
        app.include_router(router, prefix=API_PREFIX)

    register_error_handlers(app)

    @app.get("/")
    async def root():
        return {
            "success": True,
            "message": "Welcome to the Storefront API",
            "version": __version__,
            "documentation": API_PREFIX,
            "health": "/health",
        }

    @app.get("/health")
    async def health():
        return {
            "status": "ok",
            "environment": get_settings().environment,
            "domain": {"name": storefront.name},
            "timestamp": datetime.now(UTC).isoformat(),
        }

    @app.get(API_PREFIX)
    async def api_index():
        return {
            "success": True,
            "name": "Storefront API",
            "version": __version__,
            "endpoints": AVAILABLE_ENDPOINTS,
            "headers": {
                "session-id": "Identifies the cart; x-session-id is accepted as a fallback",
            },
        }

    return app


def main():
    settings = get_settings()
    uvicorn.run(create_app(), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()

"""
minichat backend application entry point.

Two independent services are built from the same pieces:

* identity: ``POST /register``, ``POST /login``
* room:     ``GET /rooms``, ``POST /rooms``

Run one of them with ``python main.py identity`` or ``python main.py room``.
The schema must already be migrated (``python -m database.migrations upgrade``).
"""

from __future__ import annotations

import argparse
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import APIRouter, FastAPI

from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.rooms import router as rooms_router
from api.routes import router as common_router
from auth.routes import router as auth_router
from config.settings import Settings, config
from core.context import ServiceContext

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "httpcore", "httpx"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def _build_app(
    title: str,
    routers: list[APIRouter],
    context: Optional[ServiceContext],
    settings: Settings,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = context is None
        app.state.context = context or ServiceContext.from_settings(settings)
        logger.info("%s ready to accept requests.", title)
        try:
            yield
        finally:
            if owned:
                await app.state.context.close()

    app = FastAPI(title=title, version="1.0.0", lifespan=lifespan)
    if context is not None:
        # usable without running the lifespan (e.g. ASGI transports in tests)
        app.state.context = context

    register_middleware(app, settings.cors_origins)
    register_exception_handlers(app)

    app.include_router(common_router)
    for router in routers:
        app.include_router(router)
    return app


def create_identity_app(
    context: Optional[ServiceContext] = None,
    settings: Settings = config,
) -> FastAPI:
    return _build_app("identity", [auth_router], context, settings)


def create_room_app(
    context: Optional[ServiceContext] = None,
    settings: Settings = config,
) -> FastAPI:
    return _build_app("room", [rooms_router], context, settings)


SERVICES = {
    "identity": (create_identity_app, lambda s: s.identity_port),
    "room": (create_room_app, lambda s: s.room_port),
}


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Run a minichat service.")
    parser.add_argument("service", choices=sorted(SERVICES))
    parser.add_argument("--host", default=config.host)
    parser.add_argument("--port", type=int, default=None)
    args = parser.parse_args(argv)

    configure_logging(config)
    factory, default_port = SERVICES[args.service]
    port = args.port or default_port(config)
    logger.info("Starting %s service on %s:%d", args.service, args.host, port)
    uvicorn.run(
        factory(),
        host=args.host,
        port=port,
        log_level="debug" if config.debug else "info",
    )


if __name__ == "__main__":
    main()

"""
Todo API application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.routes import router as api_router
from auth.jwt import TokenSigner
from auth.routes import router as auth_router
from config.settings import Settings, config
from database.session import init_stores

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or config

    # Secret is read once here and fixed for the process lifetime.
    if not settings.jwt_secret:
        raise RuntimeError("JWT_SECRET is not configured; refusing to start")
    token_signer = TokenSigner(settings.jwt_secret, settings.jwt_expiry_seconds)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application ready to accept requests.")
        yield
        app.state.stores.close()

    app = FastAPI(
        title="Todo API",
        version="1.0.0",
        description="Per-user todo lists behind bearer-token auth.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.token_signer = token_signer
    app.state.stores = init_stores()

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/auth")
    app.include_router(api_router)

    return app


if __name__ == "__main__":
    uvicorn.run(
        "main:create_app",
        factory=True,
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )

"""
Application factory and server entry point for the ACL store.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI
from loguru import logger

from .config import AppConfig, get_config
from .logging import setup_logging


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """
    Create the ACL server application from configuration. The admin ACL is
    created during application startup, before any request is served.
    """
    from ..acl.store import KVACLStore
    from ..auth.authenticators import StaticTokenAuthenticator
    from ..kv.factory import create_kv_store
    from ..manager.manager import Manager

    config = config or get_config()
    setup_logging(config.logging)

    kv = create_kv_store(config.store)
    manager = Manager(KVACLStore(kv))
    if not config.auth.tokens:
        logger.warning("No access tokens configured; every request will be rejected")

    app = manager.new_handler(
        root_path=config.api.root_path,
        authenticate=StaticTokenAuthenticator(config.auth.tokens),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator:
        logger.info(f"Starting {config.app_name} ({config.store.backend.value} backend)...")
        await manager.initialize(config.manager.initial_admin_users)
        logger.info(f"{config.app_name} started successfully")

        yield

        logger.info(f"Shutting down {config.app_name}...")
        await kv.close()
        logger.info(f"{config.app_name} shutdown complete")

    app.router.lifespan_context = lifespan
    app.title = config.app_name
    app.version = config.version

    # With no root path every top-level name belongs to an ACL.
    if config.api.root_path.strip("/"):
        @app.get("/health", include_in_schema=False)
        async def health_check():
            """Health check endpoint"""
            return {"status": "healthy", "initialized": manager.initialized}

    return app


def run_server(host: Optional[str] = None, port: Optional[int] = None):
    """Run the server with uvicorn"""
    config = get_config()

    server_host = host if host is not None else config.api.host
    server_port = port if port is not None else config.api.port

    app = create_app(config)
    uvicorn.run(
        app,
        host=server_host,
        port=server_port,
        log_level=config.logging.level.lower(),
    )

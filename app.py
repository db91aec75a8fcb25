#!/usr/bin/env python3
"""
Main entry point for the TinyLink service.

Concurrency: The server handles multiple connections simultaneously via async I/O
(FastAPI + asyncpg connection pool). Set WORKERS > 1 for multi-process scaling
across CPU cores (each worker has its own DB pool).

Usage:
    python app.py

Environment variables:
    MODE - combined (API + dashboard), api, or frontend (dashboard proxying to API_URL)
    DATABASE_URL - PostgreSQL connection URL
    STORE_BACKEND - postgres or memory
    CREATE_TABLES - Set to 'true' to create the links table on startup
    API_URL - API server URL (frontend mode)
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from tinylink.config import Config, load_config
from tinylink.client import RemoteLinkRegistry
from tinylink.database import InMemoryLinkStore, PostgresLinkStore
from tinylink.service import LinkRegistry
from tinylink.shortcode import ShortCodeGenerator
from tinylink.common.logging_config import setup_logging
from tinylink_web import create_app


def build_registry(config: Config, logger):
    """Build the registry for the configured mode."""
    if config.mode == "frontend":
        logger.info(f"Proxying to API server at {config.api_url}")
        return RemoteLinkRegistry(api_url=config.api_url, logger=logger)

    if config.store_backend == "memory":
        logger.warning("Using in-memory link store; links are lost on restart")
        store = InMemoryLinkStore(logger=logger)
    else:
        store = PostgresLinkStore(
            db_config=config.database_url,
            pool_max_size=config.pool_max_size,
            connection_timeout_seconds=config.connection_timeout_seconds,
            create_tables=config.create_tables,
            logger=logger,
        )
        logger.info(f"Using PostgreSQL at {store.host}:{store.port}/{store.database}")

    return LinkRegistry(
        store=store,
        short_code_generator=ShortCodeGenerator(default_length=config.short_code_length),
        logger=logger,
        max_generation_attempts=config.max_generation_attempts,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info(f"Starting TinyLink in {config.mode} mode...")
    registry = build_registry(config, logger)
    app.state.registry = registry

    if await registry.health_check():
        logger.info("Service started successfully")
    else:
        logger.warning("Service started but its backend is not reachable yet")

    yield

    logger.info("Shutting down TinyLink...")
    await registry.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("TinyLink URL Shortener")
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url'})}")

    # Registry is created in lifespan, inside the server's event loop
    app = create_app(registry=None, config=config, logger=logger)
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=False,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

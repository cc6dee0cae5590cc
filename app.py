#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: The server handles multiple connections simultaneously via async I/O
(FastAPI + asyncpg connection pool). Set WORKERS > 1 for multi-process scaling
across CPU cores (each worker has its own DB pool). The memory:// store is
per process and only makes sense with a single worker.

Usage:
    python app.py

Environment variables:
    DATABASE_URL - postgresql:// connection URL, or memory://
    DATABASE_CREATE_TABLES - Set to '1' to create tables at startup
    BASE_URL - Base URL for short links
    JWT_SECRET - Secret used to sign bearer tokens
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import logging
import signal
import sys
from contextlib import asynccontextmanager
from typing import Tuple

import uvicorn
from fastapi import FastAPI

from config import Config, DEFAULT_JWT_SECRET, load_config
from shortener.auth import AuthService
from shortener.database import URLShortenerDBBase, create_database
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.common.logging_config import setup_logging
from web_app import create_app


def build_components(
    config: Config,
    logger: logging.Logger,
) -> Tuple[URLShortenerDBBase, URLShortenerService, AuthService]:
    """Wire the store, the URL service and the auth service from config."""
    db = create_database(
        config.database_url,
        pool_max_size=config.database_pool_max_size,
        logger=logger,
    )
    generator = ShortCodeGenerator(default_length=config.short_code_length)
    service = URLShortenerService(
        db=db,
        short_code_generator=generator,
        base_url=config.base_url,
        logger=logger,
        max_collision_retries=config.max_collision_retries,
    )
    auth = AuthService(
        db=db,
        secret=config.jwt_secret,
        algorithm=config.jwt_algorithm,
        expires_seconds=config.jwt_expires_seconds,
        bcrypt_rounds=config.bcrypt_rounds,
        logger=logger,
    )
    return db, service, auth


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger
    db = app.state.db
    service = app.state.service

    logger.info("Starting URL shortener service...")

    if config.database_create_tables:
        logger.info("Creating tables if needed")
        await db.init_schema()

    if not await db.health_check():
        logger.warning("Database is not reachable yet; requests will fail until it is")

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down URL shortener service...")
    await service.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.safe_dump()}")
    if config.jwt_secret == DEFAULT_JWT_SECRET:
        logger.warning("JWT_SECRET is the built-in default; set it before exposing the service")

    try:
        db, service, auth = build_components(config, logger)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    app = create_app(
        db_instance=db,
        service_instance=service,
        auth_instance=auth,
        config=config,
        logger=logger,
    )
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

#!/usr/bin/env python3
"""
Preset server entrypoint.

Loads configuration from environment variables and starts the FastAPI
server on loopback.

Usage:
    PORT=8080 python -m presetsmith.runtime
"""

from __future__ import annotations

import logging

import uvicorn

from presetsmith.core.config import ServerConfig
from presetsmith.core.logging import setup_logging

from .server import create_app_from_config

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point for the server."""
    config = ServerConfig.from_env()
    setup_logging(config.log_level)

    app = create_app_from_config(config)
    logger.info("Started on %s:%d", config.host, config.port)
    logger.info("Storage root: %s", config.storage_root)

    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()

"""
Logging setup for the preset server and CLI.

Console output only; every line carries a timestamp so request logs
(method, path, status) can be correlated with compile timings.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    # uvicorn's access log duplicates our request log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

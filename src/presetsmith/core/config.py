"""
Server configuration from environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

LOOPBACK_HOST = "127.0.0.1"


@dataclass
class ServerConfig:
    """Configuration for the preset server and CLI."""

    port: int
    storage_root: Path
    log_level: str = "INFO"
    tailwind_bin: Path | None = None
    cache_dir: Path | None = None

    @property
    def host(self) -> str:
        """The server only ever binds to loopback."""
        return LOOPBACK_HOST

    @classmethod
    def from_env(cls) -> ServerConfig:
        """Load configuration from environment variables."""
        tailwind_bin = os.environ.get("PRESETSMITH_TAILWIND_BIN")
        cache_dir = os.environ.get("PRESETSMITH_CACHE_DIR")
        return cls(
            port=int(os.environ.get("PORT", "8000")),
            storage_root=Path(os.environ.get("PRESETSMITH_ROOT", os.getcwd())),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            tailwind_bin=Path(tailwind_bin) if tailwind_bin else None,
            cache_dir=Path(cache_dir) if cache_dir else None,
        )

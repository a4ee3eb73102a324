"""Shared configuration, logging, and error types."""

from .config import ServerConfig
from .errors import (
    CompileError,
    CycleError,
    PresetError,
    PresetNotFoundError,
    PresetValidationError,
)
from .logging import setup_logging

__all__ = [
    "ServerConfig",
    "setup_logging",
    "PresetError",
    "PresetNotFoundError",
    "PresetValidationError",
    "CycleError",
    "CompileError",
]

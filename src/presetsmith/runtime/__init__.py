"""
Preset HTTP runtime.

Usage:
    python -m presetsmith.runtime
"""

from __future__ import annotations

from .exception_handlers import register_exception_handlers
from .routes import register_page_routes, register_preset_routes
from .server import create_app, create_app_from_config

__all__ = [
    "create_app",
    "create_app_from_config",
    "register_exception_handlers",
    "register_page_routes",
    "register_preset_routes",
]

"""Preset specification types."""

from .preset import (
    CompiledOutput,
    ComponentDefinition,
    ErrorDetail,
    Preset,
    TokenSource,
)

__all__ = [
    "Preset",
    "ComponentDefinition",
    "CompiledOutput",
    "ErrorDetail",
    "TokenSource",
]

"""Shared pytest fixtures for presetsmith tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from presetsmith.core.errors import CompileError
from presetsmith.presets import PresetStore
from presetsmith.specs import Preset


class InMemorySource:
    """PresetSource backed by a dict of name -> document."""

    def __init__(self, documents: dict[str, dict[str, Any]]):
        self.documents = documents
        self.loads: list[str] = []

    async def load(self, name: str) -> Preset | None:
        self.loads.append(name)
        document = self.documents.get(name)
        if document is None:
            return None
        return Preset.model_validate({**document, "name": name})


class FakeCompiler:
    """StyleCompiler that echoes the template instead of running Tailwind."""

    def __init__(self, error: CompileError | None = None):
        self.error = error
        self.calls: list[dict[str, Any]] = []
        self.resolved: list[dict[str, Any]] = []

    async def compile(self, config: dict[str, Any], template: str, *, minify: bool = False) -> str:
        self.calls.append({"config": config, "template": template, "minify": minify})
        if self.error is not None:
            raise self.error
        return f"/* compiled */\n{template}"

    async def resolve_config(self, config: dict[str, Any]) -> dict[str, Any]:
        self.resolved.append(config)
        return {**config, "prefix": ""}


@pytest.fixture
def fake_compiler() -> FakeCompiler:
    return FakeCompiler()


@pytest.fixture
def failing_compiler() -> FakeCompiler:
    return FakeCompiler(
        error=CompileError(
            "The `nope` class does not exist.", source=".card { @apply nope; }"
        )
    )


@pytest.fixture
def store(tmp_path: Path) -> PresetStore:
    return PresetStore(tmp_path)


@pytest.fixture
def source_factory():
    """Build an in-memory preset source from plain documents."""
    return InMemorySource

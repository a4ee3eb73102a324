"""Tests for the preset generation pipeline."""

from __future__ import annotations

import json

import pytest

from presetsmith.core.errors import CompileError, CycleError
from presetsmith.presets.engine import generate_preset
from presetsmith.specs import CompiledOutput, Preset


class TestGeneratePreset:
    @pytest.mark.asyncio
    async def test_success(self, source_factory, fake_compiler) -> None:
        preset = Preset(colors={"primary": "#000"}, components={"btn": {"apply": "flex"}})
        output = await generate_preset(preset, source_factory({}), fake_compiler)

        assert output.error is None
        assert ".btn { @apply flex; }" in output.css
        config = json.loads(output.config_json)
        assert config["theme"]["extend"]["colors"]["primary"] == {"DEFAULT": "#000"}

    @pytest.mark.asyncio
    async def test_passes_minify_flag(self, source_factory, fake_compiler) -> None:
        await generate_preset(Preset(minify=True), source_factory({}), fake_compiler)
        assert fake_compiler.calls[0]["minify"] is True

    @pytest.mark.asyncio
    async def test_chain_components_and_tokens(self, source_factory, fake_compiler) -> None:
        source = source_factory(
            {
                "base": {
                    "colors": "primary: #111",
                    "components": {"card": {"apply": "p-4"}},
                    "styles": "body { margin: 0; }",
                }
            }
        )
        leaf = Preset(extends="base", components={"btn": {"apply": "flex"}})
        output = await generate_preset(leaf, source, fake_compiler)

        template = fake_compiler.calls[0]["template"]
        assert template.index(".card") < template.index(".btn")
        assert "body { margin: 0; }" in template
        assert "primary" in output.config_json

    @pytest.mark.asyncio
    async def test_shadow_dom_mode(self, source_factory, fake_compiler) -> None:
        preset = Preset(shadowDom=True, components={"x-card": {"apply": "p-4"}})
        await generate_preset(preset, source_factory({}), fake_compiler)
        assert "x-card::part(component) { @apply p-4; }" in fake_compiler.calls[0]["template"]

    @pytest.mark.asyncio
    async def test_safelist_requested(self, source_factory, fake_compiler) -> None:
        preset = Preset(safelist=True, components={"btn": {"parts": {"icon": "w-4"}}})
        await generate_preset(preset, source_factory({}), fake_compiler)
        assert fake_compiler.calls[0]["config"]["safelist"] == ["btn", "btn__icon"]

    @pytest.mark.asyncio
    async def test_resolve_flag_uses_compiler_defaults(self, source_factory, fake_compiler) -> None:
        output = await generate_preset(Preset(resolve=True), source_factory({}), fake_compiler)
        assert len(fake_compiler.resolved) == 1
        assert json.loads(output.config_json)["prefix"] == ""

    @pytest.mark.asyncio
    async def test_compile_error_keeps_configuration(self, source_factory, failing_compiler) -> None:
        output = await generate_preset(
            Preset(colors="primary: #000"), source_factory({}), failing_compiler
        )

        assert output.error is not None
        assert output.error.message == "The `nope` class does not exist."
        assert output.error.source == ".card { @apply nope; }"
        assert output.css == ""
        assert "primary" in output.config_json

    @pytest.mark.asyncio
    async def test_resolve_failure_is_reported(self, source_factory, fake_compiler) -> None:
        async def resolve_config(config):
            raise CompileError("Configuration resolution timed out")

        fake_compiler.resolve_config = resolve_config
        output = await generate_preset(
            Preset(resolve=True, colors="primary: #000"), source_factory({}), fake_compiler
        )

        assert output.error is not None
        assert output.error.message == "Configuration resolution timed out"
        assert output.css == ""
        assert "primary" in output.config_json
        assert fake_compiler.calls == []

    @pytest.mark.asyncio
    async def test_cycle_raises_before_compiling(self, source_factory, fake_compiler) -> None:
        source = source_factory({"a": {"extends": "b"}, "b": {"extends": "a"}})
        with pytest.raises(CycleError):
            await generate_preset(Preset(name="a", extends="b"), source, fake_compiler)
        assert fake_compiler.calls == []


class TestCompiledOutput:
    def test_error_and_css_are_exclusive(self) -> None:
        with pytest.raises(ValueError):
            CompiledOutput(error={"message": "boom"}, css="body{}", json="{}")

    def test_serializes_json_alias(self) -> None:
        output = CompiledOutput(css="a{}", json="{}")
        assert output.model_dump(by_alias=True) == {"error": None, "css": "a{}", "json": "{}"}

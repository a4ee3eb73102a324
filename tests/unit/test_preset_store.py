"""Tests for preset persistence."""

from __future__ import annotations

from pathlib import Path

import pytest

from presetsmith.core.errors import PresetValidationError
from presetsmith.presets.store import (
    PresetStore,
    parse_document,
    parse_preset_text,
    sanitize_path,
)
from presetsmith.specs import CompiledOutput


class TestSanitizePath:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("../../etc/passwd", "././etc/passwd"),
            ("a....b", "a.b"),
            ("themes/dark", "themes/dark"),
            ("v1.2", "v1.2"),
        ],
    )
    def test_collapses_dot_runs(self, value: str, expected: str) -> None:
        assert sanitize_path(value) == expected


class TestParseDocument:
    def test_json_notation(self) -> None:
        assert parse_document('{"colors": {"primary": "#000"}}') == {"colors": {"primary": "#000"}}

    def test_yaml_notation(self) -> None:
        assert parse_document("extends: base\nminify: true\n") == {"extends": "base", "minify": True}

    def test_empty_document(self) -> None:
        assert parse_document("") == {}

    def test_invalid_yaml(self) -> None:
        with pytest.raises(PresetValidationError):
            parse_document("colors: [unclosed")

    def test_non_mapping(self) -> None:
        with pytest.raises(PresetValidationError, match="expected a mapping"):
            parse_document("- a\n- b\n")

    def test_preset_fields(self) -> None:
        preset = parse_preset_text("extends: base\nshadowDom: true\n", name="leaf")
        assert preset.name == "leaf"
        assert preset.extends == ["base"]
        assert preset.shadow_dom is True

    def test_invalid_preset_fields(self) -> None:
        with pytest.raises(PresetValidationError):
            parse_preset_text("components: 12\n")


class TestPresetStore:
    @pytest.mark.asyncio
    async def test_round_trip_is_byte_identical(self, store: PresetStore) -> None:
        text = "colors: |\r\n  primary: #000 // brand\n\n# trailing comment\n"
        await store.save("brand", text)
        assert await store.read_text("brand") == text

    @pytest.mark.asyncio
    async def test_layout(self, store: PresetStore, tmp_path: Path) -> None:
        await store.save("brand", "colors: {}\n")
        assert (tmp_path / "systems" / "brand.yml").is_file()

    @pytest.mark.asyncio
    async def test_load(self, store: PresetStore) -> None:
        await store.save("brand", "extends: base\n")
        preset = await store.load("brand")
        assert preset is not None
        assert preset.name == "brand"
        assert preset.extends == ["base"]

    @pytest.mark.asyncio
    async def test_unknown_preset(self, store: PresetStore) -> None:
        assert await store.read_text("missing") is None
        assert await store.load("missing") is None

    @pytest.mark.asyncio
    async def test_save_requires_name_and_body(self, store: PresetStore) -> None:
        with pytest.raises(PresetValidationError, match="Missing name or input"):
            await store.save("brand", "")
        with pytest.raises(PresetValidationError, match="Missing name or input"):
            await store.save("", "colors: {}")

    @pytest.mark.asyncio
    async def test_save_rejects_unparseable(self, store: PresetStore, tmp_path: Path) -> None:
        with pytest.raises(PresetValidationError):
            await store.save("brand", "colors: [unclosed")
        assert not (tmp_path / "systems" / "brand.yml").exists()

    @pytest.mark.asyncio
    async def test_traversal_stays_inside_root(self, store: PresetStore, tmp_path: Path) -> None:
        await store.save("../outside", "colors: {}\n")
        assert not (tmp_path.parent / "outside.yml").exists()
        assert (tmp_path / "systems" / "outside.yml").is_file()

    @pytest.mark.asyncio
    async def test_save_assets(self, store: PresetStore, tmp_path: Path) -> None:
        output = CompiledOutput(css=".btn{display:flex}", json='{\n  "theme": {}\n}')
        css_path, module_path = await store.save_assets("brand", output)

        assert css_path == (tmp_path / "presets" / "brand.css").resolve()
        assert css_path.read_text() == ".btn{display:flex}"
        assert module_path.read_text() == 'export default {\n  "theme": {}\n};\n'
        assert store.asset_path("brand.css") == css_path

    def test_missing_asset(self, store: PresetStore) -> None:
        assert store.asset_path("nothing.css") is None

"""Tests for extends chain resolution."""

from __future__ import annotations

import pytest

from presetsmith.core.errors import CycleError, PresetNotFoundError
from presetsmith.presets.chain import resolve_chain
from presetsmith.specs import Preset


def _names(chain: list[Preset] | None) -> list[str | None]:
    assert chain is not None
    return [preset.name for preset in chain]


class TestResolveChain:
    @pytest.mark.asyncio
    async def test_list_extends_keeps_declaration_order(self, source_factory) -> None:
        source = source_factory({"A": {"extends": ["B", "C"]}, "B": {}, "C": {}})
        assert _names(await resolve_chain("A", source)) == ["B", "C"]

    @pytest.mark.asyncio
    async def test_nested_extends_flattens_ancestor_first(self, source_factory) -> None:
        source = source_factory({"A": {"extends": "B"}, "B": {"extends": "C"}, "C": {}})
        assert _names(await resolve_chain("A", source)) == ["C", "B"]

    @pytest.mark.asyncio
    async def test_mixed_levels(self, source_factory) -> None:
        source = source_factory(
            {
                "A": {"extends": ["B", "D"]},
                "B": {"extends": "C"},
                "C": {},
                "D": {},
            }
        )
        assert _names(await resolve_chain("A", source)) == ["C", "B", "D"]

    @pytest.mark.asyncio
    async def test_no_extends_is_empty(self, source_factory) -> None:
        source = source_factory({"A": {}})
        assert await resolve_chain("A", source) == []

    @pytest.mark.asyncio
    async def test_unknown_leaf_name_is_none(self, source_factory) -> None:
        source = source_factory({})
        assert await resolve_chain("missing", source) is None

    @pytest.mark.asyncio
    async def test_inline_preset(self, source_factory) -> None:
        source = source_factory({"base": {}})
        leaf = Preset(extends=["base"])
        assert _names(await resolve_chain(leaf, source)) == ["base"]

    @pytest.mark.asyncio
    async def test_unknown_ancestor_raises(self, source_factory) -> None:
        source = source_factory({"A": {"extends": "ghost"}})
        with pytest.raises(PresetNotFoundError) as exc_info:
            await resolve_chain("A", source)
        assert exc_info.value.name == "ghost"

    @pytest.mark.asyncio
    async def test_cycle_raises(self, source_factory) -> None:
        source = source_factory({"A": {"extends": "B"}, "B": {"extends": "A"}})
        with pytest.raises(CycleError) as exc_info:
            await resolve_chain("A", source)
        assert exc_info.value.chain == ["A", "B", "A"]

    @pytest.mark.asyncio
    async def test_self_reference_raises(self, source_factory) -> None:
        source = source_factory({"A": {"extends": "A"}})
        with pytest.raises(CycleError):
            await resolve_chain("A", source)

    @pytest.mark.asyncio
    async def test_diamond_ancestor_appears_once(self, source_factory) -> None:
        source = source_factory(
            {
                "A": {"extends": ["B", "C"]},
                "B": {"extends": "D"},
                "C": {"extends": "D"},
                "D": {},
            }
        )
        assert _names(await resolve_chain("A", source)) == ["D", "B", "C"]

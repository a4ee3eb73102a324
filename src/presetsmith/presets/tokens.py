"""
Token table parser.

Normalizes a token table into a flat mapping of trimmed key -> trimmed value.
Two notations are accepted:

    colors: |
      primary:   #0d6efd   // brand
      DEFAULT:   #333

or an already structured mapping ``{"primary": "#0d6efd"}``. Values are not
validated; the style compiler reports bad units or colors later.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

COMMENT_SEPARATOR = "//"
DEFINITION_SEPARATOR = ":"


def parse_token_table(table: str | Mapping[Any, Any] | None) -> dict[str, str] | None:
    """
    Parse a token table.

    Args:
        table: Line notation string, structured mapping, or None

    Returns:
        Mapping of token key -> value, or None when nothing is declared
    """
    if not table or (isinstance(table, str) and not table.strip()):
        return None

    if isinstance(table, str):
        entries = _parse_lines(table)
    else:
        entries = list(table.items())

    tokens: dict[str, str] = {}
    for key, value in entries:
        tokens[str(key).strip()] = _stringify(value).strip()
    return tokens or None


def _parse_lines(text: str) -> list[tuple[str, str]]:
    entries: list[tuple[str, str]] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_SEPARATOR):
            continue
        if DEFINITION_SEPARATOR not in stripped:
            continue
        left, right = stripped.split(DEFINITION_SEPARATOR, 1)
        value = right.split(COMMENT_SEPARATOR, 1)[0]
        entries.append((left, value))
    return entries


def _stringify(value: Any) -> str:
    # YAML booleans should read the way they were written
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def merge_token_tables(*tables: Mapping[str, str] | None) -> dict[str, str] | None:
    """
    Merge parsed token tables key-wise; later tables win.

    Returns None when every table is empty or absent.
    """
    merged: dict[str, str] = {}
    for table in tables:
        if table:
            merged.update(table)
    return merged or None

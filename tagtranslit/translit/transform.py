"""
transform — Single-pass character substitution.
"""
from __future__ import annotations
from typing import Mapping

from .recovery import DEFAULT_SETTINGS, RecoverySettings, recover


def transform(text: str | None, table: Mapping[str, str]) -> str | None:
    """Replace each mapped character; replacements are never re-scanned."""
    if not text:
        return text
    return "".join(table.get(ch, ch) for ch in text)


def transliterate(
    text: str | None,
    table: Mapping[str, str],
    settings: RecoverySettings = DEFAULT_SETTINGS,
) -> str | None:
    """Repair mojibake in text, then transliterate it."""
    if not text:
        return text
    return transform(recover(text, settings), table)

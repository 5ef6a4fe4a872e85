"""
tagtranslit.translit — Encoding recovery and character transliteration.

Public API:
    load_map(path) -> TranslitMap
    resolve_map_path(requested) -> Path
    recover(text, settings) -> str
    transform(text, table) -> str
    transliterate(text, table, settings) -> str
"""
from .mapping import DEFAULT_MAP_NAME, MappingEntry, TranslitMap, load_map, resolve_map_path
from .recovery import DEFAULT_SETTINGS, RecoverySettings, placeholder_ratio, recover
from .transform import transform, transliterate

__all__ = [
    "DEFAULT_MAP_NAME",
    "DEFAULT_SETTINGS",
    "MappingEntry",
    "RecoverySettings",
    "TranslitMap",
    "load_map",
    "placeholder_ratio",
    "recover",
    "resolve_map_path",
    "transform",
    "transliterate",
]

"""
mapping — Transliteration map model and XML loader.

A map definition looks like:

    <Transliteration>
      <element from="а" to="a"/>
      <element from="щ" to="shch"/>
    </Transliteration>
"""
from __future__ import annotations
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Iterable, Iterator, Mapping
import xml.etree.ElementTree as ET

import structlog

from ..errors import MapLoadError

log = structlog.get_logger()

DEFAULT_MAP_NAME = "Default.xml"


@dataclass(frozen=True)
class MappingEntry:
    source: str
    target: str


class TranslitMap(Mapping[str, str]):
    """Read-only character → replacement mapping. Duplicate sources are rejected."""

    __slots__ = ("_table",)

    def __init__(self, entries: Iterable[MappingEntry] = ()):
        table: dict[str, str] = {}
        for entry in entries:
            if len(entry.source) != 1:
                raise MapLoadError(f"source must be a single character, got {entry.source!r}")
            if entry.source in table:
                raise MapLoadError(f"duplicate source character {entry.source!r}")
            table[entry.source] = entry.target
        self._table = table

    @classmethod
    def from_dict(cls, table: Mapping[str, str]) -> "TranslitMap":
        return cls(MappingEntry(k, v) for k, v in table.items())

    def __getitem__(self, key: str) -> str:
        return self._table[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"TranslitMap({len(self._table)} entries)"


def _entries(root: ET.Element) -> Iterator[MappingEntry]:
    for group in root.iter("Transliteration"):
        for node in group.findall("element"):
            frm = node.get("from")
            to = node.get("to")
            if frm is None or to is None:
                raise MapLoadError("<element> requires both 'from' and 'to' attributes")
            if not frm:
                raise MapLoadError("empty 'from' attribute")
            # only the first character of 'from' is significant
            yield MappingEntry(frm[0], to)


def load_map(path: str | Path) -> TranslitMap:
    """Parse a mapping definition file into a TranslitMap. Raises MapLoadError."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise MapLoadError(f"cannot read map '{path}': {e.strerror or e}") from e
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise MapLoadError(f"malformed map '{path}': {e}") from e

    try:
        table = TranslitMap(_entries(root))
    except MapLoadError as e:
        raise MapLoadError(f"{path}: {e}") from e
    log.debug("map_loaded", path=str(path), entries=len(table))
    return table


def resolve_map_path(requested: str | Path) -> Path:
    """
    Return the map file to load.

    A missing 'Default.xml' falls back to the map bundled with the package;
    any other path is returned as given.
    """
    path = Path(requested)
    if path.exists() or path.name != DEFAULT_MAP_NAME or len(path.parts) != 1:
        return path
    bundled = resources.files("tagtranslit") / "data" / DEFAULT_MAP_NAME
    log.debug("map_bundled_default", path=str(bundled))
    return Path(str(bundled))

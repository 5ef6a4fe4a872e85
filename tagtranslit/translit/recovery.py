"""
recovery — Repair text whose 8-bit bytes were decoded with the wrong codepage.

Typical case: Windows-1251 (Cyrillic) bytes shown through Windows-1252
(Western), e.g. "Ïåñíÿ" for "Песня".
"""
from __future__ import annotations
import codecs
from dataclasses import dataclass

import structlog

from ..errors import ConfigError

log = structlog.get_logger()

SOURCE_CODEPAGE = "cp1252"
DEST_CODEPAGE = "cp1251"
PLACEHOLDER = "?"
# Above this share of placeholders the text was most likely not mis-encoded.
PLACEHOLDER_THRESHOLD = 0.25


@dataclass(frozen=True)
class RecoverySettings:
    source_codepage: str = SOURCE_CODEPAGE
    dest_codepage: str = DEST_CODEPAGE
    placeholder: str = PLACEHOLDER
    threshold: float = PLACEHOLDER_THRESHOLD

    def __post_init__(self):
        for cp in (self.source_codepage, self.dest_codepage):
            try:
                codecs.lookup(cp)
            except LookupError as e:
                raise ConfigError(f"unknown codepage: {cp}") from e
        if len(self.placeholder) != 1 or not self.placeholder.isascii():
            raise ConfigError(f"placeholder must be one ASCII character, got {self.placeholder!r}")
        if not 0.0 <= self.threshold <= 1.0:
            raise ConfigError(f"placeholder threshold must be within [0, 1], got {self.threshold}")


DEFAULT_SETTINGS = RecoverySettings()


def _to_bytes(text: str, codepage: str, placeholder: str) -> bytes:
    try:
        return text.encode(codepage)
    except UnicodeEncodeError:
        pass
    out = bytearray()
    for ch in text:
        try:
            out += ch.encode(codepage)
        except UnicodeEncodeError:
            # Latin-1 range maps straight to its byte value
            out += bytes([ord(ch)]) if ord(ch) < 256 else placeholder.encode("ascii")
    return bytes(out)


def placeholder_ratio(text: str, placeholder: str = PLACEHOLDER) -> float:
    if not text:
        return 0.0
    return text.count(placeholder) / len(text)


def recover(text: str | None, settings: RecoverySettings = DEFAULT_SETTINGS) -> str | None:
    """Return the text as decoded with the destination codepage, or the input if that looks wrong."""
    if not text:
        return text
    raw = _to_bytes(text, settings.source_codepage, settings.placeholder)
    candidate = raw.decode(settings.dest_codepage, errors="replace").replace("\ufffd", settings.placeholder)

    if placeholder_ratio(candidate, settings.placeholder) > settings.threshold:
        return text
    if candidate != text:
        log.debug("encoding_recovered", original=text[:50], recovered=candidate[:50])
    return candidate

"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Make the package importable without installation
sys.path.insert(0, str(Path(__file__).parent.parent))

from tagtranslit.errors import TagWriteError
from tagtranslit.tags import SEQUENCE_FIELDS
from tagtranslit.translit import TranslitMap


# ============================================================================
# Mapping fixtures
# ============================================================================


SONG_MAP = {"п": "p", "а": "a", "б": "b", "с": "s", "е": "e", "н": "n", "я": "a"}
ALBUM_MAP = {"А": "A", "л": "l", "ь": "", "б": "b", "о": "o", "м": "m"}


@pytest.fixture
def song_map():
    """The small map used throughout: песня -> pesna."""
    return TranslitMap.from_dict(SONG_MAP)


@pytest.fixture
def full_map():
    """Song map plus the letters needed for 'Альбом' and capitalised names."""
    return TranslitMap.from_dict({**SONG_MAP, **ALBUM_MAP, "П": "P", "С": "S", "Н": "N"})


def map_xml(pairs):
    body = "\n".join(f'  <element from="{f}" to="{t}"/>' for f, t in pairs)
    return f'<?xml version="1.0" encoding="utf-8"?>\n<Transliteration>\n{body}\n</Transliteration>\n'


@pytest.fixture
def write_map(tmp_path):
    """Factory writing a mapping definition file and returning its path."""

    def _write(content, name="map.xml"):
        path = tmp_path / name
        if not isinstance(content, str):
            content = map_xml(content)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


# ============================================================================
# Tag container fake
# ============================================================================


class FakeTags:
    """In-memory stand-in for TagContainer."""

    def __init__(self, fields=None, fail_save=False):
        self.fields = dict(fields or {})
        self.fail_save = fail_save
        self.saved = 0

    def get_field(self, name):
        value = self.fields.get(name)
        if name in SEQUENCE_FIELDS:
            return list(value or [])
        return value

    def set_field(self, name, value):
        self.fields[name] = value

    def save(self):
        if self.fail_save:
            raise TagWriteError("cannot save tags: read-only")
        self.saved += 1


class FakeTagStore:
    """Hands out FakeTags by file name and records which paths were opened."""

    def __init__(self):
        self.tags = {}
        self.opened = []

    def add(self, name, **kwargs):
        self.tags[name] = FakeTags(**kwargs)
        return self.tags[name]

    def open(self, path):
        self.opened.append(Path(path))
        try:
            return self.tags[Path(path).name]
        except KeyError:
            raise TagWriteError("unsupported file format") from None


@pytest.fixture
def tag_store():
    return FakeTagStore()


# ============================================================================
# Logging
# ============================================================================


@pytest.fixture(autouse=True)
def no_log_files(monkeypatch):
    """Keep CLI runs from configuring handlers and writing log files."""
    monkeypatch.setattr("tagtranslit.cli.setup_logging", lambda level="WARNING": None)

"""
errors — Exception types raised by tagtranslit.

MapLoadError and ConfigError are fatal for a run; FileAccessError and
TagWriteError are reported against a single file.
"""
from __future__ import annotations


class TranslitError(Exception):
    """Base class for all tagtranslit errors."""


class MapLoadError(TranslitError):
    """Mapping definition missing, malformed or containing a duplicate source character."""


class ConfigError(TranslitError):
    """Invalid configuration value."""


class FileAccessError(TranslitError):
    """Rename/move of a file failed."""


class TagWriteError(TranslitError):
    """Opening or saving a file's tag container failed."""

"""
tagtranslit — Mojibake repair and transliteration for audio file names and tags.
"""
__version__ = "1.0.0"

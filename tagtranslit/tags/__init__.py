"""
tagtranslit.tags — Tag container adapter over mutagen.

Public API:
    open_tags(path) -> TagContainer
    TagContainer.get_field(name) / set_field(name, value) / save()
"""
from .container import (
    SCALAR_FIELDS,
    SEQUENCE_FIELDS,
    CommentEasyID3,
    TagContainer,
    open_tags,
)

__all__ = [
    "SCALAR_FIELDS",
    "SEQUENCE_FIELDS",
    "CommentEasyID3",
    "TagContainer",
    "open_tags",
]

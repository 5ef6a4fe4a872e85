"""
container — Uniform access to the tag fields tagtranslit rewrites.

ID3 tags (MP3, and the ID3 chunk of WAV/AIFF) are read with mutagen's ID3
class and accessed through the EasyID3 key registry; the ID3 version found in
the file is kept on save. Everything else goes through mutagen's easy
interfaces (EasyMP4, Vorbis comments, APEv2). Formats without one are refused.
"""
from __future__ import annotations
from pathlib import Path
from typing import Callable, List, Optional, Union

import structlog
from mutagen import File as MutagenFile, MutagenError
from mutagen._vorbis import VComment
from mutagen.apev2 import APEv2
from mutagen.easyid3 import EasyID3
from mutagen.easymp4 import EasyMP4Tags
from mutagen.id3 import COMM, ID3, ID3NoHeaderError

from ..errors import TagWriteError

log = structlog.get_logger()

# Field name → easy key
SCALAR_FIELDS = {
    "Album": "album",
    "Title": "title",
    "Comment": "comment",
}
SEQUENCE_FIELDS = {
    "AlbumArtists": "albumartist",
    "Performers": "artist",
}

FieldValue = Union[str, List[str], None]

EASY_TAG_TYPES = (EasyID3, EasyMP4Tags, VComment, APEv2)


class CommentEasyID3(EasyID3):
    """EasyID3 with an extra 'comment' key backed by the main COMM frame."""

    Get = dict(EasyID3.Get)
    Set = dict(EasyID3.Set)
    Delete = dict(EasyID3.Delete)
    List = dict(EasyID3.List)


def _main_comment(id3) -> Optional[COMM]:
    # The comment proper has an empty description; iTunNORM, iTunSMPB,
    # "ID3v1 Comment" and friends are separate COMM frames.
    for frame in id3.getall("COMM"):
        if frame.desc == "":
            return frame
    return None


def _comment_get(id3, key):
    frame = _main_comment(id3)
    if frame is None:
        raise KeyError(key)
    return list(frame.text)


def _comment_set(id3, key, value):
    frame = _main_comment(id3)
    if frame is None:
        id3.add(COMM(encoding=3, lang="eng", desc="", text=value))
    else:
        frame.encoding = 3
        frame.text = value


def _comment_delete(id3, key):
    frame = _main_comment(id3)
    if frame is None:
        raise KeyError(key)
    del id3[frame.HashKey]


CommentEasyID3.RegisterKey("comment", _comment_get, _comment_set, _comment_delete)


class ID3Fields:
    """Easy-key view over a raw ID3 tag, using CommentEasyID3's registry."""

    def __init__(self, id3: ID3):
        self.id3 = id3

    def get(self, key, default=None):
        try:
            return CommentEasyID3.Get[key](self.id3, key)
        except KeyError:
            return default

    def __contains__(self, key):
        return self.get(key) is not None

    def __getitem__(self, key):
        return CommentEasyID3.Get[key](self.id3, key)

    def __setitem__(self, key, value):
        CommentEasyID3.Set[key](self.id3, key, value)

    def __delitem__(self, key):
        CommentEasyID3.Delete[key](self.id3, key)


def id3_save_version(id3: ID3, existing: bool) -> int:
    """Major version to write: v2.4 files stay v2.4, new tags are v2.3."""
    if existing and id3.version >= (2, 4, 0):
        return 4
    return 3


def _key(name: str) -> str:
    try:
        return SCALAR_FIELDS.get(name) or SEQUENCE_FIELDS[name]
    except KeyError:
        raise KeyError(f"unknown tag field: {name}") from None


class TagContainer:
    """A file's tags, exposed as Album/Title/Comment/AlbumArtists/Performers."""

    def __init__(self, path: Path, tags, saver: Optional[Callable[[], None]] = None):
        self.path = path
        self._tags = tags
        self._saver = saver or tags.save

    def get_field(self, name: str) -> FieldValue:
        key = _key(name)
        try:
            values = [str(v) for v in self._tags.get(key, [])]
        except (KeyError, ValueError):
            values = []
        if name in SEQUENCE_FIELDS:
            return values
        return values[0] if values else None

    def set_field(self, name: str, value: FieldValue) -> None:
        key = _key(name)
        try:
            if value is None or value == [] or value == "":
                if key in self._tags:
                    del self._tags[key]
                return
            self._tags[key] = [value] if isinstance(value, str) else list(value)
        except (KeyError, TypeError, ValueError) as e:
            raise TagWriteError(f"cannot set {name}: {e}") from e

    def save(self) -> None:
        try:
            self._saver()
        except (MutagenError, OSError) as e:
            raise TagWriteError(f"cannot save tags: {e}") from e
        log.debug("tags_saved", file=str(self.path))


def _open_mp3(path: Path) -> TagContainer:
    existing = True
    try:
        id3 = ID3(str(path))
    except ID3NoHeaderError:
        id3, existing = ID3(), False
    except (MutagenError, OSError) as e:
        raise TagWriteError(f"cannot read tags: {e}") from e
    version = id3_save_version(id3, existing)
    return TagContainer(path, ID3Fields(id3), lambda: id3.save(str(path), v2_version=version))


def open_tags(path: str | Path) -> TagContainer:
    """Open the tag container of an audio file. Raises TagWriteError."""
    path = Path(path)
    if path.suffix.lower() == ".mp3":
        return _open_mp3(path)

    try:
        audio = MutagenFile(str(path), easy=True)
    except (MutagenError, OSError) as e:
        raise TagWriteError(f"cannot read tags: {e}") from e
    if audio is None:
        raise TagWriteError("unsupported file format")
    existing = audio.tags is not None
    if not existing:
        try:
            audio.add_tags()
        except (MutagenError, NotImplementedError) as e:
            raise TagWriteError(f"cannot create tags: {e}") from e

    tags = audio.tags
    if isinstance(tags, ID3):
        # WAV, AIFF, DSF: ID3 chunk without an easy wrapper
        version = id3_save_version(tags, existing)
        return TagContainer(path, ID3Fields(tags), lambda: audio.save(v2_version=version))
    if not isinstance(tags, EASY_TAG_TYPES):
        log.debug("no_easy_tags", file=str(path), tag_type=type(tags).__name__)
        raise TagWriteError("no easy tag interface")
    return TagContainer(path, audio)

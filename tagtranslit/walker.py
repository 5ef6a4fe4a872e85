"""
walker — Enumerate the files to process from user-supplied paths.

Directory entries are returned in listing order, which is filesystem
dependent and not sorted.
"""
from __future__ import annotations
import os
import stat
from pathlib import Path
from typing import Iterable, Iterator, List, Set, Tuple

import structlog

log = structlog.get_logger()


def is_link_like(entry: os.DirEntry) -> bool:
    """Symlinks, and on Windows junctions and other reparse points."""
    if entry.is_symlink():
        return True
    try:
        attrs = getattr(entry.stat(follow_symlinks=False), "st_file_attributes", 0)
    except OSError:
        return False
    return bool(attrs & stat.FILE_ATTRIBUTE_REPARSE_POINT)


def _identity(path: str) -> Tuple[int, int]:
    st = os.stat(path)
    return st.st_dev, st.st_ino


def _walk_dir(directory: str, recursive: bool, visited: Set[Tuple[int, int]]) -> Iterator[Path]:
    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as e:
        log.warning("list_dir_failed", dir=directory, error=str(e))
        return

    subdirs = []
    for entry in entries:
        try:
            if entry.is_file():
                yield Path(entry.path)
            elif recursive and entry.is_dir():
                subdirs.append(entry)
        except OSError as e:
            log.warning("stat_failed", path=entry.path, error=str(e))

    for entry in subdirs:
        if is_link_like(entry):
            log.debug("skip_link", dir=entry.path)
            continue
        try:
            ident = _identity(entry.path)
        except OSError as e:
            log.warning("stat_failed", path=entry.path, error=str(e))
            continue
        if ident in visited:
            log.debug("skip_visited", dir=entry.path)
            continue
        visited.add(ident)
        yield from _walk_dir(entry.path, recursive, visited)


def walk(root: str | Path, recursive: bool = False) -> Iterator[Path]:
    """
    Yield the files under root.

    A file root yields itself, a directory its files (and, when recursive,
    those of every non-link subdirectory), anything else nothing.
    """
    root = Path(root)
    if root.is_file():
        yield root
        return
    if not root.is_dir():
        log.info("path_not_found", path=str(root))
        return
    visited = {_identity(str(root))}
    yield from _walk_dir(str(root), recursive, visited)


def collect(roots: Iterable[str | Path], recursive: bool = False) -> List[Path]:
    """All files of all roots, in argument order."""
    files: List[Path] = []
    for root in roots:
        files.extend(walk(root, recursive))
    return files

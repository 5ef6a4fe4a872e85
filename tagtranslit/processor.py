"""
processor — Rename and retag one file at a time.

Errors for a single file become a Failure outcome; the run carries on with
the next file. A file renamed before its tag update failed stays renamed.
"""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

import structlog

from .errors import FileAccessError, TagWriteError
from .tags import SCALAR_FIELDS, SEQUENCE_FIELDS, TagContainer, open_tags
from .translit import DEFAULT_SETTINGS, RecoverySettings, TranslitMap, transliterate

log = structlog.get_logger()


@dataclass(frozen=True)
class TranslitContext:
    """Everything a run needs, built once and passed to every call."""
    table: TranslitMap
    recovery: RecoverySettings = DEFAULT_SETTINGS
    rename: bool = True
    retag: bool = True

    def translit(self, text: Optional[str]) -> Optional[str]:
        return transliterate(text, self.table, self.recovery)


@dataclass(frozen=True)
class Success:
    path: Path
    new_path: Path
    renamed: bool = False
    retagged: bool = False
    ok = True


@dataclass(frozen=True)
class Failure:
    path: Path
    kind: str  # "rename" | "tags"
    message: str
    ok = False


Outcome = Union[Success, Failure]


@dataclass
class RunReport:
    outcomes: List[Outcome] = field(default_factory=list)

    @property
    def failures(self) -> List[Failure]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def failed(self) -> bool:
        return any(not o.ok for o in self.outcomes)

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0


def rename_file(src: Path, ctx: TranslitContext) -> Path:
    """Transliterate the file name (not the directory) and move the file. Raises FileAccessError."""
    new_name = ctx.translit(src.name)
    if new_name == src.name:
        return src
    try:
        dst = src.with_name(new_name)
    except ValueError as e:
        raise FileAccessError(f"invalid file name {new_name!r}") from e
    try:
        # os.rename silently replaces an existing file on POSIX
        if dst.exists() and not os.path.samefile(src, dst):
            raise FileAccessError(f"'{dst.name}' already exists")
        os.rename(src, dst)
    except OSError as e:
        raise FileAccessError(e.strerror or str(e)) from e
    log.info("file_renamed", src=str(src), dst=str(dst))
    return dst


def retag_file(path: Path, ctx: TranslitContext, open_tags: Callable[[Path], TagContainer] = open_tags) -> None:
    """Transliterate the text fields of a file's tags and save them. Raises TagWriteError."""
    tags = open_tags(path)
    for name in SCALAR_FIELDS:
        value = tags.get_field(name)
        if value:
            tags.set_field(name, ctx.translit(value))
    for name in SEQUENCE_FIELDS:
        values = tags.get_field(name)
        if values:
            tags.set_field(name, [ctx.translit(v) for v in values])
    tags.save()
    log.info("tags_rewritten", file=str(path))


def process_file(
    path: str | Path,
    ctx: TranslitContext,
    open_tags: Callable[[Path], TagContainer] = open_tags,
) -> Outcome:
    src = Path(path)
    current = src
    stage = "rename"
    try:
        if ctx.rename:
            current = rename_file(src, ctx)
        stage = "tags"
        if ctx.retag:
            retag_file(current, ctx, open_tags)
    except (FileAccessError, TagWriteError) as e:
        log.warning("process_failed", file=str(current), stage=stage, error=str(e))
        return Failure(src, stage, str(e))
    except Exception as e:
        # tag libraries can fail in ways of their own on damaged files
        log.exception("process_failed", file=str(current), stage=stage, error=str(e))
        return Failure(src, stage, f"{type(e).__name__}: {e}")
    return Success(src, current, renamed=current != src, retagged=ctx.retag)


def process_files(
    paths: Iterable[str | Path],
    ctx: TranslitContext,
    on_outcome: Optional[Callable[[Outcome], None]] = None,
    open_tags: Callable[[Path], TagContainer] = open_tags,
) -> RunReport:
    """Process files one after another in the given order."""
    report = RunReport()
    for path in paths:
        outcome = process_file(path, ctx, open_tags)
        report.outcomes.append(outcome)
        if on_outcome is not None:
            on_outcome(outcome)
    return report

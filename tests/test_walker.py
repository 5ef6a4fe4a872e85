"""
Tests for file enumeration.
"""

import os

import pytest

from tagtranslit.walker import collect, walk


@pytest.fixture
def tree(tmp_path):
    """D/{f1,f2} and D/S/f3."""
    d = tmp_path / "D"
    (d / "S").mkdir(parents=True)
    for p in (d / "f1", d / "f2", d / "S" / "f3"):
        p.write_bytes(b"")
    return d


def _symlink(target, link):
    try:
        os.symlink(target, link, target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported here")


def names(paths):
    return {p.name for p in paths}


def test_non_recursive_lists_immediate_files(tree):
    assert names(walk(tree)) == {"f1", "f2"}


def test_recursive_descends(tree):
    found = list(walk(tree, recursive=True))
    assert names(found) == {"f1", "f2", "f3"}
    # files of a directory come before those of its subdirectories
    assert found[-1].name == "f3"


def test_link_like_subdirectory_skipped(tmp_path):
    d = tmp_path / "D"
    d.mkdir()
    (d / "f1").write_bytes(b"")
    (d / "f2").write_bytes(b"")
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    (elsewhere / "f3").write_bytes(b"")
    _symlink(elsewhere, d / "S")

    assert names(walk(d, recursive=True)) == {"f1", "f2"}


def test_symlink_cycle_terminates(tree):
    _symlink(tree, tree / "S" / "loop")
    assert names(walk(tree, recursive=True)) == {"f1", "f2", "f3"}


def test_file_root_yields_itself(tree):
    assert list(walk(tree / "f1", recursive=True)) == [tree / "f1"]


def test_missing_root_yields_nothing(tmp_path):
    assert list(walk(tmp_path / "missing", recursive=True)) == []


def test_empty_directory(tmp_path):
    assert list(walk(tmp_path)) == []


def test_collect_keeps_argument_order(tree, tmp_path):
    single = tmp_path / "single.mp3"
    single.write_bytes(b"")
    found = collect([single, tmp_path / "missing", tree])
    assert found[0] == single
    assert names(found[1:]) == {"f1", "f2"}

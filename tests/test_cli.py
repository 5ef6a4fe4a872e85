"""
Tests for the command line interface.
"""

import pytest
from mutagen.id3 import ID3, TIT2
from typer.testing import CliRunner

from tagtranslit import __version__
from tagtranslit.cli import app
from tagtranslit.config import ENV_MAP

from conftest import ALBUM_MAP, SONG_MAP, map_xml

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    for key in list(ENV_MAP) + ["TAGTRANSLIT_CONFIG"]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def map_file(write_map):
    return write_map(list({**SONG_MAP, **ALBUM_MAP, "П": "P", "С": "S"}.items()))


@pytest.fixture
def music(tmp_path):
    folder = tmp_path / "music"
    (folder / "sub").mkdir(parents=True)
    song = folder / "Песня.mp3"
    song.write_bytes(b"\x00" * 128)
    id3 = ID3()
    id3.add(TIT2(encoding=3, text="Альбом"))
    id3.save(str(song))
    (folder / "sub" / "Сон.mp3").write_bytes(b"\x00" * 128)
    return folder


def test_end_to_end(music, map_file):
    result = runner.invoke(app, ["-m", str(map_file), str(music / "Песня.mp3")])

    assert result.exit_code == 0, result.output
    renamed = music / "Pesna.mp3"
    assert renamed.exists()
    assert str(ID3(str(renamed))["TIT2"]) == "Albom"
    assert "Pesna.mp3" in result.output


def test_directory_non_recursive(music, map_file):
    result = runner.invoke(app, ["--map", str(map_file), str(music)])

    assert result.exit_code == 0, result.output
    assert (music / "Pesna.mp3").exists()
    assert (music / "sub" / "Сон.mp3").exists()


def test_directory_recursive(music, map_file):
    result = runner.invoke(app, ["-r", "-m", str(map_file), str(music)])

    assert result.exit_code == 0, result.output
    assert (music / "sub" / "Son.mp3").exists()


def test_suppress_name_and_tag(music, map_file):
    result = runner.invoke(app, ["-n", "-t", "-m", str(map_file), str(music)])

    assert result.exit_code == 0, result.output
    song = music / "Песня.mp3"
    assert song.exists()
    assert str(ID3(str(song))["TIT2"]) == "Альбом"


def test_failure_gives_nonzero_exit(music, map_file):
    (music / "Pesna.mp3").write_bytes(b"")

    result = runner.invoke(app, ["-t", "-m", str(map_file), str(music / "Песня.mp3")])

    assert result.exit_code == 1
    assert "failed" in result.output


def test_bundled_default_map(music):
    result = runner.invoke(app, ["-t", str(music / "Песня.mp3")])

    assert result.exit_code == 0, result.output
    assert (music / "Pesnya.mp3").exists()


def test_missing_map_is_fatal(music, tmp_path):
    result = runner.invoke(app, ["-m", str(tmp_path / "none.xml"), str(music)])

    assert result.exit_code == 2
    assert (music / "Песня.mp3").exists()


def test_duplicate_map_entry_is_fatal(music, write_map):
    path = write_map(map_xml([("а", "a"), ("а", "b")]))

    result = runner.invoke(app, ["-m", str(path), str(music)])

    assert result.exit_code == 2
    assert (music / "Песня.mp3").exists()


def test_config_file_supplies_default_map(music, map_file, tmp_path):
    config = tmp_path / "conf.yaml"
    config.write_text(f"default_map: {map_file}\n", encoding="utf-8")

    result = runner.invoke(app, ["-c", str(config), "-t", str(music / "Песня.mp3")])

    assert result.exit_code == 0, result.output
    assert (music / "Pesna.mp3").exists()


def test_missing_paths_only(tmp_path, map_file):
    result = runner.invoke(app, ["-m", str(map_file), str(tmp_path / "nothing")])

    assert result.exit_code == 0
    assert "No files found" in result.output


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_lists_options():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for option in ("--map", "--name", "--tag", "--recursive"):
        assert option in result.output

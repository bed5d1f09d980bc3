from __future__ import annotations

from pathlib import Path

import pytest

from treeconf.config.file import LocationPaths
from treeconf.constants import SUPPORTED_EXTENSIONS


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")
    return path


def test_find_file_prefers_earlier_directory(tmp_path: Path) -> None:
    first = _touch(tmp_path / "first" / "config.toml")
    _touch(tmp_path / "second" / "config.yaml")
    locations = LocationPaths([tmp_path / "first", tmp_path / "second"])

    assert locations.find_file("config", SUPPORTED_EXTENSIONS) == first


def test_prepend_takes_priority_over_append(tmp_path: Path) -> None:
    _touch(tmp_path / "p2" / "config.yml")
    preferred = _touch(tmp_path / "p1" / "config.yml")
    locations = LocationPaths()
    locations.append(tmp_path / "p2")
    locations.prepend(tmp_path / "p1")

    assert locations.find_file("config", SUPPORTED_EXTENSIONS) == preferred


@pytest.mark.parametrize(
    ("present", "expected"),
    [
        ([".toml", ".json", ".yml", ".yaml"], ".yaml"),
        ([".toml", ".json", ".yml"], ".yml"),
        ([".toml", ".json"], ".json"),
        ([".toml"], ".toml"),
    ],
)
def test_find_file_follows_extension_priority(tmp_path: Path, present: list[str], expected: str) -> None:
    for extension in present:
        _touch(tmp_path / f"config{extension}")

    found = LocationPaths([tmp_path]).find_file("config", SUPPORTED_EXTENSIONS)

    assert found == tmp_path / f"config{expected}"


def test_find_file_ignores_other_names_and_extensions(tmp_path: Path) -> None:
    _touch(tmp_path / "config.ini")
    _touch(tmp_path / "settings.yml")

    assert LocationPaths([tmp_path]).find_file("config", SUPPORTED_EXTENSIONS) is None


def test_find_file_without_locations_returns_none() -> None:
    assert LocationPaths().find_file("config", SUPPORTED_EXTENSIONS) is None


def test_default_directory_uses_first_location(tmp_path: Path) -> None:
    assert LocationPaths([tmp_path, tmp_path / "other"]).default_directory() == tmp_path


def test_default_directory_falls_back_to_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert LocationPaths().default_directory() == tmp_path.resolve()


def test_paths_expand_user(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    locations = LocationPaths(["~/conf"])

    assert list(locations) == [tmp_path / "conf"]
    assert locations.first == tmp_path / "conf"
    assert len(locations) == 1

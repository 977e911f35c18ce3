"""Tests for definition file discovery."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from fixturectl.infrastructure.discovery import FixtureDiscovery


def _touch(root: Path, relative: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")
    return path


@pytest.fixture
def fixtures_dir(tmp_path: Path) -> Path:
    root = tmp_path / "tests" / "fixtures"
    for name in ("C_fixture.py", "A_fixture.py", "B_fixture.py", "helpers.py", "notes.txt"):
        _touch(root, name)
    return root


class TestDiscoverAll:
    def test_sorted_by_name(self, fixtures_dir: Path) -> None:
        found = FixtureDiscovery(fixtures_dir, suffix="_fixture").discover_all()
        assert [f.name for f in found] == ["A", "B", "C"]

    def test_ignores_files_without_suffix(self, fixtures_dir: Path) -> None:
        found = FixtureDiscovery(fixtures_dir, suffix="_fixture").discover_all()
        assert all(f.path.name.endswith("_fixture.py") for f in found)

    def test_missing_directory_is_empty(self, tmp_path: Path) -> None:
        assert FixtureDiscovery(tmp_path / "nope", suffix="_fixture").discover_all() == []

    def test_recursive_search(self, fixtures_dir: Path) -> None:
        _touch(fixtures_dir, "nested/deep/D_fixture.py")
        found = FixtureDiscovery(fixtures_dir, suffix="_fixture").discover_all()
        assert [f.name for f in found] == ["A", "B", "C", "D"]

    def test_non_recursive_search(self, fixtures_dir: Path) -> None:
        _touch(fixtures_dir, "nested/D_fixture.py")
        found = FixtureDiscovery(fixtures_dir, suffix="_fixture", recursive=False).discover_all()
        assert [f.name for f in found] == ["A", "B", "C"]

    def test_skips_cache_directories(self, fixtures_dir: Path) -> None:
        _touch(fixtures_dir, "__pycache__/E_fixture.py")
        found = FixtureDiscovery(fixtures_dir, suffix="_fixture").discover_all()
        assert "E" not in [f.name for f in found]

    def test_duplicate_stem_first_wins(
        self, fixtures_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        nested = _touch(fixtures_dir, "z/A_fixture.py")
        with caplog.at_level(logging.WARNING, logger="fixturectl"):
            found = FixtureDiscovery(fixtures_dir, suffix="_fixture").discover_all()
        by_name = {f.name: f.path for f in found}
        assert by_name["A"] == fixtures_dir / "A_fixture.py"
        assert by_name["A"] != nested
        assert "Duplicate fixture" in caplog.text

    def test_bare_suffix_file_is_ignored(self, fixtures_dir: Path) -> None:
        _touch(fixtures_dir, "_fixture.py")
        found = FixtureDiscovery(fixtures_dir, suffix="_fixture").discover_all()
        assert [f.name for f in found] == ["A", "B", "C"]


class TestDiscover:
    def test_request_order(self, fixtures_dir: Path) -> None:
        found = FixtureDiscovery(fixtures_dir, suffix="_fixture").discover(["C", "A"])
        assert [f.name for f in found] == ["C", "A"]

    def test_unknown_names_are_dropped(self, fixtures_dir: Path) -> None:
        found = FixtureDiscovery(fixtures_dir, suffix="_fixture").discover(["A", "Ghost"])
        assert [f.name for f in found] == ["A"]

    def test_repeated_names_once(self, fixtures_dir: Path) -> None:
        found = FixtureDiscovery(fixtures_dir, suffix="_fixture").discover(["B", "B"])
        assert [f.name for f in found] == ["B"]

    def test_glob_pattern(self, fixtures_dir: Path) -> None:
        _touch(fixtures_dir, "Alpha_fixture.py")
        found = FixtureDiscovery(fixtures_dir, suffix="_fixture").discover(["A*"])
        assert [f.name for f in found] == ["A", "Alpha"]

    def test_case_sensitive(self, fixtures_dir: Path) -> None:
        assert FixtureDiscovery(fixtures_dir, suffix="_fixture").discover(["a"]) == []

    def test_missing(self, fixtures_dir: Path) -> None:
        discovery = FixtureDiscovery(fixtures_dir, suffix="_fixture")
        assert discovery.missing(["A", "Ghost", "B*", "Z*"]) == ["Ghost", "Z*"]

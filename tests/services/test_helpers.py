"""Tests for service helper functions."""

from datetime import datetime

from fixturectl.services._helpers import now_iso, parse_name_list


class TestParseNameList:
    def test_none(self) -> None:
        assert parse_name_list(None) is None

    def test_empty_string(self) -> None:
        assert parse_name_list("") == []

    def test_splits_and_strips(self) -> None:
        assert parse_name_list("a, b,,c ") == ["a", "b", "c"]


def test_now_iso_is_timezone_aware() -> None:
    assert datetime.fromisoformat(now_iso()).tzinfo is not None

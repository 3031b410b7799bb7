"""Tests for core data types."""

from wikistage.core.types import Action, Page


class TestPage:
    """Tests for Page."""

    def test__defaults(self) -> None:
        page = Page(title="test")

        assert page.body == b""
        assert page.prefix == ""

    def test__text__decodes_utf8(self) -> None:
        assert Page(title="test", body="Grüße".encode()).text == "Grüße"

    def test__text__replaces_invalid_bytes(self) -> None:
        assert Page(title="test", body=b"ok\xff").text == "ok�"


class TestAction:
    """Tests for Action."""

    def test__values(self) -> None:
        assert [a.value for a in Action] == ["view", "edit", "save"]

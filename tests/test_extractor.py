"""Tests for link extraction (pattern scan + dedup)."""

from __future__ import annotations

import pytest

from linkcheck.errors import ExtractionError
from linkcheck.extractor import extract

_MIXED_DOC = """\
# Release notes

See https://example.com/a and [link](https://example.com/b) and https://example.com/a again.
Docs live at <https://docs.example.org/guide> and "http://old.example.net/path".
A relative [page](./other.md) and a [mail](mailto:team@example.com) link.
Trailing paren (https://example.com/paren) is trimmed.
"""


class TestScenarios:
    def test_duplicate_bare_link_dropped(self) -> None:
        text = (
            "See https://example.com/a and [link](https://example.com/b) "
            "and https://example.com/a again"
        )
        assert extract(text) == ("https://example.com/a", "https://example.com/b")

    def test_non_http_markdown_target_rejected(self) -> None:
        assert extract("[click](not-a-url)") == ()

    def test_empty_input(self) -> None:
        assert extract("") == ()

    def test_no_links(self) -> None:
        assert extract("Nothing to see here, move along.") == ()


class TestBareUris:
    def test_stops_at_excluded_characters(self) -> None:
        links = extract(_MIXED_DOC)
        assert "https://docs.example.org/guide" in links
        assert "http://old.example.net/path" in links
        assert "https://example.com/paren" in links

    def test_stops_at_whitespace(self) -> None:
        assert extract("go to https://example.com/x\tnow") == ("https://example.com/x",)

    def test_scheme_only_is_not_a_link(self) -> None:
        assert extract("[empty](http://) and [blank](https://)") == ()

    def test_plain_http_accepted(self) -> None:
        assert extract("http://example.com") == ("http://example.com",)


class TestMarkdownLinks:
    def test_target_captured(self) -> None:
        assert extract("[Docs](https://example.com/docs)") == ("https://example.com/docs",)

    def test_relative_and_mailto_targets_skipped(self) -> None:
        links = extract(_MIXED_DOC)
        assert "./other.md" not in links
        assert "mailto:team@example.com" not in links

    def test_several_links_on_one_line_in_order(self) -> None:
        text = "[a](https://a.example.com) then [b](https://b.example.com)"
        assert extract(text) == ("https://a.example.com", "https://b.example.com")

    def test_title_dropped_from_target(self) -> None:
        text = '[docs](https://example.com/docs "The docs")'
        assert extract(text) == ("https://example.com/docs",)

    def test_trailing_space_dropped_from_target(self) -> None:
        assert extract("[x](https://example.com/y )") == ("https://example.com/y",)

    def test_angle_bracket_target_unwrapped(self) -> None:
        assert extract("[a](<https://example.com/z>)") == ("https://example.com/z",)


class TestProperties:
    def test_every_link_has_http_prefix(self) -> None:
        for link in extract(_MIXED_DOC):
            assert link.startswith(("http://", "https://"))

    def test_no_duplicates(self) -> None:
        links = extract(_MIXED_DOC * 3)
        assert len(links) == len(set(links))

    def test_deterministic(self) -> None:
        assert extract(_MIXED_DOC) == extract(_MIXED_DOC)

    def test_first_seen_order_preserved(self) -> None:
        text = "https://z.example.com https://a.example.com https://z.example.com"
        assert extract(text) == ("https://z.example.com", "https://a.example.com")


def test_pattern_compile_failure_raises(monkeypatch) -> None:
    monkeypatch.setattr("linkcheck.extractor._LINK_PATTERN", "(unclosed")
    with pytest.raises(ExtractionError):
        extract("https://example.com")

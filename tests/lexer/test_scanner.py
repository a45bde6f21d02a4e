"""Behavioural tests for the Scanner: classification, accumulation, feeding."""

import pytest

from orgscan.errors import InvalidEncodingError, ScannerFinalizedError
from orgscan.items import Comment, Headline, ItemType, Keyword, Text
from orgscan.lexer import Scanner
from orgscan.stream import ItemStream


def _scan(*chunks: str | bytes) -> list:
    scanner = Scanner(ItemStream(capacity=0))
    for chunk in chunks:
        scanner.feed(chunk)
    scanner.finalize()
    return scanner.stream.drain()


class TestSingleItems:
    def test_keyword(self) -> None:
        (item,) = _scan("#+TITLE: My Blog")
        assert isinstance(item, Keyword)
        assert (item.key, item.value) == ("TITLE", "My Blog")

    def test_comment(self) -> None:
        (item,) = _scan("# a note")
        assert isinstance(item, Comment)
        assert item.body == " a note"

    def test_headline(self) -> None:
        (item,) = _scan("* Heading One")
        assert isinstance(item, Headline)
        assert (item.level, item.body, item.tags) == (1, "Heading One", ())

    def test_headline_with_tags(self) -> None:
        (item,) = _scan("** Heading :tag1:tag2:")
        assert (item.level, item.body, item.tags) == (2, "Heading", ("tag1", "tag2"))

    def test_star_without_space_is_text(self) -> None:
        (item,) = _scan("*NotAHeading")
        assert isinstance(item, Text)
        assert item.body == "*NotAHeading"

    def test_bogus_keyword_is_text(self) -> None:
        (item,) = _scan("#+ KEY: VALUE")
        assert item.type is ItemType.TEXT

    def test_empty_input(self) -> None:
        assert _scan("") == []
        assert _scan() == []


class TestAccumulation:
    def test_two_comments_merge(self) -> None:
        (item,) = _scan("# a note\n# another")
        assert isinstance(item, Comment)
        assert item.body == " a note\n another"

    def test_three_text_lines_merge_and_close(self) -> None:
        items = _scan("one\ntwo\nthree\n#+KEY: v")
        assert len(items) == 2
        text, keyword = items
        assert isinstance(text, Text)
        assert text.body == "one\ntwo\nthree"
        assert text.span.start.line == 1
        assert text.span.end.line == 3
        assert isinstance(keyword, Keyword)

    def test_text_keeps_leading_whitespace(self) -> None:
        (item,) = _scan("   This is some text\n\tindented")
        assert item.body == "   This is some text\n\tindented"

    def test_comment_then_text(self) -> None:
        comment, text = _scan("# This is a comment\nThis is some text -- line 2")
        assert isinstance(comment, Comment)
        assert isinstance(text, Text)
        assert text.body == "This is some text -- line 2"

    def test_text_then_comment(self) -> None:
        text, comment = _scan("This is some text -- line 1\n# This is a comment")
        assert isinstance(text, Text)
        assert isinstance(comment, Comment)

    def test_headlines_never_merge(self) -> None:
        source = "\n".join("*" * n + f" This is a heading {n}" for n in range(1, 8))
        items = _scan(source)
        assert [item.level for item in items] == list(range(1, 8))

    def test_blank_lines_are_text(self) -> None:
        headline, text, keyword = _scan("* H\n\n\n#+K: v")
        assert isinstance(text, Text)
        assert text.body == "\n"
        assert text.span.lines == 2

    def test_keyword_between_comments_splits_them(self) -> None:
        items = _scan("# a\n#+K: v\n# b")
        assert [type(item) for item in items] == [Comment, Keyword, Comment]

    def test_document(self) -> None:
        source = (
            "#+TITLE: Corrupt Memory\n"
            "#+AUTHOR: Jim\n"
            "# draft notes\n"
            "#   second note\n"
            "* Welcome :blog:intro:\n"
            "Some body text\n"
            "spanning two lines\n"
            "** Details\n"
        )
        items = _scan(source)
        summary = [(item.type.name, getattr(item, "body", getattr(item, "value", None))) for item in items]
        assert summary == [
            ("KEYWORD", "Corrupt Memory"),
            ("KEYWORD", "Jim"),
            ("COMMENT", " draft notes\n   second note"),
            ("HEADLINE", "Welcome"),
            ("TEXT", "Some body text\nspanning two lines"),
            ("HEADLINE", "Details"),
            ("TEXT", ""),
        ]
        assert items[3].tags == ("blog", "intro")


class TestFeeding:
    def test_feed_returns_emitted_count(self) -> None:
        scanner = Scanner(ItemStream(capacity=0))
        assert scanner.feed("#+A: 1\n#+B: 2\n# c\n") == 2
        assert scanner.finalize() == 2  # comment, then the empty final line

    def test_mid_line_split_emits_nothing_for_partial_line(self) -> None:
        scanner = Scanner(ItemStream(capacity=0))
        assert scanner.feed("* Head") == 0
        assert len(scanner.stream) == 0
        scanner.feed("line :t:\nrest")
        assert len(scanner.stream) == 1
        headline = scanner.stream.get()
        assert headline.body == "Headline"
        assert headline.tags == ("t",)

    @pytest.mark.parametrize("split", range(0, 40))
    def test_split_matches_single_feed(self, split: int) -> None:
        source = "#+TITLE: x\n# c1\n# c2\n* H :a:b:\ntext\n"
        assert _scan(source[:split], source[split:]) == _scan(source)

    def test_bytes_and_str_are_equivalent(self) -> None:
        source = "* Café :fr:\nbody"
        assert _scan(source.encode()) == _scan(source)

    def test_feed_after_finalize_raises(self) -> None:
        scanner = Scanner(ItemStream(capacity=0))
        scanner.finalize()
        with pytest.raises(ScannerFinalizedError):
            scanner.feed("late")

    def test_finalize_twice_raises(self) -> None:
        scanner = Scanner(ItemStream(capacity=0))
        scanner.finalize()
        with pytest.raises(ScannerFinalizedError):
            scanner.finalize()

    def test_finalize_closes_stream(self) -> None:
        scanner = Scanner(ItemStream(capacity=0))
        scanner.feed("x")
        scanner.finalize()
        assert scanner.stream.closed

    def test_invalid_encoding_is_fatal(self) -> None:
        scanner = Scanner(ItemStream(capacity=0), source_file="bad.org")
        with pytest.raises(InvalidEncodingError) as exc_info:
            scanner.feed(b"ok\n\xc3\x28\n")
        assert exc_info.value.lineno == 2
        assert exc_info.value.source_file == "bad.org"


class TestCancellation:
    def test_cancelled_scanner_stops_feeding(self) -> None:
        scanner = Scanner(ItemStream(capacity=0))
        scanner.feed("#+A: 1\n")
        scanner.cancel()
        assert scanner.cancelled
        assert scanner.feed("#+B: 2\n") == 0
        assert scanner.finalize() == 0
        assert scanner.stream.closed
        assert scanner.stream.drain() == []

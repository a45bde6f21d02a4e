"""Tests for the block state machine and scanner state consistency.

transition() is pure and tested in isolation; the Scanner tests verify
that internal state is cleaned up after each block is emitted.
"""

from __future__ import annotations

import pytest

from orgscan.items import Comment, Text
from orgscan.lexer import Scanner, ScanState, transition
from orgscan.lexer.classifiers import LineKind
from orgscan.stream import ItemStream

IDLE = ScanState.IDLE
IN_COMMENT = ScanState.IN_COMMENT
IN_TEXT = ScanState.IN_TEXT


class TestTransition:
    @pytest.mark.parametrize(
        ("state", "kind", "expected"),
        [
            (IDLE, LineKind.KEYWORD, (IDLE, False)),
            (IDLE, LineKind.HEADLINE, (IDLE, False)),
            (IDLE, LineKind.COMMENT, (IN_COMMENT, False)),
            (IDLE, LineKind.TEXT, (IN_TEXT, False)),
            (IN_COMMENT, LineKind.KEYWORD, (IDLE, True)),
            (IN_COMMENT, LineKind.HEADLINE, (IDLE, True)),
            (IN_COMMENT, LineKind.COMMENT, (IN_COMMENT, False)),
            (IN_COMMENT, LineKind.TEXT, (IN_TEXT, True)),
            (IN_TEXT, LineKind.KEYWORD, (IDLE, True)),
            (IN_TEXT, LineKind.HEADLINE, (IDLE, True)),
            (IN_TEXT, LineKind.COMMENT, (IN_COMMENT, True)),
            (IN_TEXT, LineKind.TEXT, (IN_TEXT, False)),
        ],
    )
    def test_table(
        self, state: ScanState, kind: LineKind, expected: tuple[ScanState, bool]
    ) -> None:
        assert transition(state, kind) == expected


def _scanner() -> Scanner:
    return Scanner(ItemStream(capacity=0))


class TestScannerState:
    def test_starts_idle(self) -> None:
        assert _scanner().state is IDLE

    def test_comment_block_stays_open_between_lines(self) -> None:
        scanner = _scanner()
        scanner.feed("# one\n# two\n")
        assert scanner.state is IN_COMMENT
        assert len(scanner.stream) == 0

    def test_text_block_stays_open_between_lines(self) -> None:
        scanner = _scanner()
        scanner.feed("a\nb\n")
        assert scanner.state is IN_TEXT
        assert len(scanner.stream) == 0

    def test_keyword_returns_to_idle(self) -> None:
        scanner = _scanner()
        scanner.feed("text\n#+KEY: v\n")
        assert scanner.state is IDLE
        assert len(scanner.stream) == 2

    def test_switching_regimes_closes_block(self) -> None:
        scanner = _scanner()
        scanner.feed("text\n# comment\n")
        assert scanner.state is IN_COMMENT
        assert len(scanner.stream) == 1
        assert isinstance(scanner.stream.get(), Text)

    def test_partial_line_is_not_classified(self) -> None:
        scanner = _scanner()
        assert scanner.feed("#+KEY: va") == 0
        assert scanner.state is IDLE
        assert len(scanner.stream) == 0

    def test_finalize_resets_state(self) -> None:
        scanner = _scanner()
        scanner.feed("# open comment")
        scanner.finalize()
        assert scanner.state is IDLE
        assert scanner.finalized
        assert scanner._pending is None
        assert isinstance(scanner.stream.get(), Comment)

    def test_reset_allows_reuse(self) -> None:
        scanner = _scanner()
        scanner.feed("first")
        scanner.finalize()

        scanner.reset(ItemStream(capacity=0))
        assert not scanner.finalized
        scanner.feed("second")
        scanner.finalize()
        items = scanner.stream.drain()
        assert [item.body for item in items] == ["second"]
        assert items[0].span.start.line == 1

"""Line classifiers for the orgscan lexer.

Each classifier is a pure function over one line of text that either fails
(returns None) or returns the extracted fields. Matchers are compiled once
at import and never mutated.

classify_line() applies them in priority order:
Comment → Headline → Keyword → Text (fallback).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from orgscan.lexer.classifiers.comment import CommentMatch, try_classify_comment
from orgscan.lexer.classifiers.headline import (
    HeadlineMatch,
    scan_tags,
    try_classify_headline,
)
from orgscan.lexer.classifiers.keyword import KeywordMatch, try_classify_keyword


class LineKind(Enum):
    """Classification of a single line."""

    COMMENT = auto()
    HEADLINE = auto()
    KEYWORD = auto()
    TEXT = auto()


@dataclass(frozen=True, slots=True)
class ClassifiedLine:
    """A line's kind plus the fields its classifier extracted.

    ``match`` is None for TEXT lines.

    """

    kind: LineKind
    match: CommentMatch | HeadlineMatch | KeywordMatch | None = None


_TEXT = ClassifiedLine(LineKind.TEXT)


def classify_line(text: str) -> ClassifiedLine:
    """Classify one line of text.

    Args:
        text: Line content, separator excluded

    Returns:
        ClassifiedLine. Unrecognized syntax is always TEXT, never an error.
    """
    comment = try_classify_comment(text)
    if comment is not None:
        return ClassifiedLine(LineKind.COMMENT, comment)

    headline = try_classify_headline(text)
    if headline is not None:
        return ClassifiedLine(LineKind.HEADLINE, headline)

    keyword = try_classify_keyword(text)
    if keyword is not None:
        return ClassifiedLine(LineKind.KEYWORD, keyword)

    return _TEXT


__all__ = [
    "ClassifiedLine",
    "CommentMatch",
    "HeadlineMatch",
    "KeywordMatch",
    "LineKind",
    "classify_line",
    "scan_tags",
    "try_classify_comment",
    "try_classify_headline",
    "try_classify_keyword",
]

"""Headline classifier: ``** Title :tag1:tag2:``."""

from __future__ import annotations

import string
from dataclasses import dataclass

TAG_CHARS = frozenset(string.ascii_letters + string.digits + "_@")


@dataclass(frozen=True, slots=True)
class HeadlineMatch:
    level: int
    body: str
    tags: tuple[str, ...]


def scan_tags(candidate: str) -> tuple[str, tuple[str, ...]]:
    """Split a trailing ``:tag1:tag2:`` run off a headline body.

    Scans backward from the final colon over tag characters. Every colon
    reached closes the run since the previous colon; a non-empty run is a
    tag, an empty one (``::``) is dropped. Scanning stops at the first
    character that is neither a tag character nor a colon.

    Args:
        candidate: Headline remainder, already trimmed

    Returns:
        (body, tags). Without any tag, body is the whole candidate.

    Example:
        >>> scan_tags("Heading :tag1:tag2:")
        ('Heading', ('tag1', 'tag2'))
        >>> scan_tags("Ratio 3:2")
        ('Ratio 3:2', ())
    """
    if not candidate.endswith(":"):
        return candidate, ()

    tags: list[str] = []
    boundary = len(candidate) - 1
    pos = boundary - 1
    while pos >= 0:
        char = candidate[pos]
        if char == ":":
            if boundary - pos > 1:
                tags.append(candidate[pos + 1 : boundary])
            boundary = pos
        elif char not in TAG_CHARS:
            break
        pos -= 1

    if not tags:
        return candidate, ()
    tags.reverse()
    return candidate[:boundary].strip(" \t"), tuple(tags)


def try_classify_headline(text: str) -> HeadlineMatch | None:
    """Try to classify a line as a headline.

    Headlines start at column 0 with one or more ``*`` immediately followed
    by a space. The number of stars is the level.

    Args:
        text: Line content, separator excluded

    Returns:
        HeadlineMatch if valid headline, None otherwise.
    """
    level = 0
    text_len = len(text)
    while level < text_len and text[level] == "*":
        level += 1

    if level == 0 or level == text_len or text[level] != " ":
        return None

    body, tags = scan_tags(text[level + 1 :].strip(" \t"))
    return HeadlineMatch(level=level, body=body, tags=tags)

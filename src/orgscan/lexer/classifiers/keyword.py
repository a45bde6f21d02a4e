"""Keyword line classifier: ``#+KEY: value``."""

from __future__ import annotations

import re
from dataclasses import dataclass

KEYWORD_RE = re.compile(r"[ \t]*#\+([0-9A-Za-z_@\[\]]+):(.*)", re.DOTALL)


@dataclass(frozen=True, slots=True)
class KeywordMatch:
    key: str
    value: str


def try_classify_keyword(text: str) -> KeywordMatch | None:
    """Try to classify a line as a keyword.

    Optional leading spaces/tabs, ``#+``, a key of letters, digits, ``_``,
    ``@``, ``[`` or ``]``, a colon, then the value. The value is trimmed of
    surrounding spaces and tabs.

    Args:
        text: Line content, separator excluded

    Returns:
        KeywordMatch if the line is a keyword, None otherwise.
    """
    m = KEYWORD_RE.fullmatch(text)
    if m is None:
        return None
    return KeywordMatch(key=m.group(1), value=m.group(2).strip(" \t"))

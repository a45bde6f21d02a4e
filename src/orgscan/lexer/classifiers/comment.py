"""Comment line classifier: ``# note``."""

from __future__ import annotations

import re
from dataclasses import dataclass

# ``#+`` opens a keyword (or nothing), never a comment
COMMENT_RE = re.compile(r"[ \t]*#(?!\+)(.*)", re.DOTALL)


@dataclass(frozen=True, slots=True)
class CommentMatch:
    body: str


def try_classify_comment(text: str) -> CommentMatch | None:
    """Try to classify a line as a comment.

    Optional leading spaces/tabs, then ``#`` not followed by ``+``. A bare
    ``#`` is a comment with an empty body.

    Args:
        text: Line content, separator excluded

    Returns:
        CommentMatch with everything after the ``#`` (untrimmed), or None.
    """
    m = COMMENT_RE.fullmatch(text)
    if m is None:
        return None
    return CommentMatch(body=m.group(1))

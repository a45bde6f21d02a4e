"""Scanner states and the block transition function.

Headlines and keywords are single-line and never persist state. Comments
and text accumulate consecutive lines of the same kind into one block.

    IDLE ──comment──▶ IN_COMMENT ──text──▶ IN_TEXT
      ▲                   │                   │
      └──── headline / keyword (closes any open block) ──┘

"""

from __future__ import annotations

from enum import Enum, auto

from orgscan.lexer.classifiers import LineKind


class ScanState(Enum):
    """Accumulation regime of the scanner."""

    IDLE = auto()  # No block open
    IN_COMMENT = auto()  # Accumulating comment lines
    IN_TEXT = auto()  # Accumulating text lines


_NEXT_STATE = {
    LineKind.KEYWORD: ScanState.IDLE,
    LineKind.HEADLINE: ScanState.IDLE,
    LineKind.COMMENT: ScanState.IN_COMMENT,
    LineKind.TEXT: ScanState.IN_TEXT,
}


def transition(state: ScanState, kind: LineKind) -> tuple[ScanState, bool]:
    """Compute the effect of one classified line.

    Args:
        state: Current state
        kind: Classification of the incoming line

    Returns:
        (next_state, close_open_block). When ``close_open_block`` is True the
        block open in ``state`` must be finalized and emitted before the line
        is handled. A line that keeps the same multi-line state continues the
        open block instead.

    Example:
        >>> transition(ScanState.IN_TEXT, LineKind.TEXT)
        (<ScanState.IN_TEXT: 3>, False)
        >>> transition(ScanState.IN_TEXT, LineKind.COMMENT)
        (<ScanState.IN_COMMENT: 2>, True)
    """
    next_state = _NEXT_STATE[kind]
    if state is ScanState.IDLE:
        return next_state, False
    return next_state, next_state is not state

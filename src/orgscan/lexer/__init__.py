"""Incremental line scanner for orgscan.

Architecture:
lexer/
├── __init__.py          # Re-exports Scanner, ScanState, LineReader
├── core.py              # Scanner (block accumulation + stream hand-off)
├── modes.py             # ScanState enum, transition()
├── reader.py            # LineReader, Line
└── classifiers/         # Pure per-line classifiers
    ├── comment.py       # # note
    ├── headline.py      # * Title :tags:
    └── keyword.py       # #+KEY: value

Usage:
    >>> from orgscan.lexer import Scanner
    >>> from orgscan.stream import ItemStream
    >>> scanner = Scanner(ItemStream(capacity=0))
    >>> scanner.feed("# a note\\n# more\\ntext")
    0
    >>> scanner.finalize()
    2
    >>> [item.type.name for item in scanner.stream]
    ['COMMENT', 'TEXT']

"""

from orgscan.lexer.core import Scanner
from orgscan.lexer.modes import ScanState, transition
from orgscan.lexer.reader import Line, LineReader

__all__ = ["Line", "LineReader", "ScanState", "Scanner", "transition"]

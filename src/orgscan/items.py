"""Typed items produced by the scanner.

All items are frozen dataclasses with slots for:
- Immutability: an item is handed to the stream exactly once, then shared
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: match statements work naturally

Item kinds:
Item (base)
├── Headline   * Title :tag:
├── Keyword    #+KEY: value
├── Comment    # note (may span several lines)
└── Text       anything else (may span several lines)

Thread Safety:
All items are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar, TypeAlias

from orgscan.location import Span


class ItemType(Enum):
    """Discriminator for the four item kinds."""

    HEADLINE = auto()
    KEYWORD = auto()
    COMMENT = auto()
    TEXT = auto()


@dataclass(frozen=True, slots=True)
class ItemBase:
    """Base class for all items.

    Every item tracks the span of source text it was built from.

    """

    span: Span

    type: ClassVar[ItemType]


@dataclass(frozen=True, slots=True)
class Headline(ItemBase):
    """Outline entry.

    Org: ** Heading :tag1:tag2:

    """

    level: int
    body: str
    tags: tuple[str, ...] = ()

    type: ClassVar[ItemType] = ItemType.HEADLINE

    def __str__(self) -> str:
        return f"Headline[{self.level}, {self.body!r}, [{', '.join(self.tags)}]; {self.span}]"


@dataclass(frozen=True, slots=True)
class Keyword(ItemBase):
    """Metadata directive.

    Org: #+TITLE: My Blog

    """

    key: str
    value: str

    type: ClassVar[ItemType] = ItemType.KEYWORD

    def __str__(self) -> str:
        return f"Keyword[{self.key}: {self.value!r}; {self.span}]"


@dataclass(frozen=True, slots=True)
class Comment(ItemBase):
    """Commentary, one or more consecutive ``#`` lines joined by newlines."""

    body: str

    type: ClassVar[ItemType] = ItemType.COMMENT

    def __str__(self) -> str:
        return f"Comment[{self.body!r}; {self.span}]"


@dataclass(frozen=True, slots=True)
class Text(ItemBase):
    """Body text, one or more consecutive unrecognized lines."""

    body: str

    type: ClassVar[ItemType] = ItemType.TEXT

    def __str__(self) -> str:
        return f"Text[{self.body!r}; {self.span}]"


Item: TypeAlias = Headline | Keyword | Comment | Text

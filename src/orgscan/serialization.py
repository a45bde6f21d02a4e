"""Item serialization: JSON round-trip for scanned documents.

Converts typed items to/from JSON-compatible dicts. Useful for:
- Caching scanned documents between site builds
- Handing items to renderers in another process
- Debugging and inspection

All output is deterministic (sorted keys) for cache-key stability.

Example:
    from orgscan import scan
    from orgscan.serialization import to_json, from_json

    items = scan("* Hello :world:")
    json_str = to_json(items)
    assert from_json(json_str) == items

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from collections.abc import Iterable
from dataclasses import fields
from typing import Any

from orgscan.items import Comment, Headline, Item, Keyword, Text
from orgscan.location import Position, Span

# Registry of item type names to classes for deserialization
_ITEM_TYPES: dict[str, type] = {
    "Headline": Headline,
    "Keyword": Keyword,
    "Comment": Comment,
    "Text": Text,
}


def to_dict(item: Item) -> dict[str, Any]:
    """Convert an item to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.

    Args:
        item: Any orgscan item.

    Returns:
        Dict with ``_type`` and all item fields.

    """
    result: dict[str, Any] = {"_type": type(item).__name__}

    for f in fields(item):
        result[f.name] = _serialize_value(getattr(item, f.name))

    return result


def _serialize_position(position: Position) -> dict[str, int]:
    return {"line": position.line, "column": position.column, "offset": position.offset}


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if isinstance(value, Span):
        return {
            "_type": "Span",
            "start": _serialize_position(value.start),
            "end": _serialize_position(value.end),
            "source_file": value.source_file,
        }
    if isinstance(value, tuple):
        return list(value)
    # Primitives: str, int, None
    return value


def from_dict(data: dict[str, Any]) -> Item:
    """Reconstruct a typed item from a dict.

    Args:
        data: Dict with ``_type`` and item fields (as produced by to_dict).

    Returns:
        Typed item (frozen dataclass).

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized item"
        raise ValueError(msg)

    item_cls = _ITEM_TYPES.get(type_name)
    if item_cls is None:
        msg = f"Unknown item type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(item_cls):
        if f.name not in data:
            continue
        kwargs[f.name] = _deserialize_value(data[f.name])

    return item_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict) and value.get("_type") == "Span":
        return Span(
            start=Position(**value["start"]),
            end=Position(**value["end"]),
            source_file=value.get("source_file"),
        )
    if isinstance(value, list):
        return tuple(value)
    return value


def to_json(items: Iterable[Item], *, indent: int | None = None) -> str:
    """Serialize a sequence of items to a JSON string.

    Args:
        items: Items in emission order.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON array string.

    """
    return json.dumps([to_dict(item) for item in items], sort_keys=True, indent=indent)


def from_json(data: str) -> list[Item]:
    """Deserialize items from a JSON string.

    Args:
        data: JSON string (as produced by to_json).

    Returns:
        Items in their original order.

    Raises:
        ValueError: If the JSON is not an array of items.

    """
    raw = json.loads(data)
    if not isinstance(raw, list):
        msg = f"Expected a JSON array of items, got {type(raw).__name__}"
        raise ValueError(msg)
    items: list[Item] = []
    for entry in raw:
        if not isinstance(entry, dict):
            msg = f"Expected a serialized item, got {type(entry).__name__}"
            raise ValueError(msg)
        items.append(from_dict(entry))
    return items

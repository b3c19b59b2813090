# =============================================================================
# Tag Models
# =============================================================================
# Key/value tag pairs and ordered tag lists.
# =============================================================================

"""Tag and tag list types shared by entities and filter decisions."""

from typing import Any, Iterable, Mapping, NamedTuple

__all__ = ["Tag", "TagList", "coerce_tag_list", "tags_from_pairs"]


class Tag(NamedTuple):
    """A single key/value attribute of an entity."""

    key: str
    value: str


# Ordered; keys may repeat.
TagList = list[Tag]


def coerce_tag_list(value: Any) -> Any:
    """
    Accept a mapping as shorthand for a tag list.

    Used as a ``mode="before"`` validator so callers can pass
    ``{"amenity": "cafe"}`` instead of ``[("amenity", "cafe")]``. Mapping
    iteration order becomes tag order. Anything else is returned unchanged
    for pydantic to validate.
    """
    if isinstance(value, Mapping):
        return [(k, v) for k, v in value.items()]
    return value


def tags_from_pairs(pairs: Iterable[tuple[str, str]]) -> TagList:
    """Build a tag list from ``(key, value)`` pairs, preserving order."""
    return [Tag(k, v) for k, v in pairs]

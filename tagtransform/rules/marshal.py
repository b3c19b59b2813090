# =============================================================================
# Entity Marshaler
# =============================================================================
# Converts host tag lists into rule set inputs and validates what the rule
# set hands back.
# =============================================================================

"""
Marshaling between host types and rule set inputs/outputs.

Encoding turns an ordered tag list into a plain ``dict``. Duplicate keys
collapse with the last value winning; styles may rely on that, so it is kept
as is.

Decoding is strict: a result that does not match the declared layout, a
non-string key or value, or a flag that is not an integer raises
``MalformedResultError`` naming the observed type. Nothing is padded,
truncated or silently skipped.
"""

from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Sequence

from ..exceptions import MalformedResultError
from ..models.entity import Entity
from ..models.tags import Tag, TagList
from .base import RelationMemberRequest, TagFilterRequest

__all__ = [
    "PROVENANCE_KEYS",
    "provenance_tags",
    "encode_tags",
    "build_tag_request",
    "build_relation_member_request",
    "unpack_result",
    "decode_tags",
    "decode_flag",
    "decode_drop",
    "decode_member_superseded",
]

PROVENANCE_KEYS = ("osm_user", "osm_uid", "osm_version", "osm_timestamp", "osm_changeset")


def _format_timestamp(timestamp: datetime | None) -> str:
    """Render as ``YYYY-MM-DDTHH:MM:SSZ``; naive datetimes are taken as UTC."""
    if timestamp is None:
        return ""
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def provenance_tags(entity: Entity) -> TagList:
    """
    Build the extra attribute tags for an entity.

    Returns an empty list for version 0, which means the input carried no
    version metadata.

    Example:
        >>> [t.key for t in provenance_tags(Entity(kind="node", version=5))]
        ['osm_user', 'osm_uid', 'osm_version', 'osm_timestamp', 'osm_changeset']
    """
    if entity.version <= 0:
        return []

    meta = entity.metadata
    return [
        Tag("osm_user", meta.user),
        Tag("osm_uid", str(meta.uid)),
        Tag("osm_version", str(entity.version)),
        Tag("osm_timestamp", _format_timestamp(meta.timestamp)),
        Tag("osm_changeset", str(meta.changeset)),
    ]


def encode_tags(tags: Iterable[Tag] | Mapping[str, str]) -> dict[str, str]:
    """Encode tags as a mapping; later duplicates overwrite earlier ones."""
    if isinstance(tags, Mapping):
        return dict(tags)
    encoded: dict[str, str] = {}
    for key, value in tags:
        encoded[key] = value
    return encoded


def build_tag_request(entity: Entity, extra_attributes: bool = False) -> TagFilterRequest:
    """
    Marshal an entity's tags for the node, way or relation filter.

    The declared count is the number of raw tags plus the number of extra
    attributes, counted before duplicate keys collapse.
    """
    tags = encode_tags(entity.tags)
    tag_count = len(entity.tags)

    if extra_attributes:
        extra = provenance_tags(entity)
        tags.update(encode_tags(extra))
        tag_count += len(extra)

    return TagFilterRequest(tags=tags, tag_count=tag_count)


def build_relation_member_request(
    relation_tags: Iterable[Tag] | Mapping[str, str],
    members: Sequence[Iterable[Tag] | Mapping[str, str]],
    roles: Sequence[str],
) -> RelationMemberRequest:
    """
    Marshal a relation and its members for the relation member filter.

    Raises:
        ValueError: If members and roles differ in length
    """
    if len(members) != len(roles):
        raise ValueError(
            f"Relation has {len(members)} member tag lists but {len(roles)} roles"
        )

    return RelationMemberRequest(
        relation_tags=encode_tags(relation_tags),
        member_tags=[encode_tags(member) for member in members],
        member_roles=list(roles),
        member_count=len(roles),
    )


def unpack_result(values: Any, fields: Sequence[str], function_name: str) -> dict[str, Any]:
    """
    Map a positional rule set result onto named fields.

    Raises:
        MalformedResultError: If the result is not a tuple/list of exactly
            ``len(fields)`` values
    """
    expected = len(fields)
    layout = ", ".join(fields)

    if not isinstance(values, (tuple, list)):
        raise MalformedResultError(
            f"Rule set function {function_name} returned a single value of type "
            f"'{type(values).__name__}', expected {expected} values ({layout})"
        )
    if len(values) != expected:
        raise MalformedResultError(
            f"Rule set function {function_name} returned {len(values)} values, "
            f"expected {expected} ({layout})"
        )

    return dict(zip(fields, values))


def _check_string(item: Any, what: str) -> str:
    if not isinstance(item, str):
        raise MalformedResultError(
            f"Tag processing returned a non-string {what} {item!r}. "
            f"Possibly this is due to an incorrect data type '{type(item).__name__}'."
        )
    return item


def decode_tags(value: Any) -> TagList:
    """
    Decode the rule set's output tags into an ordered tag list.

    Accepts a mapping (in iteration order) or a sequence of ``(key, value)``
    pairs, which may repeat keys.

    Raises:
        MalformedResultError: On a non-string key or value, a malformed pair,
            or an unsupported container type
    """
    if isinstance(value, Mapping):
        pairs: Iterable[Any] = value.items()
    elif isinstance(value, (list, tuple)):
        pairs = value
    else:
        raise MalformedResultError(
            f"Tag processing returned tags of type '{type(value).__name__}', "
            f"expected a mapping or a sequence of (key, value) pairs"
        )

    out_tags: TagList = []
    for pair in pairs:
        if not isinstance(pair, (tuple, list)) or len(pair) != 2:
            raise MalformedResultError(
                f"Tag processing returned {pair!r} of type '{type(pair).__name__}' "
                f"where a (key, value) pair was expected"
            )
        key, item = pair
        out_tags.append(Tag(_check_string(key, "key"), _check_string(item, "value")))
    return out_tags


def decode_flag(value: Any, name: str) -> int:
    """
    Decode an integer classification flag; bools count as 0/1.

    Raises:
        MalformedResultError: If the value is not an integer
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    raise MalformedResultError(
        f"Rule set returned {name}={value!r} of type '{type(value).__name__}', "
        f"expected an integer"
    )


def decode_drop(value: Any) -> bool:
    """Coerce the drop flag by truthiness."""
    return bool(value)


def decode_member_superseded(value: Any, member_count: int) -> list[int]:
    """
    Decode exactly one superseded flag per member.

    Raises:
        MalformedResultError: If the value is not a list/tuple, has fewer or
            more entries than ``member_count``, or holds a non-integer
    """
    if not isinstance(value, (list, tuple)):
        raise MalformedResultError(
            f"Failed to read member_superseded from rule set function: got "
            f"'{type(value).__name__}', expected a list of {member_count} integers"
        )
    if len(value) < member_count:
        raise MalformedResultError(
            f"Failed to read member_superseded from rule set function: got "
            f"{len(value)} entries for {member_count} members"
        )
    if len(value) > member_count:
        raise MalformedResultError(
            f"member_superseded has {len(value)} entries for {member_count} members"
        )

    return [
        decode_flag(flag, f"member_superseded[{index}]")
        for index, flag in enumerate(value)
    ]

# =============================================================================
# Data Models Library
# =============================================================================
# Pydantic models for the tag transformation stage.
# =============================================================================

"""
Data models for the tag transformation stage.

This library provides:
- Tag, TagList: Ordered key/value attributes
- Entity, Member, EntityKind, EntityMetadata: Input entities
- FilterDecision, RelationFilterDecision: Filter results
- TagTransformSettings: Configuration
"""

from .tags import Tag, TagList, coerce_tag_list, tags_from_pairs
from .entity import EntityKind, EntityMetadata, Member, Entity
from .decision import FilterDecision, RelationFilterDecision
from .config import (
    TagTransformSettings,
    DEFAULT_NODE_FUNCTION,
    DEFAULT_WAY_FUNCTION,
    DEFAULT_RELATION_FUNCTION,
    DEFAULT_RELATION_MEMBER_FUNCTION,
)

__all__ = [
    # Tags
    "Tag",
    "TagList",
    "coerce_tag_list",
    "tags_from_pairs",
    # Entities
    "EntityKind",
    "EntityMetadata",
    "Member",
    "Entity",
    # Decisions
    "FilterDecision",
    "RelationFilterDecision",
    # Configuration
    "TagTransformSettings",
    "DEFAULT_NODE_FUNCTION",
    "DEFAULT_WAY_FUNCTION",
    "DEFAULT_RELATION_FUNCTION",
    "DEFAULT_RELATION_MEMBER_FUNCTION",
]

# =============================================================================
# Entity Models
# =============================================================================
# Nodes, ways and relations as handed to the tag transformation stage by the
# entity provider.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .tags import TagList, coerce_tag_list

__all__ = ["EntityKind", "EntityMetadata", "Member", "Entity"]


class EntityKind(str, Enum):
    """OSM object type; selects the rule set function and its return arity."""

    NODE = "node"
    WAY = "way"
    RELATION = "relation"


class EntityMetadata(BaseModel):
    """
    Provenance of an entity, used for the optional extra attributes.

    Attributes:
        user: Name of the last editor
        uid: User id of the last editor (0 if unknown)
        changeset: Changeset id of the last edit (0 if unknown)
        timestamp: Time of the last edit
    """

    user: str = Field("", description="Name of the last editor")
    uid: int = Field(0, ge=0, description="User id of the last editor")
    changeset: int = Field(0, ge=0, description="Changeset of the last edit")
    timestamp: Optional[datetime] = Field(None, description="Time of the last edit")


class Member(BaseModel):
    """A relation member: the referenced entity's tags and its role."""

    tags: TagList = Field(default_factory=list, description="Tags of the referenced entity")
    role: str = Field("", description="Member role within the relation")

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, v):
        """Allow a mapping in place of a list of pairs."""
        return coerce_tag_list(v)


class Entity(BaseModel):
    """
    An entity being evaluated by the rule set.

    Attributes:
        kind: Node, way or relation
        id: OSM id (informational only)
        tags: Raw tags in input order
        version: Object version; 0 means no version metadata is available
        metadata: Provenance fields for extra attributes
        members: Ordered relation members (empty for nodes and ways)

    Example:
        >>> node = Entity(kind="node", tags={"amenity": "cafe"})
        >>> node.tags
        [Tag(key='amenity', value='cafe')]
    """

    kind: EntityKind = Field(..., description="OSM object type")
    id: int = Field(0, description="OSM id")
    tags: TagList = Field(default_factory=list, description="Raw tags in input order")
    version: int = Field(0, ge=0, description="Object version (0 = no version metadata)")
    metadata: EntityMetadata = Field(
        default_factory=EntityMetadata,
        description="Provenance metadata",
    )
    members: list[Member] = Field(
        default_factory=list,
        description="Relation members in stable iteration order",
    )

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, v):
        """Allow a mapping in place of a list of pairs."""
        return coerce_tag_list(v)

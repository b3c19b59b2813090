# =============================================================================
# Filter Decision Models
# =============================================================================
# Host-facing results of a single rule set call.
# =============================================================================

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from .tags import TagList

__all__ = ["FilterDecision", "RelationFilterDecision"]


class FilterDecision(BaseModel):
    """
    Outcome of filtering a node, way or relation by its own tags.

    ``polygon`` and ``roads`` are populated for ways only.

    Attributes:
        drop: True if the entity should not be imported
        output_tags: Tags to persist, in the order the rule set returned them
        polygon: Way should be treated as an area
        roads: Way belongs in the low-zoom roads table
    """

    drop: bool = Field(..., description="Entity should be discarded")
    output_tags: TagList = Field(default_factory=list, description="Tags to persist")
    polygon: Optional[int] = Field(None, description="Area flag (ways only)")
    roads: Optional[int] = Field(None, description="Roads flag (ways only)")


class RelationFilterDecision(BaseModel):
    """
    Outcome of filtering a relation together with its members.

    Attributes:
        drop: True if the relation should not be imported
        output_tags: Tags to persist for the relation
        make_boundary: Relation should be built as a boundary
        make_polygon: Relation should be built as a multipolygon
        roads: Relation belongs in the low-zoom roads table
        member_superseded: One flag per member; non-zero means the member's
            own representation is covered by the relation
        member_count: Number of members passed to the rule set
    """

    drop: bool = Field(..., description="Relation should be discarded")
    output_tags: TagList = Field(default_factory=list, description="Tags to persist")
    make_boundary: int = Field(0, description="Build as boundary")
    make_polygon: int = Field(0, description="Build as multipolygon")
    roads: int = Field(0, description="Roads flag")
    member_superseded: list[int] = Field(
        default_factory=list,
        description="Per-member superseded flags, in member order",
    )
    member_count: int = Field(..., ge=0, exclude=True, description="Members passed in")

    @model_validator(mode="after")
    def check_superseded_length(self) -> "RelationFilterDecision":
        """Reject superseded lists that do not cover every member exactly."""
        if len(self.member_superseded) != self.member_count:
            raise ValueError(
                f"member_superseded has {len(self.member_superseded)} entries, "
                f"expected {self.member_count}"
            )
        return self

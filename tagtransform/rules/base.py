# =============================================================================
# Rule Set Contract
# =============================================================================
# Abstract interface every rule set implements, plus the request shapes it
# receives and the positional layout of what it returns.
# =============================================================================

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Sequence

__all__ = [
    "RuleSet",
    "TagFilterRequest",
    "RelationMemberRequest",
    "NODE_RESULT_FIELDS",
    "WAY_RESULT_FIELDS",
    "RELATION_RESULT_FIELDS",
    "RELATION_MEMBER_RESULT_FIELDS",
]

# Positional layout of rule set return values. A style function returns
# e.g. ``return filter, keyvalues, polygon, roads`` for a way.
NODE_RESULT_FIELDS = ("drop", "tags")
WAY_RESULT_FIELDS = ("drop", "tags", "polygon", "roads")
RELATION_RESULT_FIELDS = ("drop", "tags")
RELATION_MEMBER_RESULT_FIELDS = (
    "drop",
    "tags",
    "member_superseded",
    "make_boundary",
    "make_polygon",
    "roads",
)


@dataclass(frozen=True)
class TagFilterRequest:
    """
    Input for the node, way and relation filter functions.

    Attributes:
        tags: Key/value mapping handed to the rule set
        tag_count: Declared number of tags, including extra attributes
    """

    tags: dict[str, str]
    tag_count: int


@dataclass(frozen=True)
class RelationMemberRequest:
    """
    Input for the relation member filter function.

    Attributes:
        relation_tags: Key/value mapping of the relation's tags
        member_tags: One key/value mapping per member, in member order
        member_roles: One role per member, in member order
        member_count: Number of members
    """

    relation_tags: dict[str, str]
    member_tags: list[dict[str, str]]
    member_roles: list[str]
    member_count: int


class RuleSet(ABC):
    """
    Base class for all rule sets.

    A rule set decides, per entity, whether to drop it, which tags to keep and
    which classification flags apply. Implementations return the raw
    positional result (a tuple laid out as in the ``*_RESULT_FIELDS``
    constants); validation and conversion to host types happens in the
    filters, so any implementation satisfying this interface is
    interchangeable.

    Instances are not safe for concurrent use. Load one per worker.
    """

    @abstractmethod
    def filter_node(self, request: TagFilterRequest) -> Sequence[Any]:
        """Return ``(drop, tags)`` for a node."""

    @abstractmethod
    def filter_way(self, request: TagFilterRequest) -> Sequence[Any]:
        """Return ``(drop, tags, polygon, roads)`` for a way."""

    @abstractmethod
    def filter_relation(self, request: TagFilterRequest) -> Sequence[Any]:
        """Return ``(drop, tags)`` for a relation."""

    @abstractmethod
    def filter_relation_member(self, request: RelationMemberRequest) -> Sequence[Any]:
        """
        Return the relation member decision.

        Layout: ``(drop, tags, member_superseded, make_boundary,
        make_polygon, roads)``.
        """

    def function_name(self, entry_point: str) -> str:
        """
        Name to report for an entry point in error messages.

        Args:
            entry_point: One of "filter_node", "filter_way", "filter_relation",
                "filter_relation_member"
        """
        return entry_point

    def close(self) -> None:
        """Release resources held by the rule set. No-op by default."""

    def __enter__(self) -> "RuleSet":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

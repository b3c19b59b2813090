# =============================================================================
# Entity Filters
# =============================================================================
# Orchestrate one rule set call per entity: marshal inputs, invoke, validate
# and decode the result into a decision.
# =============================================================================

import logging
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from ..exceptions import MalformedResultError, RuleSetExecutionError, TagTransformError
from ..models.decision import FilterDecision, RelationFilterDecision
from ..models.entity import Entity, EntityKind
from ..models.tags import Tag
from .base import (
    NODE_RESULT_FIELDS,
    RELATION_MEMBER_RESULT_FIELDS,
    RELATION_RESULT_FIELDS,
    WAY_RESULT_FIELDS,
    RuleSet,
)
from .marshal import (
    build_relation_member_request,
    build_tag_request,
    decode_drop,
    decode_flag,
    decode_member_superseded,
    decode_tags,
    unpack_result,
)

__all__ = ["ObjectFilter", "RelationMemberFilter"]

logger = logging.getLogger(__name__)

# Entity kind -> (rule set entry point, result layout)
_ENTRY_POINTS = {
    EntityKind.NODE: ("filter_node", NODE_RESULT_FIELDS),
    EntityKind.WAY: ("filter_way", WAY_RESULT_FIELDS),
    EntityKind.RELATION: ("filter_relation", RELATION_RESULT_FIELDS),
}


def _call_rule_set(
    method: Callable[[Any], Any],
    request: Any,
    function_name: str,
    purpose: str,
) -> Any:
    """
    Invoke a rule set entry point, normalizing failures.

    Tag transform errors raised by the rule set implementation pass through;
    anything else becomes a RuleSetExecutionError chained to the cause.
    """
    try:
        return method(request)
    except TagTransformError:
        raise
    except Exception as e:
        logger.debug(f"Rule set function {function_name} raised: {e!r}")
        raise RuleSetExecutionError(
            f"Failed to execute rule set function for {purpose}: {e}",
            function_name=function_name,
        ) from e


class ObjectFilter:
    """
    Filter a node, way or relation by its own tags.

    Attributes:
        rule_set: Loaded rule set; owned by the caller
        extra_attributes: Default for appending provenance tags

    Example:
        >>> object_filter = ObjectFilter(rule_set)
        >>> decision = object_filter.filter(Entity(kind="way", tags={"highway": "primary"}))
        >>> decision.roads, decision.polygon
        (1, 0)
    """

    def __init__(self, rule_set: RuleSet, extra_attributes: bool = False):
        self.rule_set = rule_set
        self.extra_attributes = extra_attributes

    def filter(self, entity: Entity, extra_attributes: Optional[bool] = None) -> FilterDecision:
        """
        Run the rule set for one entity.

        Args:
            entity: Entity to evaluate
            extra_attributes: Override the instance default for this call

        Returns:
            FilterDecision; ``polygon`` and ``roads`` are set for ways only

        Raises:
            RuleSetExecutionError: If the rule set raised
            MalformedResultError: If the result has the wrong shape or types,
                or the entity kind is unknown
        """
        try:
            entry_point, fields = _ENTRY_POINTS[entity.kind]
        except KeyError:
            raise MalformedResultError(f"Unknown OSM type: {entity.kind!r}") from None

        if extra_attributes is None:
            extra_attributes = self.extra_attributes

        request = build_tag_request(entity, extra_attributes)
        function_name = self.rule_set.function_name(entry_point)
        raw = _call_rule_set(
            getattr(self.rule_set, entry_point),
            request,
            function_name,
            "basic tag processing",
        )

        result = unpack_result(raw, fields, function_name)

        polygon = None
        roads = None
        if entity.kind is EntityKind.WAY:
            roads = decode_flag(result["roads"], "roads")
            polygon = decode_flag(result["polygon"], "polygon")

        output_tags = decode_tags(result["tags"])
        drop = decode_drop(result["drop"])

        return FilterDecision(
            drop=drop,
            output_tags=output_tags,
            polygon=polygon,
            roads=roads,
        )


class RelationMemberFilter:
    """
    Filter a relation together with its members.

    Decides the relation's tags and flags and, per member, whether the
    member's own representation is superseded by the relation.
    """

    def __init__(self, rule_set: RuleSet):
        self.rule_set = rule_set

    def filter_members(
        self,
        relation_tags: Iterable[Tag] | Mapping[str, str],
        members: Sequence[Iterable[Tag] | Mapping[str, str]],
        roles: Sequence[str],
    ) -> RelationFilterDecision:
        """
        Run the relation member function.

        Args:
            relation_tags: Tags of the relation
            members: Tags of each member, in member order
            roles: Role of each member; its length is the member count

        Returns:
            RelationFilterDecision with one superseded flag per member

        Raises:
            ValueError: If members and roles differ in length
            RuleSetExecutionError: If the rule set raised
            MalformedResultError: If the result has the wrong shape or types,
                including a superseded list that does not match the member count
        """
        request = build_relation_member_request(relation_tags, members, roles)
        function_name = self.rule_set.function_name("filter_relation_member")
        raw = _call_rule_set(
            self.rule_set.filter_relation_member,
            request,
            function_name,
            "relation tag processing",
        )

        result = unpack_result(raw, RELATION_MEMBER_RESULT_FIELDS, function_name)

        roads = decode_flag(result["roads"], "roads")
        make_polygon = decode_flag(result["make_polygon"], "make_polygon")
        make_boundary = decode_flag(result["make_boundary"], "make_boundary")
        member_superseded = decode_member_superseded(
            result["member_superseded"], request.member_count
        )
        output_tags = decode_tags(result["tags"])
        drop = decode_drop(result["drop"])

        return RelationFilterDecision(
            drop=drop,
            output_tags=output_tags,
            make_boundary=make_boundary,
            make_polygon=make_polygon,
            roads=roads,
            member_superseded=member_superseded,
            member_count=request.member_count,
        )

# =============================================================================
# Tag Transform
# =============================================================================
# Bundles a loaded rule set with the object and relation member filters.
# =============================================================================

from typing import Iterable, Mapping, Optional, Sequence

from .models.config import TagTransformSettings
from .models.decision import FilterDecision, RelationFilterDecision
from .models.entity import Entity, EntityKind
from .models.tags import Tag
from .rules.base import RuleSet
from .rules.filters import ObjectFilter, RelationMemberFilter
from .rules.loader import load_rule_set

__all__ = ["TagTransform"]


class TagTransform:
    """
    Entry point for the tag transformation stage.

    Owns one rule set. Not thread-safe: build one instance per worker.

    Example:
        >>> settings = TagTransformSettings(script_path="styles/default.py")
        >>> with TagTransform.from_settings(settings) as transform:
        ...     decision = transform.filter_tags(Entity(kind="node", tags={"amenity": "cafe"}))
        >>> decision.output_tags
        [Tag(key='amenity', value='cafe')]
    """

    def __init__(self, rule_set: RuleSet, extra_attributes: bool = False):
        self.rule_set = rule_set
        self.object_filter = ObjectFilter(rule_set, extra_attributes=extra_attributes)
        self.relation_member_filter = RelationMemberFilter(rule_set)

    @classmethod
    def from_settings(cls, settings: TagTransformSettings) -> "TagTransform":
        """
        Load the configured style and build a transform around it.

        Raises:
            RuleSetLoadError: If the style cannot be loaded
        """
        return cls(load_rule_set(settings), extra_attributes=settings.extra_attributes)

    @property
    def extra_attributes(self) -> bool:
        return self.object_filter.extra_attributes

    def filter_tags(self, entity: Entity, extra_attributes: Optional[bool] = None) -> FilterDecision:
        """Filter a node, way or relation by its own tags."""
        return self.object_filter.filter(entity, extra_attributes)

    def filter_relation_members(
        self,
        relation_tags: Iterable[Tag] | Mapping[str, str],
        members: Sequence[Iterable[Tag] | Mapping[str, str]],
        roles: Sequence[str],
    ) -> RelationFilterDecision:
        """Filter a relation with explicit member tag lists and roles."""
        return self.relation_member_filter.filter_members(relation_tags, members, roles)

    def filter_relation(self, entity: Entity) -> RelationFilterDecision:
        """
        Filter a relation entity using its own members.

        Raises:
            ValueError: If the entity is not a relation
        """
        if entity.kind is not EntityKind.RELATION:
            raise ValueError(
                f"filter_relation expects a relation, got {entity.kind.value}"
            )
        return self.filter_relation_members(
            entity.tags,
            [member.tags for member in entity.members],
            [member.role for member in entity.members],
        )

    def close(self) -> None:
        self.rule_set.close()

    def __enter__(self) -> "TagTransform":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

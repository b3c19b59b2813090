# =============================================================================
# Rules Library
# =============================================================================
# Rule set contract, loader, marshaling and per-entity filters.
# =============================================================================

"""
Rule set library for the tag transformation stage.

This library provides:
- RuleSet: Abstract contract with the four filter entry points
- ScriptRuleSet / load_rule_set: Style script loading and validation
- ObjectFilter: Node, way and relation filtering by own tags
- RelationMemberFilter: Relation filtering with per-member superseded flags
"""

from .base import (
    RuleSet,
    TagFilterRequest,
    RelationMemberRequest,
    NODE_RESULT_FIELDS,
    WAY_RESULT_FIELDS,
    RELATION_RESULT_FIELDS,
    RELATION_MEMBER_RESULT_FIELDS,
)
from .loader import ScriptRuleSet, load_rule_set
from .marshal import PROVENANCE_KEYS, provenance_tags
from .filters import ObjectFilter, RelationMemberFilter

__all__ = [
    "RuleSet",
    "TagFilterRequest",
    "RelationMemberRequest",
    "NODE_RESULT_FIELDS",
    "WAY_RESULT_FIELDS",
    "RELATION_RESULT_FIELDS",
    "RELATION_MEMBER_RESULT_FIELDS",
    "ScriptRuleSet",
    "load_rule_set",
    "PROVENANCE_KEYS",
    "provenance_tags",
    "ObjectFilter",
    "RelationMemberFilter",
]

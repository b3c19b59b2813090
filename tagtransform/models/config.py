# =============================================================================
# Configuration Models Module
# =============================================================================
# Provides the Pydantic Settings model for the tag transformation stage:
# - TagTransformSettings: style script location, function names and the
#   extra attributes switch
# =============================================================================

import keyword

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator

__all__ = [
    "TagTransformSettings",
    "DEFAULT_NODE_FUNCTION",
    "DEFAULT_WAY_FUNCTION",
    "DEFAULT_RELATION_FUNCTION",
    "DEFAULT_RELATION_MEMBER_FUNCTION",
]

DEFAULT_NODE_FUNCTION = "filter_tags_node"
DEFAULT_WAY_FUNCTION = "filter_tags_way"
DEFAULT_RELATION_FUNCTION = "filter_basic_tags_rel"
DEFAULT_RELATION_MEMBER_FUNCTION = "filter_tags_relation_member"


class TagTransformSettings(BaseSettings):
    """
    Configuration for the tag transformation stage.

    Maps environment variables with prefix "TAG_TRANSFORM_":
    - TAG_TRANSFORM_SCRIPT → script_path
    - TAG_TRANSFORM_NODE_FUNCTION → node_function
    - TAG_TRANSFORM_WAY_FUNCTION → way_function
    - TAG_TRANSFORM_RELATION_FUNCTION → relation_function
    - TAG_TRANSFORM_RELATION_MEMBER_FUNCTION → relation_member_function
    - TAG_TRANSFORM_EXTRA_ATTRIBUTES → extra_attributes

    Fields can also be set by name, e.g.
    ``TagTransformSettings(script_path="style.py")``.

    Attributes:
        script_path: Path to the style script defining the rule set
        node_function: Function called for nodes
        way_function: Function called for ways
        relation_function: Function called for relations (tags only)
        relation_member_function: Function called for relations with members
        extra_attributes: Append osm_user/osm_uid/osm_version/osm_timestamp/
            osm_changeset tags before calling the rule set
    """

    script_path: str = Field(..., validation_alias="TAG_TRANSFORM_SCRIPT", description="Style script path")
    node_function: str = Field(DEFAULT_NODE_FUNCTION, validation_alias="TAG_TRANSFORM_NODE_FUNCTION", description="Node filter function name")
    way_function: str = Field(DEFAULT_WAY_FUNCTION, validation_alias="TAG_TRANSFORM_WAY_FUNCTION", description="Way filter function name")
    relation_function: str = Field(DEFAULT_RELATION_FUNCTION, validation_alias="TAG_TRANSFORM_RELATION_FUNCTION", description="Relation filter function name")
    relation_member_function: str = Field(DEFAULT_RELATION_MEMBER_FUNCTION, validation_alias="TAG_TRANSFORM_RELATION_MEMBER_FUNCTION", description="Relation member filter function name")
    extra_attributes: bool = Field(False, validation_alias="TAG_TRANSFORM_EXTRA_ATTRIBUTES", description="Append provenance tags")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore unrelated env vars from shared .env files
        populate_by_name=True,
    )

    @field_validator(
        "node_function",
        "way_function",
        "relation_function",
        "relation_member_function",
    )
    @classmethod
    def validate_function_name(cls, v: str) -> str:
        """
        Validate that a function name can name a top-level style function.

        Raises:
            ValueError: If the name is not a valid, non-keyword identifier
        """
        if not v.isidentifier() or keyword.iskeyword(v):
            raise ValueError(f"Invalid function name: {v!r}")
        return v

    @property
    def function_names(self) -> tuple[str, str, str, str]:
        """Configured names in contract order: node, way, relation, relation member."""
        return (
            self.node_function,
            self.way_function,
            self.relation_function,
            self.relation_member_function,
        )

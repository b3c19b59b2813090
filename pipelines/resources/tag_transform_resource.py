# =============================================================================
# Tag Transform Resource - Style script lifecycle
# =============================================================================
# Loads the tag transform style once per execution and closes it on teardown.
# =============================================================================

from typing import Optional

from dagster import ConfigurableResource, InitResourceContext
from pydantic import Field, PrivateAttr

from tagtransform import TagTransform
from tagtransform.models import (
    DEFAULT_NODE_FUNCTION,
    DEFAULT_RELATION_FUNCTION,
    DEFAULT_RELATION_MEMBER_FUNCTION,
    DEFAULT_WAY_FUNCTION,
    TagTransformSettings,
)

__all__ = ["TagTransformResource"]


class TagTransformResource(ConfigurableResource):
    """
    Dagster resource owning a loaded tag transform style.

    The style is loaded in ``setup_for_execution``, so a broken style or a
    missing filter function fails the run before any entity is processed.
    Each Dagster step process gets its own copy, which keeps the
    one-rule-set-per-worker rule. The style is closed in
    ``teardown_after_execution`` whether the step succeeded or failed.

    Configuration matches TagTransformSettings from tagtransform.models.config.

    Attributes:
        script_path: Path to the style script
        node_function: Node filter function name
        way_function: Way filter function name
        relation_function: Relation filter function name
        relation_member_function: Relation member filter function name
        extra_attributes: Append provenance tags before filtering

    Example:
        >>> resource = TagTransformResource(script_path="styles/default.py")
        >>> @op(required_resource_keys={"tag_transform"})
        ... def my_op(context):
        ...     transform = context.resources.tag_transform.get_tag_transform()
    """

    script_path: str = Field(..., description="Path to the style script")
    node_function: str = Field(DEFAULT_NODE_FUNCTION, description="Node filter function name")
    way_function: str = Field(DEFAULT_WAY_FUNCTION, description="Way filter function name")
    relation_function: str = Field(DEFAULT_RELATION_FUNCTION, description="Relation filter function name")
    relation_member_function: str = Field(
        DEFAULT_RELATION_MEMBER_FUNCTION,
        description="Relation member filter function name",
    )
    extra_attributes: bool = Field(False, description="Append provenance tags")

    _tag_transform: Optional[TagTransform] = PrivateAttr(default=None)

    def to_settings(self) -> TagTransformSettings:
        """Build validated TagTransformSettings from this resource's config."""
        return TagTransformSettings(
            script_path=self.script_path,
            node_function=self.node_function,
            way_function=self.way_function,
            relation_function=self.relation_function,
            relation_member_function=self.relation_member_function,
            extra_attributes=self.extra_attributes,
        )

    def setup_for_execution(self, context: InitResourceContext) -> None:
        """
        Load the style.

        Raises:
            RuleSetLoadError: If the style cannot be loaded
        """
        self._tag_transform = TagTransform.from_settings(self.to_settings())

    def teardown_after_execution(self, context: InitResourceContext) -> None:
        """Close the style if it was loaded."""
        if self._tag_transform is not None:
            self._tag_transform.close()
            self._tag_transform = None

    def get_tag_transform(self) -> TagTransform:
        """
        Return the loaded transform.

        Raises:
            RuntimeError: If called outside an execution (style not loaded)
        """
        if self._tag_transform is None:
            raise RuntimeError("Tag transform style is not loaded; resource has not been set up")
        return self._tag_transform

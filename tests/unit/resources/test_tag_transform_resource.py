"""Unit tests for TagTransformResource."""

import pytest
from dagster import build_init_resource_context

from pipelines.resources import TagTransformResource
from tagtransform import RuleSetLoadError, TagTransform
from tagtransform.models import Entity


@pytest.fixture
def resource(passthrough_style):
    """Resource pointing at the passthrough style."""
    return TagTransformResource(script_path=str(passthrough_style))


class TestTagTransformResourceSettings:
    """Test suite for config to settings conversion."""

    def test_defaults(self, resource, passthrough_style):
        """Test default function names carry into settings."""
        settings = resource.to_settings()

        assert settings.script_path == str(passthrough_style)
        assert settings.function_names == (
            "filter_tags_node",
            "filter_tags_way",
            "filter_basic_tags_rel",
            "filter_tags_relation_member",
        )
        assert settings.extra_attributes is False

    def test_custom_names(self, passthrough_style):
        """Test configured names and flags are passed through."""
        resource = TagTransformResource(
            script_path=str(passthrough_style),
            node_function="my_node",
            extra_attributes=True,
        )

        settings = resource.to_settings()

        assert settings.node_function == "my_node"
        assert settings.extra_attributes is True


class TestTagTransformResourceLifecycle:
    """Test suite for setup and teardown."""

    def test_not_loaded_before_setup(self, resource):
        """Test get_tag_transform fails outside an execution."""
        with pytest.raises(RuntimeError, match="not loaded"):
            resource.get_tag_transform()

    def test_setup_loads_style(self, resource):
        """Test setup loads a usable transform."""
        context = build_init_resource_context()

        resource.setup_for_execution(context)
        try:
            transform = resource.get_tag_transform()
            decision = transform.filter_tags(Entity(kind="node", tags={"amenity": "cafe"}))
        finally:
            resource.teardown_after_execution(context)

        assert isinstance(transform, TagTransform)
        assert decision.drop is False

    def test_teardown_closes_style(self, resource):
        """Test teardown closes the style and unloads it."""
        context = build_init_resource_context()
        resource.setup_for_execution(context)
        transform = resource.get_tag_transform()

        resource.teardown_after_execution(context)

        assert transform.rule_set.closed is True
        with pytest.raises(RuntimeError):
            resource.get_tag_transform()

    def test_teardown_without_setup(self, resource):
        """Test teardown is a no-op when nothing was loaded."""
        resource.teardown_after_execution(build_init_resource_context())

    def test_setup_fails_on_missing_function(self, write_style):
        """Test a style missing a function fails at setup."""
        path = write_style("def filter_tags_node(tags, num_tags):\n    return False, tags\n")
        resource = TagTransformResource(script_path=str(path))

        with pytest.raises(RuleSetLoadError, match="does not contain a function"):
            resource.setup_for_execution(build_init_resource_context())

    def test_setup_fails_on_missing_script(self, tmp_path):
        """Test a missing style file fails at setup."""
        resource = TagTransformResource(script_path=str(tmp_path / "missing.py"))

        with pytest.raises(RuleSetLoadError, match="not found"):
            resource.setup_for_execution(build_init_resource_context())

# =============================================================================
# Unit Tests: TagTransform with the Default Style
# =============================================================================

import pytest

from tagtransform import RuleSetLoadError, TagTransform
from tagtransform.models import Entity, Tag, TagTransformSettings


@pytest.fixture
def transform(default_style_path):
    """TagTransform over the shipped default style."""
    settings = TagTransformSettings(script_path=str(default_style_path))
    with TagTransform.from_settings(settings) as tag_transform:
        yield tag_transform


# =============================================================================
# Test: Nodes and Ways
# =============================================================================

def test_cafe_node_kept(transform, cafe_node):
    """Test a tagged node is kept with its tags."""
    decision = transform.filter_tags(cafe_node)

    assert decision.drop is False
    assert decision.output_tags == [Tag("amenity", "cafe")]


def test_node_with_only_deleted_tags_dropped(transform):
    """Test nodes left without tags after cleanup are dropped."""
    decision = transform.filter_tags(Entity(kind="node", tags={"source": "survey", "note": "x"}))

    assert decision.drop is True
    assert decision.output_tags == []


def test_primary_way_is_road(transform, primary_way):
    """Test a primary highway is a road and not an area."""
    decision = transform.filter_tags(primary_way)

    assert decision.drop is False
    assert decision.roads == 1
    assert decision.polygon == 0
    assert decision.output_tags == [Tag("highway", "primary")]


def test_building_way_is_polygon(transform):
    """Test a building way is an area."""
    decision = transform.filter_tags(Entity(kind="way", tags={"building": "yes", "source": "bing"}))

    assert decision.polygon == 1
    assert decision.roads == 0
    assert decision.output_tags == [Tag("building", "yes")]


def test_extra_attributes_from_settings(default_style_path):
    """Test the settings switch enables provenance tags."""
    settings = TagTransformSettings(script_path=str(default_style_path), extra_attributes=True)
    entity = Entity(kind="node", version=5, tags={"amenity": "cafe"}, metadata={"user": "mapper"})

    with TagTransform.from_settings(settings) as tag_transform:
        assert tag_transform.extra_attributes is True
        decision = tag_transform.filter_tags(entity)

    assert Tag("osm_user", "mapper") in decision.output_tags
    assert Tag("osm_version", "5") in decision.output_tags


# =============================================================================
# Test: Relations
# =============================================================================

def test_multipolygon_relation(transform, multipolygon_relation):
    """Test multipolygon members matching the relation tags are superseded."""
    decision = transform.filter_relation(multipolygon_relation)

    assert decision.drop is False
    assert decision.make_polygon == 1
    assert decision.make_boundary == 0
    assert decision.roads == 0
    assert decision.member_superseded == [1, 0]
    assert decision.output_tags == [Tag("landuse", "forest"), Tag("type", "multipolygon")]


def test_boundary_relation(transform):
    """Test administrative boundaries become boundaries and roads."""
    decision = transform.filter_relation_members(
        {"type": "boundary", "boundary": "administrative", "admin_level": "8"},
        [{}, {}],
        ["outer", "outer"],
    )

    assert decision.make_boundary == 1
    assert decision.make_polygon == 0
    assert decision.roads == 1
    assert decision.member_superseded == [0, 0]


def test_unsupported_relation_type_dropped(transform):
    """Test relation types the style does not handle are dropped."""
    relation = Entity(kind="relation", tags={"type": "site"})

    assert transform.filter_tags(relation).drop is True


def test_filter_relation_requires_relation(transform, cafe_node):
    """Test filter_relation rejects non-relations."""
    with pytest.raises(ValueError, match="expects a relation"):
        transform.filter_relation(cafe_node)


# =============================================================================
# Test: Loading and Closing
# =============================================================================

def test_load_error_before_any_entity(write_style):
    """Test a style missing a function fails at construction time."""
    path = write_style("def filter_tags_node(tags, num_tags):\n    return False, tags\n")

    with pytest.raises(RuleSetLoadError, match="filter_tags_way"):
        TagTransform.from_settings(TagTransformSettings(script_path=str(path)))


def test_close_closes_rule_set(default_style_path):
    """Test leaving the context closes the underlying style."""
    settings = TagTransformSettings(script_path=str(default_style_path))

    with TagTransform.from_settings(settings) as tag_transform:
        rule_set = tag_transform.rule_set

    assert rule_set.closed is True

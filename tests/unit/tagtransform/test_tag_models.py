# =============================================================================
# Unit Tests: Tag, Entity and Decision Models
# =============================================================================

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from tagtransform.models import (
    Entity,
    EntityKind,
    FilterDecision,
    Member,
    RelationFilterDecision,
    Tag,
    tags_from_pairs,
)


# =============================================================================
# Test: Tag
# =============================================================================

def test_tag_compares_equal_to_plain_tuple():
    """Test that a Tag behaves like a (key, value) tuple."""
    tag = Tag("amenity", "cafe")

    assert tag == ("amenity", "cafe")
    assert tag.key == "amenity"
    assert tag.value == "cafe"


def test_tags_from_pairs_preserves_order_and_duplicates():
    """Test that duplicate keys survive in a tag list."""
    tags = tags_from_pairs([("name", "a"), ("name", "b")])

    assert tags == [Tag("name", "a"), Tag("name", "b")]


# =============================================================================
# Test: Entity
# =============================================================================

class TestEntity:
    """Test Entity model validation."""

    def test_entity_accepts_mapping_tags(self):
        """Test mapping shorthand for tags keeps insertion order."""
        entity = Entity(kind="way", tags={"highway": "primary", "name": "Main St"})

        assert entity.kind is EntityKind.WAY
        assert entity.tags == [Tag("highway", "primary"), Tag("name", "Main St")]

    def test_entity_accepts_pair_list_with_duplicate_keys(self):
        """Test that pair lists are kept verbatim."""
        entity = Entity(kind="node", tags=[("name", "a"), ("name", "b")])

        assert entity.tags == [Tag("name", "a"), Tag("name", "b")]

    def test_entity_defaults(self):
        """Test defaults: no version metadata, no members."""
        entity = Entity(kind="node")

        assert entity.version == 0
        assert entity.tags == []
        assert entity.members == []
        assert entity.metadata.user == ""
        assert entity.metadata.timestamp is None

    def test_entity_rejects_negative_version(self):
        """Test that version must be >= 0."""
        with pytest.raises(ValidationError):
            Entity(kind="node", version=-1)

    def test_entity_rejects_unknown_kind(self):
        """Test that kind is restricted to node, way and relation."""
        with pytest.raises(ValidationError):
            Entity(kind="changeset")

    def test_entity_rejects_non_string_tag_value(self):
        """Test that tag values must be strings."""
        with pytest.raises(ValidationError):
            Entity(kind="node", tags=[("height", 12)])

    def test_relation_members(self):
        """Test relation members keep order and roles."""
        entity = Entity(
            kind="relation",
            members=[
                {"tags": {"building": "yes"}, "role": "outer"},
                Member(tags=[("building", "yes")], role="inner"),
            ],
        )

        assert [m.role for m in entity.members] == ["outer", "inner"]
        assert entity.members[0].tags == [Tag("building", "yes")]

    def test_metadata_timestamp(self):
        """Test metadata parsing from a dict."""
        entity = Entity(
            kind="node",
            version=3,
            metadata={
                "user": "mapper",
                "uid": 42,
                "changeset": 7,
                "timestamp": "2020-05-01T12:00:00Z",
            },
        )

        assert entity.metadata.timestamp == datetime(2020, 5, 1, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# Test: Decisions
# =============================================================================

def test_filter_decision_flags_default_to_none():
    """Test that non-way decisions carry no polygon/roads."""
    decision = FilterDecision(drop=False, output_tags=[Tag("amenity", "cafe")])

    assert decision.polygon is None
    assert decision.roads is None


def test_relation_decision_rejects_superseded_length_mismatch():
    """Test that member_superseded must match member_count."""
    with pytest.raises(ValidationError, match="member_superseded"):
        RelationFilterDecision(
            drop=False,
            member_superseded=[0],
            member_count=2,
        )


def test_relation_decision_dump_excludes_member_count():
    """Test that member_count is not part of the serialized decision."""
    decision = RelationFilterDecision(
        drop=False,
        member_superseded=[0, 1],
        member_count=2,
    )

    dumped = decision.model_dump()
    assert "member_count" not in dumped
    assert dumped["member_superseded"] == [0, 1]

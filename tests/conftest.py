"""
Shared pytest fixtures for tag transform tests.

Provides style script writers and reusable entity fixtures.
"""

import textwrap
from pathlib import Path

import pytest

from tagtransform.models import Entity, TagTransformSettings


# =============================================================================
# Style Scripts
# =============================================================================

PASSTHROUGH_STYLE = '''
def filter_tags_node(tags, num_tags):
    return False, tags


def filter_tags_way(tags, num_tags):
    return False, tags, 0, 0


def filter_basic_tags_rel(tags, num_tags):
    return False, tags


def filter_tags_relation_member(tags, member_tags, roles, num_members):
    return False, tags, [0] * num_members, 0, 0, 0
'''

DEFAULT_STYLE_PATH = Path(__file__).parent.parent / "styles" / "default.py"


@pytest.fixture
def write_style(tmp_path):
    """Factory writing a style script to tmp_path and returning its path."""

    def _write(source: str, name: str = "style.py") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(source))
        return path

    return _write


@pytest.fixture
def passthrough_source():
    """Source of a style that returns every input unchanged."""
    return PASSTHROUGH_STYLE


@pytest.fixture
def passthrough_style(write_style):
    """Path to a style that returns every input unchanged."""
    return write_style(PASSTHROUGH_STYLE)


@pytest.fixture
def passthrough_settings(passthrough_style):
    """Settings pointing at the passthrough style."""
    return TagTransformSettings(script_path=str(passthrough_style))


@pytest.fixture
def default_style_path():
    """Path to the shipped default style."""
    return DEFAULT_STYLE_PATH


# =============================================================================
# Entity Fixtures
# =============================================================================

@pytest.fixture
def cafe_node():
    """Node with a single amenity tag."""
    return Entity(kind="node", id=1, tags={"amenity": "cafe"})


@pytest.fixture
def primary_way():
    """Way tagged as a primary road."""
    return Entity(kind="way", id=10, tags={"highway": "primary"})


@pytest.fixture
def multipolygon_relation():
    """Relation with one outer and one inner member."""
    return Entity(
        kind="relation",
        id=100,
        tags={"type": "multipolygon", "landuse": "forest"},
        members=[
            {"tags": {"landuse": "forest"}, "role": "outer"},
            {"tags": {}, "role": "inner"},
        ],
    )

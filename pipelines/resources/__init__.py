"""Dagster Resources - Pipeline Collaborators."""

from .tag_transform_resource import TagTransformResource

__all__ = [
    "TagTransformResource",
]

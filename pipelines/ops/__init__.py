"""Dagster Ops - Reusable Computation Units."""

from .tag_filter_op import filter_entities

__all__ = [
    "filter_entities",
]

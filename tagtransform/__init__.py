# =============================================================================
# Tag Transform Library
# =============================================================================
# This package contains the tag transformation stage of the OSM import
# pipeline. See individual sub-packages for detailed documentation.
# =============================================================================

"""
Tag transformation library.

Sub-packages:
- models: Pydantic models for tags, entities, decisions and settings
- rules: Rule set contract, loader, marshaling and filters
"""

from .exceptions import (
    TagTransformError,
    RuleSetLoadError,
    RuleSetExecutionError,
    MalformedResultError,
    RuleSetBusyError,
)
from .transform import TagTransform

__version__ = "0.1.0"

__all__ = [
    "TagTransform",
    "TagTransformError",
    "RuleSetLoadError",
    "RuleSetExecutionError",
    "MalformedResultError",
    "RuleSetBusyError",
]

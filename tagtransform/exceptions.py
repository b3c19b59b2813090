# =============================================================================
# Tag Transform Exceptions
# =============================================================================
# Error kinds raised by the rule set loader and the entity filters.
# =============================================================================

"""
Exception hierarchy for the tag transformation stage.

Load errors are startup-time and abort the pipeline. Execution and
malformed-result errors are per-entity; the caller decides whether to skip
the entity or abort.
"""

from typing import Optional

__all__ = [
    "TagTransformError",
    "RuleSetLoadError",
    "RuleSetExecutionError",
    "MalformedResultError",
    "RuleSetBusyError",
]


class TagTransformError(Exception):
    """Base class for all tag transformation errors."""


class RuleSetLoadError(TagTransformError):
    """The style script failed to execute or lacks a required function."""


class RuleSetExecutionError(TagTransformError):
    """
    A rule set function raised while processing an entity.

    Attributes:
        function_name: Name of the rule set function that failed
    """

    def __init__(self, message: str, function_name: Optional[str] = None):
        super().__init__(message)
        self.function_name = function_name


class MalformedResultError(TagTransformError):
    """A rule set function returned a value of unexpected shape or type."""


class RuleSetBusyError(TagTransformError):
    """A rule set instance was invoked while another call was still running."""

# =============================================================================
# Rule Set Loader
# =============================================================================
# Loads a style script into a private module namespace and validates that
# the four configured filter functions exist before any entity is processed.
# =============================================================================

import importlib.machinery
import importlib.util
import logging
import sys
import threading
import uuid
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Optional, Sequence

from ..exceptions import (
    RuleSetBusyError,
    RuleSetExecutionError,
    RuleSetLoadError,
    TagTransformError,
)
from ..models.config import TagTransformSettings
from .base import RelationMemberRequest, RuleSet, TagFilterRequest

__all__ = ["ScriptRuleSet", "load_rule_set"]

logger = logging.getLogger(__name__)


class ScriptRuleSet(RuleSet):
    """
    Rule set backed by a Python style script.

    The script is executed once in a fresh module namespace that this object
    owns until ``close()``. Loading the same script twice yields two
    independent namespaces, so module-level state in a style is never shared
    between instances.

    Each call holds a non-blocking lock; a call that arrives while another is
    running raises ``RuleSetBusyError``.

    Use ``load_rule_set()`` rather than constructing this directly.

    Example (with a style that returns its input unchanged):
        >>> with load_rule_set(TagTransformSettings(script_path="style.py")) as rules:
        ...     rules.filter_node(TagFilterRequest(tags={"amenity": "cafe"}, tag_count=1))
        (False, {'amenity': 'cafe'})
    """

    def __init__(
        self,
        module: ModuleType,
        script_path: Path,
        node_function: str,
        way_function: str,
        relation_function: str,
        relation_member_function: str,
    ):
        self._module: Optional[ModuleType] = module
        self._script_path = script_path
        self._node_function = node_function
        self._way_function = way_function
        self._relation_function = relation_function
        self._relation_member_function = relation_member_function
        self._lock = threading.Lock()

    @property
    def script_path(self) -> Path:
        return self._script_path

    @property
    def closed(self) -> bool:
        return self._module is None

    @property
    def function_names(self) -> tuple[str, str, str, str]:
        """Function names in contract order: node, way, relation, relation member."""
        return (
            self._node_function,
            self._way_function,
            self._relation_function,
            self._relation_member_function,
        )

    def function_name(self, entry_point: str) -> str:
        return {
            "filter_node": self._node_function,
            "filter_way": self._way_function,
            "filter_relation": self._relation_function,
            "filter_relation_member": self._relation_member_function,
        }.get(entry_point, entry_point)

    def filter_node(self, request: TagFilterRequest) -> Sequence[Any]:
        return self._invoke(
            self._node_function, "basic tag processing", request.tags, request.tag_count
        )

    def filter_way(self, request: TagFilterRequest) -> Sequence[Any]:
        return self._invoke(
            self._way_function, "basic tag processing", request.tags, request.tag_count
        )

    def filter_relation(self, request: TagFilterRequest) -> Sequence[Any]:
        return self._invoke(
            self._relation_function, "basic tag processing", request.tags, request.tag_count
        )

    def filter_relation_member(self, request: RelationMemberRequest) -> Sequence[Any]:
        return self._invoke(
            self._relation_member_function,
            "relation tag processing",
            request.relation_tags,
            request.member_tags,
            request.member_roles,
            request.member_count,
        )

    def _invoke(self, function_name: str, purpose: str, *args: Any) -> Any:
        """
        Call a style function while holding the instance lock.

        Raises:
            TagTransformError: If the rule set has been closed
            RuleSetBusyError: If another call is in progress
            RuleSetExecutionError: If the style function raises
        """
        module = self._module
        if module is None:
            raise TagTransformError(f"Rule set from {self._script_path} is closed")

        if not self._lock.acquire(blocking=False):
            raise RuleSetBusyError(
                f"Rule set from {self._script_path} is already executing a call; "
                f"load one rule set per worker"
            )
        try:
            func: Callable[..., Any] = getattr(module, function_name)
            try:
                return func(*args)
            except Exception as e:
                raise RuleSetExecutionError(
                    f"Failed to execute rule set function for {purpose}: {e}",
                    function_name=function_name,
                ) from e
        finally:
            self._lock.release()

    def close(self) -> None:
        """Drop the style namespace. Safe to call more than once."""
        module = self._module
        if module is None:
            return
        self._module = None
        sys.modules.pop(module.__name__, None)
        logger.info(f"Closed tag transform style: {self._script_path}")


def _check_function_exists(module: ModuleType, function_name: str) -> None:
    """
    Validate that the style defines a callable at top level.

    Raises:
        RuleSetLoadError: If the name is missing or not callable
    """
    if not hasattr(module, function_name):
        raise RuleSetLoadError(
            f"Tag transform style does not contain a function {function_name}"
        )

    func = getattr(module, function_name)
    if not callable(func):
        raise RuleSetLoadError(
            f"Tag transform style attribute {function_name} must be callable, "
            f"got {type(func).__name__}"
        )


def load_rule_set(settings: TagTransformSettings) -> ScriptRuleSet:
    """
    Load the style script named in settings and validate its functions.

    Steps:
    1. Check the script path points at a file
    2. Execute it in a new, uniquely named module
    3. Verify all four configured filter functions exist and are callable

    Args:
        settings: Tag transform settings (script path and function names)

    Returns:
        ScriptRuleSet owning the loaded namespace

    Raises:
        RuleSetLoadError: If the script is missing, fails to execute, or does
            not define one of the configured functions
    """
    script_path = Path(settings.script_path)
    if not script_path.is_file():
        raise RuleSetLoadError(f"Tag transform style not found: {script_path}")

    # Explicit loader so styles need not end in .py
    module_name = f"_tagtransform_style_{uuid.uuid4().hex}"
    loader = importlib.machinery.SourceFileLoader(module_name, str(script_path))
    spec = importlib.util.spec_from_file_location(module_name, script_path, loader=loader)
    if spec is None or spec.loader is None:
        raise RuleSetLoadError(f"Could not load tag transform style from {script_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            raise RuleSetLoadError(f"Tag transform style error: {e}") from e

        for function_name in settings.function_names:
            _check_function_exists(module, function_name)
    except RuleSetLoadError:
        sys.modules.pop(module_name, None)
        raise

    logger.info(f"Loaded tag transform style: {script_path}")

    return ScriptRuleSet(
        module=module,
        script_path=script_path,
        node_function=settings.node_function,
        way_function=settings.way_function,
        relation_function=settings.relation_function,
        relation_member_function=settings.relation_member_function,
    )

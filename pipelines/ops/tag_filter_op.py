# =============================================================================
# Tag Filter Op - Per-entity tag transformation
# =============================================================================
# Runs the tag transform style over a batch of entities. Failures are isolated
# per entity: the offending entity is counted and skipped.
# =============================================================================

from typing import Any, Dict, List

from dagster import In, OpExecutionContext, Out, op

from tagtransform import MalformedResultError, RuleSetExecutionError, TagTransform
from tagtransform.models import Entity, EntityKind


def _filter_entities(
    tag_transform: TagTransform,
    entities: List[Dict[str, Any]],
    log,
) -> Dict[str, Any]:
    """
    Core logic for filtering a batch of entities.

    This function is extracted for easier unit testing without Dagster context.

    Relations with members go through the relation member filter; everything
    else goes through the object filter.

    Args:
        tag_transform: Loaded TagTransform
        entities: Entity dicts (validated into Entity models)
        log: Logger instance (context.log)

    Returns:
        Result dict with:
        - kept: list of {"kind", "id", "decision"} for entities not dropped
        - dropped: number of entities the style dropped
        - failed: list of {"kind", "id", "error"} for entities whose rule
          set call failed

    Raises:
        pydantic.ValidationError: If an entity dict is malformed
        RuleSetBusyError: If the style is in use elsewhere
    """
    kept: List[Dict[str, Any]] = []
    failed: List[Dict[str, Any]] = []
    dropped = 0

    for raw in entities:
        entity = Entity.model_validate(raw)
        try:
            if entity.kind is EntityKind.RELATION and entity.members:
                decision = tag_transform.filter_relation(entity)
            else:
                decision = tag_transform.filter_tags(entity)
        except (RuleSetExecutionError, MalformedResultError) as e:
            log.warning(f"Tag transform failed for {entity.kind.value} {entity.id}: {e}")
            failed.append({"kind": entity.kind.value, "id": entity.id, "error": str(e)})
            continue

        if decision.drop:
            dropped += 1
            continue

        kept.append({
            "kind": entity.kind.value,
            "id": entity.id,
            "decision": decision.model_dump(mode="json"),
        })

    log.info(
        f"Tag transform processed {len(entities)} entities: "
        f"{len(kept)} kept, {dropped} dropped, {len(failed)} failed"
    )

    return {"kept": kept, "dropped": dropped, "failed": failed}


@op(
    ins={"entities": In(dagster_type=list)},
    out={"filter_result": Out(dagster_type=dict)},
    required_resource_keys={"tag_transform"},
)
def filter_entities(context: OpExecutionContext, entities: list) -> dict:
    """
    Apply the tag transform style to a batch of entities.

    Args:
        context: Dagster op execution context
        entities: Entity dicts from the upstream entity provider

    Returns:
        Filter result dict containing:
        - kept: Decisions for entities that survive filtering
        - dropped: Count of entities dropped by the style
        - failed: Entities whose style call raised or returned malformed data
    """
    return _filter_entities(
        tag_transform=context.resources.tag_transform.get_tag_transform(),
        entities=entities,
        log=context.log,
    )

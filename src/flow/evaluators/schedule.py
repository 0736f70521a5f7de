"""Bloco de horário de atendimento: desvia pela saída "true" ou "false"."""

from __future__ import annotations

import logging

from flow.evaluators.base import DanglingBranch, EvaluationContext, StepResult, config_of
from flow.graph.configs import BusinessHoursConfig
from flow.graph.model import Node
from flow.resolver import resolve_edge
from flow.schedule import is_within_business_hours

logger = logging.getLogger(__name__)

OPEN_HANDLE = "true"
CLOSED_HANDLE = "false"


def evaluate_business_hours(node: Node, context: EvaluationContext) -> StepResult:
    config = config_of(node, BusinessHoursConfig)

    is_open = is_within_business_hours(config, context.now, context.default_timezone)
    handle = OPEN_HANDLE if is_open else CLOSED_HANDLE

    edge = resolve_edge(context.graph, node.id, handle, strict=True)
    if edge is None:
        logger.info(
            "business_hours_branch_unwired",
            extra={"flow_id": context.graph.flow_id, "node_id": node.id, "handle": handle},
        )
        return StepResult(side_effect=DanglingBranch(node_id=node.id, handle=handle))
    return StepResult(next_node_id=edge.target_node_id)

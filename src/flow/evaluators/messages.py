"""Blocos sem interação: início, mensagem e tipos desconhecidos."""

from __future__ import annotations

import logging

from flow.evaluators.base import (
    EvaluationContext,
    StepResult,
    advance_unconditional,
    config_of,
)
from flow.graph.configs import MessageConfig, StartConfig, UnsupportedConfig
from flow.graph.model import Node

logger = logging.getLogger(__name__)


def evaluate_start(node: Node, context: EvaluationContext) -> StepResult:
    config = config_of(node, StartConfig)
    return advance_unconditional(node, context, config.greeting)


def evaluate_message(node: Node, context: EvaluationContext) -> StepResult:
    config = config_of(node, MessageConfig)
    return advance_unconditional(node, context, config.text)


def evaluate_unsupported(node: Node, context: EvaluationContext) -> StepResult:
    """Trata bloco desconhecido como mensagem para não travar o fluxo."""
    config = config_of(node, UnsupportedConfig)
    logger.warning(
        "flow_node_unsupported",
        extra={
            "flow_id": context.graph.flow_id,
            "node_id": node.id,
            "raw_kind": node.raw_kind,
        },
    )
    return advance_unconditional(node, context, config.text)

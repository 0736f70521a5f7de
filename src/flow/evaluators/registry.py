"""Despacho de avaliadores por tipo de bloco."""

from __future__ import annotations

from types import MappingProxyType

from flow.evaluators.base import EvaluationContext, Evaluator, StepResult
from flow.evaluators.choices import evaluate_decision, evaluate_options
from flow.evaluators.inputs import evaluate_collect_data, evaluate_satisfaction_survey
from flow.evaluators.messages import evaluate_message, evaluate_start, evaluate_unsupported
from flow.evaluators.schedule import evaluate_business_hours
from flow.evaluators.terminal import (
    evaluate_end,
    evaluate_transfer_agent,
    evaluate_transfer_team,
)
from flow.graph.kinds import NodeKind
from flow.graph.model import Node

EVALUATORS = MappingProxyType({
    NodeKind.START: evaluate_start,
    NodeKind.MESSAGE: evaluate_message,
    NodeKind.OPTIONS: evaluate_options,
    NodeKind.DECISION: evaluate_decision,
    NodeKind.COLLECT_DATA: evaluate_collect_data,
    NodeKind.END: evaluate_end,
    NodeKind.TRANSFER_TEAM: evaluate_transfer_team,
    NodeKind.TRANSFER_AGENT: evaluate_transfer_agent,
    NodeKind.BUSINESS_HOURS: evaluate_business_hours,
    NodeKind.SATISFACTION_SURVEY: evaluate_satisfaction_survey,
    NodeKind.UNSUPPORTED: evaluate_unsupported,
})


def get_evaluator(kind: NodeKind) -> Evaluator:
    return EVALUATORS.get(kind, evaluate_unsupported)


def evaluate(node: Node, context: EvaluationContext) -> StepResult:
    """Avalia o bloco com o avaliador do seu tipo.

    Raises:
        ConfigurationError: Parâmetro obrigatório ausente (ex: alvo de transferência)
    """
    return get_evaluator(node.kind)(node, context)

"""Blocos de escolha: lista de opções e decisão sim/não."""

from __future__ import annotations

from flow.evaluators.base import EvaluationContext, StepResult, config_of, stay
from flow.graph.configs import DecisionConfig, OptionsConfig
from flow.graph.model import Node
from flow.matching import (
    UNMATCHED,
    decision_handle,
    decision_labels,
    format_options_prompt,
    match_option,
    option_handle,
)
from flow.resolver import resolve_edge

UNWIRED_OPTION_MESSAGE = "Opção selecionada, mas próximo bloco não encontrado."


def _follow_choice(node: Node, context: EvaluationContext, handle: str) -> StepResult:
    edge = resolve_edge(context.graph, node.id, handle)
    if edge is None:
        # Opção reconhecida sem conexão: avisa e permanece no bloco
        return StepResult(text=UNWIRED_OPTION_MESSAGE, blocking=True)
    return StepResult(next_node_id=edge.target_node_id)


def evaluate_options(node: Node, context: EvaluationContext) -> StepResult:
    config = config_of(node, OptionsConfig)

    index = match_option(context.inbound_text, config.options)
    if index is UNMATCHED:
        return stay(node, format_options_prompt(config.prompt, config.options))
    return _follow_choice(node, context, option_handle(index))


def evaluate_decision(node: Node, context: EvaluationContext) -> StepResult:
    config = config_of(node, DecisionConfig)

    labels = decision_labels(config)
    index = match_option(context.inbound_text, labels)
    if index is UNMATCHED:
        return stay(node, format_options_prompt(config.prompt, labels))
    return _follow_choice(node, context, decision_handle(index))

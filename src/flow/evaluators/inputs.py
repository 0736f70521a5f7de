"""Blocos que capturam resposta livre: coleta de dados e pesquisa de satisfação."""

from __future__ import annotations

from flow.evaluators.base import (
    EvaluationContext,
    StepResult,
    advance_unconditional,
    config_of,
    stay,
)
from flow.graph.configs import STAR_RESPONSE_TYPE, CollectDataConfig, SatisfactionSurveyConfig
from flow.graph.model import Node
from flow.matching import parse_rating

STAR_SCALE = (
    "⭐ 1 - Muito ruim\n"
    "⭐⭐ 2 - Ruim\n"
    "⭐⭐⭐ 3 - Regular\n"
    "⭐⭐⭐⭐ 4 - Bom\n"
    "⭐⭐⭐⭐⭐ 5 - Excelente"
)


def evaluate_collect_data(node: Node, context: EvaluationContext) -> StepResult:
    config = config_of(node, CollectDataConfig)

    answer = context.inbound_text.strip()
    if not answer:
        return stay(node, config.prompt)

    context.variables[config.variable] = answer
    return advance_unconditional(node, context)


def rating_prompt(config: SatisfactionSurveyConfig) -> str:
    if config.response_type == STAR_RESPONSE_TYPE:
        return f"{config.prompt}\n\n{STAR_SCALE}"
    return config.prompt


def evaluate_satisfaction_survey(node: Node, context: EvaluationContext) -> StepResult:
    config = config_of(node, SatisfactionSurveyConfig)

    rating = parse_rating(context.inbound_text)
    if rating is None:
        return stay(node, rating_prompt(config))

    if config.variable:
        context.variables[config.variable] = str(rating)
    return advance_unconditional(node, context)

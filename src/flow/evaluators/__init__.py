"""Avaliadores de bloco.

Cada tipo de bloco tem uma função pura que produz texto de saída,
próximo bloco, flag de bloqueio e efeito terminal opcional.
"""

from flow.evaluators.base import (
    DanglingBranch,
    EvaluationContext,
    Evaluator,
    FlowCompleted,
    Handoff,
    HandoffKind,
    SideEffect,
    StepResult,
)
from flow.evaluators.choices import UNWIRED_OPTION_MESSAGE
from flow.evaluators.inputs import STAR_SCALE
from flow.evaluators.registry import EVALUATORS, evaluate, get_evaluator

__all__ = [
    "EVALUATORS",
    "STAR_SCALE",
    "UNWIRED_OPTION_MESSAGE",
    "DanglingBranch",
    "EvaluationContext",
    "Evaluator",
    "FlowCompleted",
    "Handoff",
    "HandoffKind",
    "SideEffect",
    "StepResult",
    "evaluate",
    "get_evaluator",
]

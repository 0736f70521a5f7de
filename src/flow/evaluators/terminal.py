"""Blocos terminais: encerramento e transferências para humano."""

from __future__ import annotations

from flow.errors import ConfigurationError
from flow.evaluators.base import (
    EvaluationContext,
    FlowCompleted,
    Handoff,
    HandoffKind,
    StepResult,
    config_of,
)
from flow.graph.configs import EndConfig, TransferAgentConfig, TransferTeamConfig
from flow.graph.model import Node


def evaluate_end(node: Node, context: EvaluationContext) -> StepResult:
    config = config_of(node, EndConfig)
    return StepResult(text=config.message, side_effect=FlowCompleted())


def evaluate_transfer_team(node: Node, context: EvaluationContext) -> StepResult:
    config = config_of(node, TransferTeamConfig)

    if not config.team_id:
        raise ConfigurationError(f"bloco {node.id}: transferência sem team_id")

    handoff = Handoff(
        kind=HandoffKind.TEAM,
        target_id=config.team_id,
        target_name=config.team_name,
        extra={
            "transfer_type": node.raw_kind or str(node.kind),
            "team_id": config.team_id,
            "target_name": config.team_name,
        },
    )
    return StepResult(text=config.message, side_effect=handoff)


def evaluate_transfer_agent(node: Node, context: EvaluationContext) -> StepResult:
    config = config_of(node, TransferAgentConfig)

    if not config.agent_id:
        raise ConfigurationError(f"bloco {node.id}: transferência sem agent_id")

    handoff = Handoff(
        kind=HandoffKind.AGENT,
        target_id=config.agent_id,
        target_name=config.agent_name,
        extra={
            "transfer_type": node.raw_kind or str(node.kind),
            "agent_id": config.agent_id,
            "target_name": config.agent_name,
        },
    )
    return StepResult(text=config.message, side_effect=handoff)

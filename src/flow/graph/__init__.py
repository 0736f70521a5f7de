"""Modelo de grafo de fluxo e carregamento de payloads."""

from flow.graph.configs import (
    BusinessHoursConfig,
    CollectDataConfig,
    DecisionConfig,
    EndConfig,
    MessageConfig,
    NodeConfig,
    OptionsConfig,
    SatisfactionSurveyConfig,
    StartConfig,
    TimeRange,
    TransferAgentConfig,
    TransferTeamConfig,
    UnsupportedConfig,
)
from flow.graph.kinds import NodeKind, resolve_kind
from flow.graph.loader import load_flow, load_flow_file, parse_flow_definition
from flow.graph.model import Edge, FlowDefinition, FlowGraph, Node

__all__ = [
    "BusinessHoursConfig",
    "CollectDataConfig",
    "DecisionConfig",
    "Edge",
    "EndConfig",
    "FlowDefinition",
    "FlowGraph",
    "MessageConfig",
    "Node",
    "NodeConfig",
    "NodeKind",
    "OptionsConfig",
    "SatisfactionSurveyConfig",
    "StartConfig",
    "TimeRange",
    "TransferAgentConfig",
    "TransferTeamConfig",
    "UnsupportedConfig",
    "load_flow",
    "load_flow_file",
    "parse_flow_definition",
]

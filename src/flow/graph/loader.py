"""Carregamento de fluxos a partir de payloads JSON/YAML.

Aceita dois formatos:
    - canônico: nodes {id, kind, config}, edges {id, source_node_id,
      target_node_id, source_handle}
    - editor visual: nodes {id, type, data: {config, ...}}, edges
      {id, source, target, sourceHandle}

No formato do editor, chaves diretas em `data` têm precedência sobre
`data.config` (o editor grava o alvo de transferência em ambos).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from flow.errors import GraphError
from flow.graph.configs import build_config
from flow.graph.kinds import resolve_kind
from flow.graph.model import Edge, FlowDefinition, FlowGraph, Node

logger = logging.getLogger(__name__)


def _first_present(mapping: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = mapping.get(key)
        if value not in (None, ""):
            return value
    return None


def _raw_config(raw_node: dict[str, Any]) -> dict[str, Any]:
    if isinstance(raw_node.get("config"), dict):
        return dict(raw_node["config"])

    data = raw_node.get("data")
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise GraphError(f"bloco {raw_node.get('id')}: data deve ser objeto")

    nested = data.get("config") or {}
    if not isinstance(nested, dict):
        raise GraphError(f"bloco {raw_node.get('id')}: data.config deve ser objeto")

    merged = dict(nested)
    for key, value in data.items():
        if key == "config" or value in (None, ""):
            continue
        merged[key] = value
    return merged


def parse_node(raw_node: dict[str, Any]) -> Node:
    """Normaliza um bloco bruto.

    Raises:
        GraphError: Bloco sem id ou configuração inválida
    """
    if not isinstance(raw_node, dict):
        raise GraphError("bloco deve ser objeto")

    node_id = raw_node.get("id")
    if node_id in (None, ""):
        raise GraphError("bloco sem id")
    node_id = str(node_id)

    raw_kind = _first_present(raw_node, "kind", "type") or ""
    kind = resolve_kind(raw_kind)

    try:
        config = build_config(kind, _raw_config(raw_node))
    except ValidationError as exc:
        raise GraphError(
            f"bloco {node_id} ({kind}): configuração inválida: "
            f"{exc.error_count()} erro(s)"
        ) from exc

    return Node(id=node_id, kind=kind, config=config, raw_kind=str(raw_kind))


def parse_edge(raw_edge: dict[str, Any], position: int) -> Edge:
    """Normaliza uma conexão bruta.

    Raises:
        GraphError: Conexão sem origem ou destino
    """
    if not isinstance(raw_edge, dict):
        raise GraphError("conexão deve ser objeto")

    source = _first_present(raw_edge, "source_node_id", "source")
    target = _first_present(raw_edge, "target_node_id", "target")
    if source is None or target is None:
        raise GraphError(f"conexão #{position} sem origem ou destino")

    handle = _first_present(raw_edge, "source_handle", "sourceHandle")
    edge_id = raw_edge.get("id") or f"{source}->{target}#{position}"

    return Edge(
        id=str(edge_id),
        source_node_id=str(source),
        target_node_id=str(target),
        source_handle=str(handle) if handle is not None else None,
    )


def parse_flow_definition(payload: dict[str, Any]) -> FlowDefinition:
    """Normaliza o payload bruto em FlowDefinition.

    Raises:
        GraphError: Payload estruturalmente inválido
    """
    if not isinstance(payload, dict):
        raise GraphError("fluxo deve ser objeto")

    raw_nodes = payload.get("nodes") or []
    raw_edges = payload.get("edges") or []
    if not isinstance(raw_nodes, list) or not isinstance(raw_edges, list):
        raise GraphError("nodes e edges devem ser listas")

    flow_id = str(payload.get("id") or payload.get("flow_id") or "")
    return FlowDefinition(
        id=flow_id,
        nodes=tuple(parse_node(raw) for raw in raw_nodes),
        edges=tuple(parse_edge(raw, index) for index, raw in enumerate(raw_edges)),
    )


def load_flow(payload: dict[str, Any]) -> FlowGraph:
    """Carrega e indexa um fluxo.

    Problemas que só falham quando o bloco é alcançado (ex: transferência
    sem alvo) são logados aqui e não impedem o carregamento.

    Raises:
        GraphError: Payload inválido ou ids duplicados
    """
    graph = FlowGraph.from_definition(parse_flow_definition(payload))

    issues = graph.configuration_issues()
    if issues:
        logger.warning(
            "flow_configuration_issues",
            extra={"flow_id": graph.flow_id, "issues": issues},
        )

    logger.debug(
        "flow_loaded",
        extra={
            "flow_id": graph.flow_id,
            "nodes_count": len(graph.nodes),
            "edges_count": len(graph.edges),
        },
    )
    return graph


def load_flow_file(path: str | Path) -> FlowGraph:
    """Carrega fluxo de arquivo .json, .yaml ou .yml.

    Raises:
        GraphError: Arquivo ilegível ou conteúdo inválido
    """
    file_path = Path(path)
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise GraphError(f"não foi possível ler {file_path}") from exc

    try:
        if file_path.suffix.lower() in {".yaml", ".yml"}:
            payload = yaml.safe_load(content)
        else:
            payload = json.loads(content)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise GraphError(f"conteúdo inválido em {file_path}") from exc

    return load_flow(payload)

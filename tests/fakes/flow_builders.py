"""Montagem de payloads de fluxo usados nos testes."""

from __future__ import annotations

from typing import Any


def node(node_id: str, kind: str, **config: Any) -> dict[str, Any]:
    """Bloco no formato canônico."""
    return {"id": node_id, "kind": kind, "config": config}


def edge(source: str, target: str, handle: str | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"source_node_id": source, "target_node_id": target}
    if handle is not None:
        payload["source_handle"] = handle
    return payload


def flow(flow_id: str, nodes: list[dict[str, Any]], edges: list[dict[str, Any]]) -> dict[str, Any]:
    return {"id": flow_id, "nodes": nodes, "edges": edges}


def greeting_menu_flow() -> dict[str, Any]:
    """start -> message -> options(A, B) -> end A / end B."""
    return flow(
        "menu",
        [
            node("start", "start"),
            node("hello", "message", text="Olá! Bem-vindo."),
            node("menu", "options", prompt="Escolha:", options=["A", "B"]),
            node("end_a", "end", message="Você escolheu A."),
            node("end_b", "end", message="Você escolheu B."),
        ],
        [
            edge("start", "hello"),
            edge("hello", "menu"),
            edge("menu", "end_a", "opcao_0"),
            edge("menu", "end_b", "opcao_1"),
        ],
    )


def authored_sales_flow() -> dict[str, Any]:
    """Fluxo no formato do editor visual (type/data/source/target/sourceHandle)."""
    return {
        "id": "vendas",
        "nodes": [
            {"id": "n1", "type": "inicio", "data": {}},
            {
                "id": "n2",
                "type": "opcoes",
                "data": {"config": {"pergunta": "Setor?", "opcoes": ["Vendas", "Suporte"]}},
            },
            {
                "id": "n3",
                "type": "transferencia_time",
                "data": {"config": {"teamId": "t-1"}, "teamNome": "Comercial"},
            },
            {"id": "n4", "type": "encerrar", "data": {"config": {"mensagem": "Até logo"}}},
        ],
        "edges": [
            {"id": "e1", "source": "n1", "target": "n2"},
            {"id": "e2", "source": "n2", "target": "n3", "sourceHandle": "opcao_0"},
            {"id": "e3", "source": "n2", "target": "n4", "sourceHandle": "opcao_1"},
        ],
    }

"""Testes do ConversationRunner (turnos completos com stores em memória)."""

from __future__ import annotations

import asyncio

import pytest

from app.infra.stores import MemoryHistoryRecorder, MemoryStateStore
from app.observability import get_correlation_id
from flow.errors import (
    INTERNAL_ERROR_MESSAGE,
    INVALID_FLOW_MESSAGE,
    MISSING_NODE_MESSAGE,
    MISSING_START_MESSAGE,
    TRANSFER_CONFIG_MESSAGE,
    ErrorKind,
)
from flow.evaluators import HandoffKind
from flow.graph import load_flow
from flow.graph.configs import DEFAULT_TEAM_MESSAGE
from flow.runner import ConversationRunner, IdentityLockRegistry
from flow.types import ConversationIdentity, ConversationState, HistoryStatus
from tests.fakes.fake_flow_collaborators import (
    FailingHistoryRecorder,
    FailingStateStore,
    FixedClock,
    RecordingHandoffNotifier,
    SlowStateStore,
    YieldingStateStore,
)
from tests.fakes.flow_builders import (
    authored_sales_flow,
    edge,
    flow,
    greeting_menu_flow,
    node,
)

IDENTITY = ConversationIdentity(account_id="acc-1", owner_id="cli-1", flow_id="menu")


def _runner(
    *,
    state_store=None,
    history_recorder=None,
    handoff_notifier=None,
    clock=None,
    **kwargs,
) -> ConversationRunner:
    return ConversationRunner(
        state_store=state_store if state_store is not None else MemoryStateStore(),
        history_recorder=history_recorder if history_recorder is not None else MemoryHistoryRecorder(),
        handoff_notifier=handoff_notifier if handoff_notifier is not None else RecordingHandoffNotifier(),
        clock=clock or FixedClock(),
        **kwargs,
    )


def _transfer_flow(**team_config) -> dict:
    return flow(
        "menu",
        [
            node("s", "start"),
            node("t", "transferencia_time", **team_config),
        ],
        [edge("s", "t")],
    )


class TestConversationRunnerConstruction:
    def test_rejects_invalid_max_hops(self) -> None:
        with pytest.raises(ValueError):
            _runner(max_hops=0)

    def test_rejects_invalid_timeout(self) -> None:
        with pytest.raises(ValueError):
            _runner(store_timeout_seconds=0)


class TestConversationRunnerTurns:
    """Turnos bem-sucedidos."""

    @pytest.mark.asyncio
    async def test_first_turn_runs_until_prompt(self) -> None:
        """Primeiro turno semeia no início e para na primeira pergunta."""
        store = MemoryStateStore()
        runner = _runner(state_store=store)

        outcome = await runner.step(greeting_menu_flow(), IDENTITY, "oi")

        assert outcome.ok
        assert outcome.segments == ["Olá! Bem-vindo.", "Escolha:\n1. A\n2. B"]
        assert outcome.current_node_id == "menu"
        assert not outcome.terminated
        state = await store.load(IDENTITY)
        assert state is not None
        assert state.current_node_id == "menu"
        assert state.last_message == "oi"

    @pytest.mark.asyncio
    async def test_choice_reaches_end_and_records_history(self) -> None:
        """Escolha leva ao encerramento: estado removido e um histórico gravado."""
        store = MemoryStateStore()
        history = MemoryHistoryRecorder()
        clock = FixedClock()
        runner = _runner(state_store=store, history_recorder=history, clock=clock)

        await runner.step(greeting_menu_flow(), IDENTITY, "oi")
        outcome = await runner.step(greeting_menu_flow(), IDENTITY, "B")

        assert outcome.segments == ["Você escolheu B."]
        assert outcome.terminated
        assert outcome.current_node_id is None
        assert await store.load(IDENTITY) is None

        records = history.records_for(IDENTITY)
        assert len(records) == 1
        assert records[0].status == HistoryStatus.COMPLETED
        assert records[0].final_node_id == "end_b"
        assert records[0].extra["last_message"] == "B"
        assert records[0].created_at == clock.instant

    @pytest.mark.asyncio
    async def test_conversation_restarts_after_end(self) -> None:
        """Após o término a próxima mensagem recomeça do bloco inicial."""
        runner = _runner()
        await runner.step(greeting_menu_flow(), IDENTITY, "oi")
        await runner.step(greeting_menu_flow(), IDENTITY, "1")

        outcome = await runner.step(greeting_menu_flow(), IDENTITY, "oi de novo")

        assert outcome.segments[0] == "Olá! Bem-vindo."
        assert outcome.current_node_id == "menu"

    @pytest.mark.asyncio
    async def test_unmatched_answer_reasks_without_moving(self) -> None:
        """Resposta inválida repete a pergunta e mantém o bloco."""
        store = MemoryStateStore()
        runner = _runner(state_store=store)
        await runner.step(greeting_menu_flow(), IDENTITY, "oi")

        first = await runner.step(greeting_menu_flow(), IDENTITY, "talvez")
        second = await runner.step(greeting_menu_flow(), IDENTITY, "talvez")

        assert first.segments == ["Escolha:\n1. A\n2. B"]
        assert second.segments == first.segments
        state = await store.load(IDENTITY)
        assert state is not None
        assert state.current_node_id == "menu"

    @pytest.mark.asyncio
    async def test_accepts_preloaded_graph(self) -> None:
        runner = _runner()

        outcome = await runner.step(load_flow(greeting_menu_flow()), IDENTITY, "oi")

        assert outcome.current_node_id == "menu"

    @pytest.mark.asyncio
    async def test_collected_variables_survive_turns(self) -> None:
        """Variáveis coletadas são persistidas e chegam ao histórico."""
        history = MemoryHistoryRecorder()
        runner = _runner(history_recorder=history)
        payload = flow(
            "menu",
            [
                node("s", "start"),
                node("nome", "collect_data", prompt="Nome?", variable="nome"),
                node("email", "collect_data", prompt="Email?", variable="email"),
                node("e", "end", message="Obrigado"),
            ],
            [edge("s", "nome"), edge("nome", "email"), edge("email", "e")],
        )

        assert (await runner.step(payload, IDENTITY, "")).segments == ["Nome?"]
        assert (await runner.step(payload, IDENTITY, "Ana")).segments == ["Email?"]
        outcome = await runner.step(payload, IDENTITY, "ana@example.com")

        assert outcome.segments == ["Obrigado"]
        assert history.records[0].variables == {"nome": "Ana", "email": "ana@example.com"}

    @pytest.mark.asyncio
    async def test_only_first_node_receives_input(self) -> None:
        """Blocos alcançados por avanço não consomem a mensagem do turno."""
        runner = _runner()
        payload = flow(
            "menu",
            [node("s", "start"), node("m", "message", text="Oi"), node("c", "collect_data")],
            [edge("s", "m"), edge("m", "c")],
        )

        outcome = await runner.step(payload, IDENTITY, "resposta antecipada")

        assert outcome.current_node_id == "c"
        assert outcome.segments == ["Oi", "Digite sua resposta:"]

    @pytest.mark.asyncio
    async def test_authored_flow_end_to_end(self) -> None:
        """Fluxo do editor: escolha por texto leva à transferência para o time."""
        notifier = RecordingHandoffNotifier()
        history = MemoryHistoryRecorder()
        runner = _runner(handoff_notifier=notifier, history_recorder=history)
        identity = ConversationIdentity("acc-1", "cli-9", "vendas")

        prompt = await runner.step(authored_sales_flow(), identity, "olá")
        outcome = await runner.step(authored_sales_flow(), identity, "VENDAS")

        assert prompt.segments == ["Setor?\n1. Vendas\n2. Suporte"]
        assert outcome.terminated
        assert outcome.segments == ["Aguarde, você será atendido por nossa equipe..."]
        handoff, notified_identity, context = notifier.calls[0]
        assert handoff.kind == HandoffKind.TEAM
        assert handoff.target_id == "t-1"
        assert notified_identity == identity
        assert context["node_id"] == "n3"
        record = history.records[0]
        assert record.status == HistoryStatus.TRANSFERRED_TEAM
        assert record.extra["transfer_type"] == "transferencia_time"
        assert record.extra["target_name"] == "Comercial"


class TestConversationRunnerLimits:
    """Limite de avanços automáticos por turno."""

    @pytest.mark.asyncio
    async def test_hop_limit_rests_on_next_node(self) -> None:
        """Cadeia longa para no limite e o próximo turno continua dali."""
        store = MemoryStateStore()
        runner = _runner(state_store=store, max_hops=3)
        nodes = [node("s", "start")] + [node(f"m{i}", "message", text=str(i)) for i in range(1, 6)]
        edges = [edge("s", "m1")] + [edge(f"m{i}", f"m{i + 1}") for i in range(1, 5)]
        payload = flow("menu", nodes, edges)

        first = await runner.step(payload, IDENTITY, "oi")
        second = await runner.step(payload, IDENTITY, "")

        assert first.segments == ["1", "2"]
        assert first.current_node_id == "m3"
        assert second.segments[:2] == ["3", "4"]

    @pytest.mark.asyncio
    async def test_cycle_terminates(self) -> None:
        """Ciclo entre mensagens não trava o turno."""
        runner = _runner(max_hops=4)
        payload = flow(
            "menu",
            [node("s", "start"), node("a", "message", text="a"), node("b", "message", text="b")],
            [edge("s", "a"), edge("a", "b"), edge("b", "a")],
        )

        outcome = await runner.step(payload, IDENTITY, "oi")

        assert outcome.ok
        assert outcome.segments == ["a", "b", "a"]


class TestConversationRunnerTermination:
    """Efeitos terminais."""

    @pytest.mark.asyncio
    async def test_handoff_notifies_and_records(self) -> None:
        notifier = RecordingHandoffNotifier()
        history = MemoryHistoryRecorder()
        store = MemoryStateStore()
        runner = _runner(state_store=store, handoff_notifier=notifier, history_recorder=history)

        outcome = await runner.step(_transfer_flow(teamId="t-9"), IDENTITY, "quero ajuda")

        assert outcome.terminated
        assert len(notifier.calls) == 1
        assert history.records[0].extra["team_id"] == "t-9"
        assert history.records[0].extra["last_message"] == "quero ajuda"
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_agent_handoff_status(self) -> None:
        history = MemoryHistoryRecorder()
        runner = _runner(history_recorder=history)
        payload = flow(
            "menu",
            [node("s", "start"), node("t", "transferencia_agente", agenteId="ag-3")],
            [edge("s", "t")],
        )

        await runner.step(payload, IDENTITY, "oi")

        assert history.records[0].status == HistoryStatus.TRANSFERRED_AGENT

    @pytest.mark.asyncio
    async def test_history_failure_is_not_fatal(self) -> None:
        """Falha no histórico é logada; o turno termina normalmente."""
        recorder = FailingHistoryRecorder()
        store = MemoryStateStore()
        runner = _runner(state_store=store, history_recorder=recorder)
        await runner.step(greeting_menu_flow(), IDENTITY, "oi")

        outcome = await runner.step(greeting_menu_flow(), IDENTITY, "A")

        assert outcome.ok
        assert outcome.terminated
        assert outcome.segments == ["Você escolheu A."]
        assert recorder.attempts == 1
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_unexpected_history_error_still_hands_off(self) -> None:
        """Erro inesperado do histórico não impede a mensagem nem a notificação."""
        recorder = FailingHistoryRecorder(ValueError("registro inválido"))
        notifier = RecordingHandoffNotifier()
        store = MemoryStateStore()
        runner = _runner(state_store=store, history_recorder=recorder, handoff_notifier=notifier)

        outcome = await runner.step(_transfer_flow(teamId="t-1"), IDENTITY, "oi")

        assert outcome.ok
        assert outcome.terminated
        assert outcome.segments[-1] == DEFAULT_TEAM_MESSAGE
        assert recorder.attempts == 1
        assert len(notifier.calls) == 1
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_notify_failure_is_not_fatal(self) -> None:
        notifier = RecordingHandoffNotifier(fail=True)
        history = MemoryHistoryRecorder()
        runner = _runner(handoff_notifier=notifier, history_recorder=history)

        outcome = await runner.step(_transfer_flow(teamId="t-1"), IDENTITY, "oi")

        assert outcome.ok
        assert outcome.terminated
        assert len(history.records) == 1

    @pytest.mark.asyncio
    async def test_dangling_branch_terminates_without_history(self) -> None:
        """Horário sem a saída escolhida encerra sem histórico."""
        history = MemoryHistoryRecorder()
        store = MemoryStateStore()
        runner = _runner(state_store=store, history_recorder=history)
        payload = flow(
            "menu",
            [
                node("s", "start"),
                node("h", "business_hours", weekdays=[]),
                node("open", "message", text="Aberto"),
            ],
            [edge("s", "h"), edge("h", "open", "true")],
        )

        outcome = await runner.step(payload, IDENTITY, "oi")

        assert outcome.ok
        assert outcome.terminated
        assert outcome.segments == []
        assert history.records == []
        assert len(store) == 0


class TestConversationRunnerErrors:
    """Falhas viram um único segmento seguro."""

    @pytest.mark.asyncio
    async def test_transfer_without_target(self) -> None:
        store = MemoryStateStore()
        notifier = RecordingHandoffNotifier()
        runner = _runner(state_store=store, handoff_notifier=notifier)

        outcome = await runner.step(_transfer_flow(), IDENTITY, "oi")

        assert outcome.error == ErrorKind.CONFIGURATION
        assert outcome.segments == [TRANSFER_CONFIG_MESSAGE]
        assert notifier.calls == []
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_missing_start_node(self) -> None:
        runner = _runner()
        payload = flow("menu", [node("m", "message", text="oi")], [])

        outcome = await runner.step(payload, IDENTITY, "oi")

        assert outcome.error == ErrorKind.GRAPH
        assert outcome.segments == [MISSING_START_MESSAGE]

    @pytest.mark.asyncio
    async def test_state_points_to_removed_node(self) -> None:
        """Estado salvo em bloco que não existe mais no fluxo."""
        store = MemoryStateStore()
        await store.save(IDENTITY, ConversationState(current_node_id="removido"))
        runner = _runner(state_store=store)

        outcome = await runner.step(greeting_menu_flow(), IDENTITY, "oi")

        assert outcome.error == ErrorKind.GRAPH
        assert outcome.segments == [MISSING_NODE_MESSAGE]

    @pytest.mark.asyncio
    async def test_invalid_flow_payload(self) -> None:
        runner = _runner()
        payload = flow("menu", [node("a", "start"), node("a", "end")], [])

        outcome = await runner.step(payload, IDENTITY, "oi")

        assert outcome.error == ErrorKind.GRAPH
        assert outcome.segments == [INVALID_FLOW_MESSAGE]

    @pytest.mark.asyncio
    async def test_state_store_failure(self) -> None:
        runner = _runner(state_store=FailingStateStore(fail_on={"load"}))

        outcome = await runner.step(greeting_menu_flow(), IDENTITY, "oi")

        assert outcome.error == ErrorKind.STATE_STORE
        assert outcome.segments == [INTERNAL_ERROR_MESSAGE]

    @pytest.mark.asyncio
    async def test_state_save_failure(self) -> None:
        runner = _runner(state_store=FailingStateStore(fail_on={"save"}))

        outcome = await runner.step(greeting_menu_flow(), IDENTITY, "oi")

        assert outcome.error == ErrorKind.STATE_STORE

    @pytest.mark.asyncio
    async def test_state_store_timeout(self) -> None:
        """Store lento estoura o timeout e vira falha de store."""
        runner = _runner(state_store=SlowStateStore(delay_seconds=1.0), store_timeout_seconds=0.01)

        outcome = await runner.step(greeting_menu_flow(), IDENTITY, "oi")

        assert outcome.error == ErrorKind.STATE_STORE
        assert outcome.segments == [INTERNAL_ERROR_MESSAGE]


class TestConversationRunnerConcurrency:
    """Serialização por identidade."""

    @pytest.mark.asyncio
    async def test_same_identity_turns_are_serialized(self) -> None:
        """O segundo turno só lê o estado depois que o primeiro gravou."""
        store = YieldingStateStore()
        locks = IdentityLockRegistry()
        runner = _runner(state_store=store, locks=locks)

        first, second = await asyncio.gather(
            runner.step(greeting_menu_flow(), IDENTITY, "oi"),
            runner.step(greeting_menu_flow(), IDENTITY, "B"),
        )

        assert first.current_node_id == "menu"
        assert second.terminated
        assert second.segments == ["Você escolheu B."]
        assert store.calls == ["load", "save", "load"]
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_different_identities_are_independent(self) -> None:
        store = MemoryStateStore()
        runner = _runner(state_store=store)
        other = ConversationIdentity("acc-1", "cli-2", "menu")

        await asyncio.gather(
            runner.step(greeting_menu_flow(), IDENTITY, "oi"),
            runner.step(greeting_menu_flow(), other, "oi"),
        )

        assert len(store) == 2


class TestConversationRunnerCorrelation:
    @pytest.mark.asyncio
    async def test_correlation_id_is_scoped_to_step(self) -> None:
        """Turno sem correlation_id ganha um temporário e restaura o contexto."""
        runner = _runner()

        await runner.step(greeting_menu_flow(), IDENTITY, "oi")

        assert get_correlation_id() == ""

"""ConversationRunner: executa um turno de conversa sobre o grafo do fluxo.

Máquina de estados por identidade:
    Idle (sem estado) -> Active(bloco) -> Active(bloco') ... -> Terminated

Um turno:
    1. Serializa pela identidade (IdentityLockRegistry)
    2. Carrega estado (ou semeia no bloco inicial)
    3. Avalia blocos em loop limitado por max_hops, acumulando segmentos
    4. Aplica efeito terminal (remove estado, grava histórico, notifica) ou
       persiste o estado inteiro (upsert)
    5. Devolve StepOutcome; nunca levanta exceção para o chamador
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any, TypeVar

from app.observability import (
    get_correlation_id,
    record_handoff,
    record_latency,
    reset_correlation_id,
    set_correlation_id,
)
from flow.errors import INTERNAL_ERROR_MESSAGE, ErrorKind, FlowError, InfrastructureError
from flow.evaluators import (
    DanglingBranch,
    EvaluationContext,
    Handoff,
    HandoffKind,
    SideEffect,
    evaluate,
)
from flow.graph import FlowGraph, Node, load_flow
from flow.runner.locks import IdentityLockRegistry
from flow.types import (
    ConversationHistory,
    ConversationIdentity,
    ConversationState,
    HistoryStatus,
    StepOutcome,
)

if TYPE_CHECKING:
    from app.protocols import (
        ClockProtocol,
        HandoffNotifierProtocol,
        HistoryRecorderProtocol,
        StateStoreProtocol,
    )

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_HOPS = 10
DEFAULT_STORE_TIMEOUT_SECONDS = 5.0
DEFAULT_TIMEZONE = "America/Sao_Paulo"

_HANDOFF_STATUS: dict[HandoffKind, HistoryStatus] = {
    HandoffKind.TEAM: HistoryStatus.TRANSFERRED_TEAM,
    HandoffKind.AGENT: HistoryStatus.TRANSFERRED_AGENT,
}


class ConversationRunner:
    """Orquestra turnos de conversa com colaboradores injetados.

    Exemplo:
        runner = ConversationRunner(
            state_store=MemoryStateStore(),
            history_recorder=MemoryHistoryRecorder(),
            handoff_notifier=LoggingHandoffNotifier(),
            clock=SystemClock(),
        )
        outcome = await runner.step(flow_payload, identity, "oi")
    """

    def __init__(
        self,
        state_store: StateStoreProtocol,
        history_recorder: HistoryRecorderProtocol,
        handoff_notifier: HandoffNotifierProtocol,
        clock: ClockProtocol,
        *,
        max_hops: int = DEFAULT_MAX_HOPS,
        store_timeout_seconds: float = DEFAULT_STORE_TIMEOUT_SECONDS,
        default_timezone: str = DEFAULT_TIMEZONE,
        locks: IdentityLockRegistry | None = None,
    ) -> None:
        if max_hops < 1:
            raise ValueError("max_hops deve ser >= 1")
        if store_timeout_seconds <= 0:
            raise ValueError("store_timeout_seconds deve ser > 0")
        self._state_store = state_store
        self._history_recorder = history_recorder
        self._handoff_notifier = handoff_notifier
        self._clock = clock
        self._max_hops = max_hops
        self._store_timeout = store_timeout_seconds
        self._default_timezone = default_timezone
        self._locks = locks if locks is not None else IdentityLockRegistry()

    @property
    def max_hops(self) -> int:
        return self._max_hops

    async def step(
        self,
        flow: FlowGraph | Mapping[str, Any],
        identity: ConversationIdentity,
        inbound_text: str | None,
    ) -> StepOutcome:
        """Executa um turno para a identidade.

        Args:
            flow: Grafo já carregado ou payload bruto do fluxo
            identity: Conversa (conta, dono, fluxo)
            inbound_text: Mensagem recebida (vazio em gatilhos sem texto)

        Returns:
            StepOutcome com segmentos em ordem de envio ou erro com um
            único segmento seguro
        """
        token = None if get_correlation_id() else set_correlation_id()
        try:
            return await self._step(flow, identity, inbound_text or "")
        finally:
            if token is not None:
                reset_correlation_id(token)

    async def _step(
        self,
        flow: FlowGraph | Mapping[str, Any],
        identity: ConversationIdentity,
        text: str,
    ) -> StepOutcome:
        started = time.perf_counter()
        try:
            async with self._locks.hold(identity.key):
                outcome = await self._run_turn(flow, identity, text)
        except FlowError as exc:
            logger.warning(
                "flow_turn_failed",
                extra={
                    "flow_id": identity.flow_id,
                    "error_kind": exc.kind.value,
                    "detail": str(exc),
                },
            )
            outcome = StepOutcome.failure(exc.kind, exc.user_message)
        except (InfrastructureError, TimeoutError) as exc:
            logger.error(
                "flow_state_store_failed",
                extra={
                    "flow_id": identity.flow_id,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            outcome = StepOutcome.failure(ErrorKind.STATE_STORE, INTERNAL_ERROR_MESSAGE)
        except Exception:
            logger.exception("flow_turn_unexpected_error", extra={"flow_id": identity.flow_id})
            outcome = StepOutcome.failure(ErrorKind.INTERNAL, INTERNAL_ERROR_MESSAGE)

        record_latency("flow_runner", "step", (time.perf_counter() - started) * 1000)
        logger.info(
            "flow_turn_completed",
            extra={
                "flow_id": identity.flow_id,
                "inbound_length": len(text),
                **outcome.to_log_dict(),
            },
        )
        return outcome

    async def _run_turn(
        self,
        flow: FlowGraph | Mapping[str, Any],
        identity: ConversationIdentity,
        inbound_text: str,
    ) -> StepOutcome:
        graph = flow if isinstance(flow, FlowGraph) else load_flow(dict(flow))
        now = self._clock.now()

        state = await self._bounded(self._state_store.load(identity))
        if state is None:
            state = ConversationState(
                current_node_id=graph.find_start_node().id,
                updated_at=now,
            )
            logger.debug("flow_state_seeded", extra={"flow_id": identity.flow_id})

        variables = dict(state.variables)
        segments: list[str] = []
        node_id = state.current_node_id
        node_input = inbound_text
        hops = 0

        while True:
            node = graph.find_node(node_id)
            context = EvaluationContext(
                graph=graph,
                inbound_text=node_input,
                variables=variables,
                now=now,
                default_timezone=self._default_timezone,
            )
            result = evaluate(node, context)
            # Blocos alcançados por avanço automático não receberam a mensagem
            node_input = ""

            if result.text:
                segments.append(result.text)

            if result.side_effect is not None:
                await self._finish(
                    identity, node, result.side_effect, variables, inbound_text, now
                )
                return StepOutcome(segments=segments, terminated=True)

            next_node_id = result.next_node_id
            if result.blocking or next_node_id is None or next_node_id == node_id:
                break

            node_id = next_node_id
            hops += 1
            if hops >= self._max_hops:
                graph.find_node(node_id)
                logger.warning(
                    "flow_hop_limit_reached",
                    extra={
                        "flow_id": identity.flow_id,
                        "max_hops": self._max_hops,
                        "resting_node_id": node_id,
                    },
                )
                break

        new_state = ConversationState(
            current_node_id=node_id,
            variables=variables,
            last_message=inbound_text,
            updated_at=now,
        )
        await self._bounded(self._state_store.save(identity, new_state))
        return StepOutcome(segments=segments, current_node_id=node_id)

    async def _finish(
        self,
        identity: ConversationIdentity,
        node: Node,
        effect: SideEffect,
        variables: dict[str, str],
        inbound_text: str,
        now: datetime,
    ) -> None:
        """Aplica efeito terminal: remove estado, grava histórico, notifica."""
        await self._bounded(self._state_store.delete(identity))

        if isinstance(effect, DanglingBranch):
            logger.info(
                "flow_branch_dangling",
                extra={
                    "flow_id": identity.flow_id,
                    "node_id": effect.node_id,
                    "handle": effect.handle,
                },
            )
            return

        if isinstance(effect, Handoff):
            status = _HANDOFF_STATUS[effect.kind]
        else:
            status = HistoryStatus.COMPLETED

        record = ConversationHistory(
            identity=identity,
            final_node_id=node.id,
            variables=dict(variables),
            status=status,
            extra={"last_message": inbound_text, **effect.extra},
            created_at=now,
        )
        await self._append_history(record)

        if isinstance(effect, Handoff):
            await self._notify_handoff(effect, identity, node, variables)

    async def _append_history(self, record: ConversationHistory) -> None:
        try:
            await self._bounded(self._history_recorder.append(record))
        except Exception as exc:
            # Estado já foi removido: o turno segue bem-sucedido
            logger.error(
                "flow_history_write_failed",
                extra={
                    "flow_id": record.identity.flow_id,
                    "status": record.status.value,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
                exc_info=not isinstance(exc, (InfrastructureError, TimeoutError)),
            )
            return
        logger.info(
            "flow_history_appended",
            extra={"flow_id": record.identity.flow_id, "status": record.status.value},
        )

    async def _notify_handoff(
        self,
        handoff: Handoff,
        identity: ConversationIdentity,
        node: Node,
        variables: dict[str, str],
    ) -> None:
        record_handoff(
            f"flow_{handoff.kind.value}",
            metadata={"flow_id": identity.flow_id, "node_id": node.id},
        )
        context = {"node_id": node.id, "variables": dict(variables)}
        try:
            await self._bounded(self._handoff_notifier.notify(handoff, identity, context))
        except Exception as exc:
            logger.warning(
                "flow_handoff_notify_failed",
                extra={
                    "flow_id": identity.flow_id,
                    "handoff_kind": handoff.kind.value,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )

    async def _bounded(self, operation: Awaitable[T]) -> T:
        """Aplica o timeout de store; estouro vira TimeoutError."""
        return await asyncio.wait_for(operation, timeout=self._store_timeout)

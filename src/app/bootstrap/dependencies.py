"""Factories do motor de fluxos — criação de implementações concretas.

Este módulo centraliza a criação de stores, notificadores e do
ConversationRunner com base nas configurações de ambiente.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.bootstrap.clients import create_async_redis_client, create_firestore_client
from app.infra.clock import SystemClock
from app.infra.handoff import LoggingHandoffNotifier, WebhookHandoffNotifier
from app.infra.stores import (
    FirestoreHistoryRecorder,
    MemoryHistoryRecorder,
    MemoryStateStore,
    RedisStateStore,
)
from config.settings import (
    get_base_settings,
    get_firestore_settings,
    get_flow_settings,
)
from flow.runner import ConversationRunner

if TYPE_CHECKING:
    from app.protocols import (
        HandoffNotifierProtocol,
        HistoryRecorderProtocol,
        StateStoreProtocol,
    )
    from config.settings import FlowEngineSettings

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# State Store Factory
# ──────────────────────────────────────────────────────────────────────────────


def create_state_store(settings: FlowEngineSettings | None = None) -> StateStoreProtocol:
    """Cria store de estado baseado na configuração.

    Lê FLOW_STATE_BACKEND:
    - "memory": MemoryStateStore (dev/test)
    - "redis": RedisStateStore (staging/production)
    """
    settings = settings or get_flow_settings()
    backend = settings.state_backend

    if backend == "redis":
        store: StateStoreProtocol = RedisStateStore(
            create_async_redis_client(),
            ttl_seconds=settings.state_ttl_seconds,
        )
        logger.info("state_store_created", extra={"backend": "redis"})
        return store

    if backend == "memory":
        environment = get_base_settings().environment
        if environment not in ("development", "test"):
            logger.warning(
                "memory_store_in_non_dev",
                extra={"backend": "memory", "environment": environment},
            )
        store = MemoryStateStore(ttl_seconds=settings.state_ttl_seconds)
        logger.info("state_store_created", extra={"backend": "memory"})
        return store

    msg = f"FLOW_STATE_BACKEND inválido: {backend}"
    raise ValueError(msg)


# ──────────────────────────────────────────────────────────────────────────────
# History Recorder Factory
# ──────────────────────────────────────────────────────────────────────────────


def create_history_recorder(
    settings: FlowEngineSettings | None = None,
) -> HistoryRecorderProtocol:
    """Cria gravador de histórico (FLOW_HISTORY_BACKEND: memory|firestore)."""
    settings = settings or get_flow_settings()
    backend = settings.history_backend

    if backend == "firestore":
        recorder: HistoryRecorderProtocol = FirestoreHistoryRecorder(
            create_firestore_client(),
            collection_name=get_firestore_settings().collection_history,
        )
        logger.info("history_recorder_created", extra={"backend": "firestore"})
        return recorder

    if backend == "memory":
        recorder = MemoryHistoryRecorder()
        logger.info("history_recorder_created", extra={"backend": "memory"})
        return recorder

    msg = f"FLOW_HISTORY_BACKEND inválido: {backend}"
    raise ValueError(msg)


# ──────────────────────────────────────────────────────────────────────────────
# Handoff Notifier Factory
# ──────────────────────────────────────────────────────────────────────────────


def create_handoff_notifier(
    settings: FlowEngineSettings | None = None,
) -> HandoffNotifierProtocol:
    """Cria notificador de transferência (FLOW_HANDOFF_BACKEND: log|webhook)."""
    settings = settings or get_flow_settings()
    backend = settings.handoff_backend

    if backend == "webhook":
        notifier: HandoffNotifierProtocol = WebhookHandoffNotifier(
            settings.handoff_webhook_url,
            timeout_seconds=settings.store_timeout_seconds,
        )
        logger.info("handoff_notifier_created", extra={"backend": "webhook"})
        return notifier

    if backend == "log":
        notifier = LoggingHandoffNotifier()
        logger.info("handoff_notifier_created", extra={"backend": "log"})
        return notifier

    msg = f"FLOW_HANDOFF_BACKEND inválido: {backend}"
    raise ValueError(msg)


# ──────────────────────────────────────────────────────────────────────────────
# Runner Factory
# ──────────────────────────────────────────────────────────────────────────────


def create_runner(settings: FlowEngineSettings | None = None) -> ConversationRunner:
    """Monta o ConversationRunner com os colaboradores configurados."""
    settings = settings or get_flow_settings()
    runner = ConversationRunner(
        state_store=create_state_store(settings),
        history_recorder=create_history_recorder(settings),
        handoff_notifier=create_handoff_notifier(settings),
        clock=SystemClock(),
        max_hops=settings.max_hops,
        store_timeout_seconds=settings.store_timeout_seconds,
        default_timezone=settings.timezone,
    )
    logger.info(
        "flow_runner_created",
        extra={
            "max_hops": settings.max_hops,
            "state_backend": settings.state_backend,
            "history_backend": settings.history_backend,
            "handoff_backend": settings.handoff_backend,
        },
    )
    return runner

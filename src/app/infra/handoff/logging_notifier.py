"""Notificador de transferência que apenas registra em log."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.protocols.handoff_notifier import HandoffNotifierProtocol

if TYPE_CHECKING:
    from flow.evaluators import Handoff
    from flow.types import ConversationIdentity

logger = logging.getLogger(__name__)


class LoggingHandoffNotifier(HandoffNotifierProtocol):
    """Registra a transferência em log estruturado (dev/test ou sem integração)."""

    async def notify(
        self,
        handoff: Handoff,
        identity: ConversationIdentity,
        context: dict[str, Any],
    ) -> None:
        logger.info(
            "flow_handoff_requested",
            extra={
                "handoff_kind": handoff.kind.value,
                "target_id": handoff.target_id,
                "account_id": identity.account_id,
                "flow_id": identity.flow_id,
                "node_id": context.get("node_id"),
            },
        )

"""Firestore History Store — histórico de término de fluxos.

Append-only: um documento por término (encerramento ou transferência).
Firestore Python SDK não tem async nativo, então as escritas rodam em
asyncio.to_thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from app.protocols.history_recorder import HistoryRecorderProtocol
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

    from flow.types import ConversationHistory

logger = logging.getLogger(__name__)

# Collection de histórico de fluxo
HISTORY_COLLECTION = "flow_user_history"


class FirestoreHistoryRecorder(HistoryRecorderProtocol):
    """Histórico de fluxo usando Firestore.

    Estrutura no Firestore:
        flow_user_history/{account_id}_{owner_id}_{flow_id}_{timestamp}

    Args:
        firestore_client: Cliente Firestore
        collection_name: Nome da collection (default: flow_user_history)
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = HISTORY_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    async def append(self, record: ConversationHistory) -> None:
        await asyncio.to_thread(self._append_sync, record)

    def _append_sync(self, record: ConversationHistory) -> None:
        """Implementação síncrona de append."""
        identity = record.identity
        doc_id = (
            f"{identity.account_id}_{identity.owner_id}_{identity.flow_id}_"
            f"{record.created_at.timestamp()}"
        )
        doc_data = {
            **record.to_dict(),
            "created_at": record.created_at,  # Para TTL/ordenação nativa
        }

        try:
            self._db.collection(self._collection).document(doc_id).set(doc_data)
        except Exception as e:
            logger.error(
                "flow_history_append_error",
                extra={"error": str(e), "doc_id": doc_id},
            )
            raise FirestoreUnavailableError(f"Erro ao gravar histórico: {e}") from e

        logger.debug(
            "flow_history_appended",
            extra={"doc_id": doc_id, "status": record.status.value},
        )

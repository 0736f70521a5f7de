"""Redis State Store — estado de fluxo por conversa.

Cada save é um único SET (com EX quando há TTL), então o registro é
sempre substituído por inteiro, nunca atualizado parcialmente.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from redis.exceptions import RedisError

from app.protocols.state_store import StateStoreProtocol
from flow.types import ConversationState
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

    from flow.types import ConversationIdentity

logger = logging.getLogger(__name__)

# Prefixo para namespace de estados de fluxo
STATE_PREFIX = "flow_state:"


class RedisStateStore(StateStoreProtocol):
    """Store de estado usando Redis (Upstash compatível).

    Args:
        redis_client: Cliente Redis assíncrono
        ttl_seconds: Expiração do estado (0 = sem expiração)
    """

    def __init__(self, redis_client: AsyncRedis, ttl_seconds: int = 0) -> None:
        self._redis = redis_client
        self._ttl_seconds = ttl_seconds

    def _key(self, identity: ConversationIdentity) -> str:
        """Gera chave Redis com namespace."""
        return f"{STATE_PREFIX}{identity.key}"

    async def load(self, identity: ConversationIdentity) -> ConversationState | None:
        """Carrega estado; registro corrompido é tratado como ausente."""
        key = self._key(identity)
        try:
            data = await self._redis.get(key)
        except RedisError as e:
            raise RedisConnectionError(f"Erro ao carregar estado: {e}") from e

        if data is None:
            return None
        try:
            return ConversationState.from_dict(json.loads(data))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning(
                "flow_state_load_error",
                extra={"flow_id": identity.flow_id, "error": str(e)},
            )
            return None

    async def save(self, identity: ConversationIdentity, state: ConversationState) -> None:
        """Substitui o estado inteiro (SET atômico)."""
        key = self._key(identity)
        data = json.dumps(state.to_dict())
        try:
            if self._ttl_seconds > 0:
                await self._redis.setex(key, self._ttl_seconds, data)
            else:
                await self._redis.set(key, data)
        except RedisError as e:
            raise RedisConnectionError(f"Erro ao salvar estado: {e}") from e
        logger.debug(
            "flow_state_saved",
            extra={"flow_id": identity.flow_id, "ttl": self._ttl_seconds},
        )

    async def delete(self, identity: ConversationIdentity) -> bool:
        """Remove estado do Redis."""
        try:
            result = await self._redis.delete(self._key(identity))
        except RedisError as e:
            raise RedisConnectionError(f"Erro ao remover estado: {e}") from e
        return bool(result)

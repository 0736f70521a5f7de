"""Testes do RedisStateStore com mock."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisLibConnectionError

from app.infra.stores.redis_state_store import STATE_PREFIX, RedisStateStore
from flow.types import ConversationIdentity, ConversationState
from utils.errors import RedisConnectionError, StateStoreError

IDENTITY = ConversationIdentity("acc-1", "cli-1", "menu")
KEY = f"{STATE_PREFIX}acc-1:cli-1:menu"


def _state() -> ConversationState:
    return ConversationState(
        current_node_id="menu",
        variables={"nome": "Ana"},
        last_message="oi",
        updated_at=datetime(2026, 1, 14, 10, 0, tzinfo=UTC),
    )


class TestRedisStateStore:
    """Testes do RedisStateStore."""

    @pytest.mark.asyncio
    async def test_save_without_ttl_calls_set(self) -> None:
        """Sem TTL deve chamar SET com o estado inteiro."""
        mock_redis = AsyncMock()
        store = RedisStateStore(mock_redis)

        await store.save(IDENTITY, _state())

        mock_redis.set.assert_called_once()
        call_args = mock_redis.set.call_args
        assert call_args[0][0] == KEY
        data = json.loads(call_args[0][1])
        assert data["current_node_id"] == "menu"
        assert data["variables"] == {"nome": "Ana"}
        mock_redis.setex.assert_not_called()

    @pytest.mark.asyncio
    async def test_save_with_ttl_calls_setex(self) -> None:
        """Com TTL deve chamar setex."""
        mock_redis = AsyncMock()
        store = RedisStateStore(mock_redis, ttl_seconds=86400)

        await store.save(IDENTITY, _state())

        call_args = mock_redis.setex.call_args
        assert call_args[0][0] == KEY
        assert call_args[0][1] == 86400

    @pytest.mark.asyncio
    async def test_load_returns_state(self) -> None:
        """Deve carregar e deserializar o estado."""
        mock_redis = AsyncMock()
        mock_redis.get.return_value = json.dumps(_state().to_dict()).encode()
        store = RedisStateStore(mock_redis)

        loaded = await store.load(IDENTITY)

        assert loaded == _state()
        mock_redis.get.assert_called_once_with(KEY)

    @pytest.mark.asyncio
    async def test_load_returns_none_for_missing(self) -> None:
        mock_redis = AsyncMock()
        mock_redis.get.return_value = None

        assert await RedisStateStore(mock_redis).load(IDENTITY) is None

    @pytest.mark.asyncio
    async def test_corrupt_record_is_treated_as_missing(self) -> None:
        """JSON inválido é logado e tratado como estado ausente."""
        mock_redis = AsyncMock()
        mock_redis.get.return_value = b"{quebrado"

        assert await RedisStateStore(mock_redis).load(IDENTITY) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"current_node_id": "s", "variables": ["x"]},
            ["s"],
            "s",
            {"variables": {}},
        ],
    )
    async def test_record_with_wrong_shape_is_treated_as_missing(self, payload) -> None:
        """JSON válido com formato inesperado também é tratado como ausente."""
        mock_redis = AsyncMock()
        mock_redis.get.return_value = json.dumps(payload).encode()

        assert await RedisStateStore(mock_redis).load(IDENTITY) is None

    @pytest.mark.asyncio
    async def test_delete_calls_redis_delete(self) -> None:
        mock_redis = AsyncMock()
        mock_redis.delete.return_value = 1

        assert await RedisStateStore(mock_redis).delete(IDENTITY) is True
        mock_redis.delete.assert_called_once_with(KEY)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation", ["load", "save", "delete"])
    async def test_redis_errors_are_wrapped(self, operation: str) -> None:
        """Erros do cliente viram RedisConnectionError (StateStoreError)."""
        mock_redis = AsyncMock()
        failure = RedisLibConnectionError("down")
        mock_redis.get.side_effect = failure
        mock_redis.set.side_effect = failure
        mock_redis.delete.side_effect = failure
        store = RedisStateStore(mock_redis)

        with pytest.raises(RedisConnectionError) as exc_info:
            if operation == "save":
                await store.save(IDENTITY, _state())
            else:
                await getattr(store, operation)(IDENTITY)
        assert isinstance(exc_info.value, StateStoreError)

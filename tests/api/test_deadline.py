"""RPC Deadlines — expiry cancels the in-flight call and returns DEADLINE_EXCEEDED.

Design Decisions:
    - Slow store simulated by patching the service method with an asyncio.sleep
"""

import asyncio

import pytest

from cli_chat.api.routes.rpc_deadline import run_with_deadline
from cli_chat.core.errors import DeadlineExceededError
from cli_chat.services.user_service import UserService
from tests.api.rpc_client import rpc


async def test_run_with_deadline_returns_result():
    async def quick():
        return 42

    assert await run_with_deadline(quick(), 1.0, "Get") == 42


async def test_run_with_deadline_cancels_slow_call():
    cancelled = asyncio.Event()

    async def slow():
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    with pytest.raises(DeadlineExceededError) as exc_info:
        await run_with_deadline(slow(), 0.01, "Get")

    assert cancelled.is_set()
    assert exc_info.value.context.rpc_method == "Get"


async def test_client_timeout_header_yields_deadline_exceeded(client, monkeypatch):
    async def slow_get(self, user_id):
        await asyncio.sleep(10)

    monkeypatch.setattr(UserService, "get", slow_get)

    res = await rpc(
        client, "user_v1.UserV1/Get", {"id": 1}, headers={"Rpc-Timeout-Ms": "20"},
    )

    assert res.status_code == 504
    assert res.json()["error"]["code"] == "DEADLINE_EXCEEDED"


async def test_invalid_timeout_header_is_invalid_argument(client):
    res = await rpc(
        client, "user_v1.UserV1/Get", {"id": 1}, headers={"Rpc-Timeout-Ms": "0"},
    )
    assert res.status_code == 400

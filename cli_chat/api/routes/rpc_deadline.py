"""RPC Deadline — per-call timeout and cancellation for unary handlers.

Invariants:
    - Every RPC runs under a deadline: min(client Rpc-Timeout-Ms, rpc_timeout_seconds)
    - On expiry the in-flight store call is cancelled and DeadlineExceededError raised
    - Client disconnect cancels the handler task; CancelledError is never swallowed
"""

import asyncio
import logging
from typing import Awaitable, TypeVar

from fastapi import Header

from cli_chat.config import get_settings
from cli_chat.core.errors import DeadlineExceededError, ErrorContext

logger = logging.getLogger(__name__)

T = TypeVar("T")

TIMEOUT_HEADER = "Rpc-Timeout-Ms"


def rpc_deadline(
    timeout_ms: int | None = Header(None, alias=TIMEOUT_HEADER, gt=0),
) -> float:
    """FastAPI dependency: effective deadline in seconds for this call."""
    limit = get_settings().rpc_timeout_seconds
    if timeout_ms is None:
        return limit
    return min(timeout_ms / 1000, limit)


async def run_with_deadline(call: Awaitable[T], timeout: float, rpc_method: str) -> T:
    try:
        async with asyncio.timeout(timeout):
            return await call
    except TimeoutError as e:
        logger.warning(
            f"{rpc_method} exceeded its {timeout:g}s deadline",
            extra={"rpc_method": rpc_method, "error_code": "DEADLINE_EXCEEDED"},
        )
        raise DeadlineExceededError(timeout, ErrorContext(rpc_method=rpc_method)) from e

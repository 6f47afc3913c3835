"""
Model invocation with bounded exponential backoff on rate limiting.

Only HTTP 429 is retried. Every other failure (auth, malformed request,
connection error) propagates on the spot, without sleeping.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from .base import VisionProvider, VisionRequest

logger = logging.getLogger(__name__)

RATE_LIMIT_STATUS = 429
MAX_ATTEMPTS = 3
BASE_DELAY_SECONDS = 1.0


def get_status_code(error: BaseException) -> Optional[int]:
    """HTTP-style status carried by a provider exception, if any."""
    for attr in ("status_code", "status"):
        value = getattr(error, attr, None)
        if isinstance(value, int):
            return value

    response = getattr(error, "response", None)
    value = getattr(response, "status_code", None)
    if isinstance(value, int):
        return value
    return None


def is_rate_limited(error: BaseException) -> bool:
    return get_status_code(error) == RATE_LIMIT_STATUS


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    delay = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        f"🔄 Vision call rate limited (status {get_status_code(error)}) on attempt "
        f"{retry_state.attempt_number}; retrying in {delay:.1f}s"
    )


class ModelInvoker:
    """
    Sends a VisionRequest through a provider, retrying on HTTP 429.

    Attempt k (k > 1) is preceded by a sleep of ``base_delay * 2 ** (k - 2)``
    seconds. After ``max_attempts`` failures the last error propagates.
    """

    def __init__(
        self,
        provider: VisionProvider,
        *,
        max_attempts: int = MAX_ATTEMPTS,
        base_delay: float = BASE_DELAY_SECONDS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.provider = provider
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self._sleep = sleep

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.base_delay, exp_base=2, min=0),
            retry=retry_if_exception(is_rate_limited),
            before_sleep=_log_retry,
            sleep=self._sleep,
            reraise=True,
        )

    async def invoke(self, request: VisionRequest) -> Dict[str, Any]:
        async for attempt in self._retrying():
            with attempt:
                return await self.provider.create(request)

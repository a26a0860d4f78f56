"""
Retrying HTTP dispatcher for the Gemini generateContent endpoint.

One call to `submit` walks a small state machine:

    ATTEMPTING -> SUCCESS
    ATTEMPTING -> BACKOFF -> ATTEMPTING   (5xx with attempts left)
    ATTEMPTING -> FAILED                  (any other non-2xx, or retries exhausted)

Attempts are strictly sequential. No state survives between calls, so
concurrent `submit` calls do not interact.

There is no cancellation hook: once started the loop runs until success or
exhaustion unless the awaiting task is itself cancelled.
"""

import asyncio
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

import httpx

from .config import AdvisorConfig
from .exceptions import ConfigurationError, GeminiAPIError, GeminiTransportError


class DispatchState(str, Enum):
    ATTEMPTING = "attempting"
    BACKOFF = "backoff"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class RetryState:
    """Transient bookkeeping for a single `submit` call."""

    max_attempts: int
    attempt: int = 0
    state: DispatchState = DispatchState.ATTEMPTING
    last_status: Optional[int] = None
    last_body: Optional[str] = None
    delays_ms: list[float] = field(default_factory=list)

    @property
    def attempts_remaining(self) -> bool:
        return self.attempt < self.max_attempts - 1


def backoff_delay_ms(
    attempt: int,
    base_ms: int = AdvisorConfig.BACKOFF_BASE_MS,
    jitter_ms: int = AdvisorConfig.BACKOFF_JITTER_MS,
    rng: random.Random | None = None,
) -> float:
    """
    Delay to wait after failed attempt `attempt` (0-based).

    Lies in [2**attempt * base_ms, 2**attempt * base_ms + jitter_ms).
    """
    rng = rng or random
    return (2 ** attempt) * base_ms + rng.random() * jitter_ms


class GeminiDispatcher:
    """
    Submit a payload to Gemini with bounded retries on server errors.

    Args:
        api_url: Model endpoint; the key is sent as the `key` query parameter
        client: Optional shared httpx.AsyncClient (a fresh one is used per
            call otherwise)
        sleep: Coroutine used for backoff, takes seconds
        rng: Random source for jitter
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        api_url: str = AdvisorConfig.API_URL,
        client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        rng: random.Random | None = None,
        timeout: float = AdvisorConfig.REQUEST_TIMEOUT_SECONDS,
    ):
        self.api_url = api_url
        self.client = client
        self.sleep = sleep
        self.rng = rng or random.Random()
        self.timeout = timeout

    async def submit(
        self,
        credential: str,
        payload: dict,
        max_attempts: int = AdvisorConfig.RETRY_ATTEMPTS,
    ) -> dict:
        """
        POST `payload` and return the decoded JSON body.

        Raises:
            ConfigurationError: If the credential is empty
            GeminiAPIError: On a terminal non-success response
            GeminiTransportError: If a request fails without a response
        """
        if not credential or not credential.strip():
            raise ConfigurationError(
                "Gemini API key not configured. Run with --set-key or set GOOGLE_API_KEY."
            )
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

        if self.client is not None:
            return await self._run(self.client, credential, payload, max_attempts)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await self._run(client, credential, payload, max_attempts)

    async def _run(
        self,
        client: httpx.AsyncClient,
        credential: str,
        payload: dict,
        max_attempts: int,
    ) -> dict:
        retry = RetryState(max_attempts=max_attempts)
        result: dict = {}

        while retry.state is DispatchState.ATTEMPTING:
            try:
                response = await client.post(
                    self.api_url,
                    params={"key": credential},
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
            except httpx.HTTPError as exc:
                retry.state = DispatchState.FAILED
                raise GeminiTransportError(f"Gemini request failed: {exc}") from exc

            retry.last_status = response.status_code

            if response.is_success:
                try:
                    result = response.json()
                except ValueError:
                    # 2xx with a non-JSON body, e.g. an HTML page from a proxy
                    retry.last_body = response.text
                    retry.state = DispatchState.FAILED
                else:
                    retry.state = DispatchState.SUCCESS
            elif response.status_code >= 500 and retry.attempts_remaining:
                retry.state = DispatchState.BACKOFF
                delay_ms = backoff_delay_ms(retry.attempt, rng=self.rng)
                retry.delays_ms.append(delay_ms)
                await self.sleep(delay_ms / 1000)
                retry.attempt += 1
                retry.state = DispatchState.ATTEMPTING
            else:
                retry.last_body = response.text
                retry.state = DispatchState.FAILED

        if retry.state is DispatchState.FAILED:
            raise GeminiAPIError(
                retry.last_status,
                retry.last_body,
                attempts=retry.attempt + 1,
                retry_state=retry,
            )

        return result

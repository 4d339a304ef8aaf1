"""
Retry policy for language-model calls
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, TypeVar

from ..config.settings import RETRY_CONFIG
from ..errors import AIProviderError, LLMNotConfiguredError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryPolicy:
    """
    Bounded retries with linear backoff: the wait after attempt N is
    ``base_delay_seconds * N``. ``sleep`` is injectable so tests can skip
    real delays.
    """

    max_attempts: int = RETRY_CONFIG["max_attempts"]
    base_delay_seconds: float = RETRY_CONFIG["base_delay_seconds"]
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep, repr=False)

    def delay_for(self, attempt: int) -> float:
        return self.base_delay_seconds * attempt

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        last_error = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await operation()
            except LLMNotConfiguredError:
                raise
            except Exception as exc:
                last_error = exc
                logger.warning(
                    "LLM call failed (attempt %d/%d): %s", attempt, self.max_attempts, exc
                )
                if attempt < self.max_attempts:
                    await self.sleep(self.delay_for(attempt))
        raise AIProviderError(self.max_attempts, last_error)

"""Retry Executor — bounded exponential-backoff retry around async operations.

Invariants:
    - At most max_retries + 1 attempts (defaults: 1 initial + 3 retries)
    - Delay before retry k (k = 1..max_retries) is backoff_base_seconds ** k → 2s, 4s, 8s
    - Attempts run strictly in sequence; each completes before the next is scheduled
    - Every Exception counts as a failure — no failure-kind discrimination
    - After the last failure, TransientFailureError is raised (chained from the cause)

Design Decisions:
    - No jitter: deterministic schedule is part of the contract
    - sleep is injectable: tests record delays instead of waiting
    - Fault decisions are plain callables; the default never fails and the
      random variant takes an explicit, seedable random.Random
"""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from typing import TypeVar

from person_registry.core.errors import TransientFailureError

logger = logging.getLogger(__name__)

T = TypeVar("T")

FaultDecision = Callable[[], bool]
Sleep = Callable[[float], Awaitable[None]]


def delay_for_attempt(attempt: int, base_seconds: float = 2.0) -> float:
    """Backoff before retry number `attempt` (1-based)."""
    return base_seconds ** attempt


class RetryExecutor:
    """Runs an operation until it succeeds or the retry budget is spent."""

    def __init__(
        self,
        max_retries: int = 3,
        backoff_base_seconds: float = 2.0,
        sleep: Sleep = asyncio.sleep,
    ):
        self.max_retries = max_retries
        self.backoff_base_seconds = backoff_base_seconds
        self._sleep = sleep

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        *,
        operation_name: str = "operation",
    ) -> T:
        """Await operation(); retry on any exception with fixed exponential delays."""
        for attempt in range(self.max_attempts):
            try:
                result = await operation()
            except Exception as e:
                if attempt >= self.max_retries:
                    logger.error(
                        f"{operation_name} failed after {self.max_attempts} attempts: {e}",
                        extra={"operation": operation_name, "attempt": attempt + 1},
                    )
                    raise TransientFailureError(
                        operation_name, self.max_attempts,
                    ) from e
                delay = delay_for_attempt(attempt + 1, self.backoff_base_seconds)
                logger.warning(
                    f"{operation_name} attempt {attempt + 1} failed: {e}. "
                    f"Retrying in {delay}s",
                    extra={
                        "operation": operation_name,
                        "attempt": attempt + 1,
                        "delay_seconds": delay,
                    },
                )
                await self._sleep(delay)
                continue
            if attempt:
                logger.info(
                    f"{operation_name} succeeded on attempt {attempt + 1}",
                    extra={"operation": operation_name, "attempt": attempt + 1},
                )
            return result
        # unreachable: the loop either returns or raises
        raise TransientFailureError(operation_name, self.max_attempts)


# ─── Fault decisions ─────────────────────────────────────────────

def never_fail() -> bool:
    return False


def always_fail() -> bool:
    return True


def random_faults(probability: float, rng: random.Random) -> FaultDecision:
    """Fail with the given probability, drawing from the supplied generator."""
    if probability <= 0:
        return never_fail

    def decide() -> bool:
        return rng.random() < probability

    return decide

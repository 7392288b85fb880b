from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, TypeVar

from ..core.constants import DEFAULT_RETRY_ATTEMPTS, DEFAULT_RETRY_INITIAL_DELAY, DEFAULT_RETRY_MAX_DELAY
from ..core.exceptions import StorageError, TransientStorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    attempts: int = DEFAULT_RETRY_ATTEMPTS
    initial_delay: float = DEFAULT_RETRY_INITIAL_DELAY
    max_delay: float = DEFAULT_RETRY_MAX_DELAY
    factor: float = 2.0


def call_with_retry(
    fn: Callable[[], T],
    policy: RetryPolicy,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call fn, retrying TransientStorageError with exponential backoff.

    Any other exception propagates on the first occurrence. When every attempt fails
    transiently the last failure is raised as a plain StorageError.
    """

    attempts = max(int(policy.attempts), 1)
    delay = policy.initial_delay
    attempt = 1
    while True:
        try:
            return fn()
        except TransientStorageError as e:
            if attempt >= attempts:
                logger.error("Storage still failing after %d attempts: %s", attempts, e)
                raise StorageError(f"Storage unavailable after {attempts} attempts: {e}") from e
            logger.warning("Transient storage error (attempt %d/%d): %s", attempt, attempts, e)
            sleep(delay)
            delay = min(delay * policy.factor, policy.max_delay)
            attempt += 1

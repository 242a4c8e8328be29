"""Retry helpers for HugeGraph API calls with exponential back-off."""

import logging
from collections.abc import Callable
from typing import TypeVar

from tenacity import (
    RetryError,
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from graphvault.constants import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_MAX_WAIT_SECONDS,
    DEFAULT_RETRY_MIN_WAIT_SECONDS,
)
from graphvault.exceptions import RetryExhaustedError, TransientRemoteError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def call_with_retry(
    func: Callable[[], T],
    description: str,
    max_attempts: int = DEFAULT_MAX_RETRIES,
    min_wait: float = DEFAULT_RETRY_MIN_WAIT_SECONDS,
    max_wait: float = DEFAULT_RETRY_MAX_WAIT_SECONDS,
    multiplier: float = 2,
) -> T:
    """Run ``func`` under a bounded retry policy.

    Transient remote failures are retried with exponential back-off up to
    ``max_attempts`` attempts in total. Any other exception propagates
    immediately.

    Args:
        func: Zero-argument callable performing one remote call
        description: Human-readable operation label, e.g. "restoring vertices"
        max_attempts: Maximum number of attempts (>= 1)
        min_wait: Minimum wait between attempts in seconds
        max_wait: Maximum wait between attempts in seconds
        multiplier: Exponential multiplier for back-off

    Returns:
        Whatever ``func`` returns on its first successful attempt

    Raises:
        RetryExhaustedError: If every attempt failed with a transient error

    Example:
        >>> call_with_retry(lambda: client.graph().add_vertices(batch), "restoring vertices")
    """
    retrying = Retrying(
        retry=retry_if_exception_type(TransientRemoteError),
        wait=wait_exponential(multiplier=multiplier, min=min_wait, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )
    try:
        return retrying(func)
    except RetryError as e:
        last_error = e.last_attempt.exception()
        raise RetryExhaustedError(description, e.last_attempt.attempt_number, last_error) from (
            last_error
        )

# Area: Scoring
"""
quiz_judge._retry — Exponential backoff executor
=================================================

Runs an operation up to ``max_attempts`` times. After failed attempt
``i`` (attempts are numbered from 0) it waits ``base_delay * 2**i``
seconds. The last failure is re-raised to the caller unchanged.

A ``CancellationToken`` stops the loop between attempts; once the token
is set no further attempt starts and no result is handed back.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional, TypeVar

from .errors import OperationCancelled

logger = logging.getLogger("quiz_judge.retry")

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_BASE_DELAY = 1.0


class CancellationToken:
    """Thread-safe cancel flag whose ``wait`` is interrupted by ``cancel``."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, seconds: float) -> bool:
        """Sleep up to ``seconds``. Returns True if cancelled meanwhile."""
        return self._event.wait(seconds)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelled("Operation cancelled")


def backoff_delay(attempt: int, base_delay: float = DEFAULT_BASE_DELAY) -> float:
    """Delay after failed attempt number ``attempt`` (0-based)."""
    return base_delay * (2 ** attempt)


def retry_with_backoff(
    operation: Callable[[], T],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    *,
    base_delay: float = DEFAULT_BASE_DELAY,
    sleep: Optional[Callable[[float], None]] = None,
    cancel_token: Optional[CancellationToken] = None,
    is_retryable: Optional[Callable[[Exception], bool]] = None,
    on_retry: Optional[Callable[[int, Exception, float], None]] = None,
) -> T:
    """
    Invoke ``operation`` with exponential backoff between failures.

    Args:
        operation: Zero-argument callable to attempt
        max_attempts: Total number of attempts (must be >= 1)
        base_delay: Delay unit in seconds
        sleep: Injectable sleep function (defaults to time.sleep, or the
            token's interruptible wait when a token is given)
        cancel_token: Checked before and after every attempt
        is_retryable: Returns False for permanent failures, which are
            re-raised immediately
        on_retry: Called as ``on_retry(attempt, exc, delay)`` before waiting

    Returns:
        The first successful result

    Raises:
        OperationCancelled: If the token is set
        Exception: The last failure once attempts are exhausted, or the
            first permanent failure
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    for attempt in range(max_attempts):
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        try:
            result = operation()
        except OperationCancelled:
            raise
        except Exception as exc:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()

            last_attempt = attempt == max_attempts - 1
            if last_attempt:
                logger.error(f"Attempt {attempt + 1}/{max_attempts} failed, giving up: {exc}")
                raise
            if is_retryable is not None and not is_retryable(exc):
                logger.error(f"Attempt {attempt + 1}/{max_attempts} failed permanently: {exc}")
                raise

            delay = backoff_delay(attempt, base_delay)
            logger.warning(
                f"Attempt {attempt + 1}/{max_attempts} failed: {exc}; "
                f"retrying in {delay:g}s"
            )
            if on_retry is not None:
                on_retry(attempt, exc, delay)
            _wait(delay, sleep, cancel_token)
            continue

        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        return result

    # Unreachable: the loop either returns or raises.
    raise RuntimeError("retry loop exited without a result")


def _wait(
    delay: float,
    sleep: Optional[Callable[[float], None]],
    cancel_token: Optional[CancellationToken],
) -> None:
    if sleep is not None:
        sleep(delay)
    elif cancel_token is not None:
        cancel_token.wait(delay)
    else:
        time.sleep(delay)
    if cancel_token is not None:
        cancel_token.raise_if_cancelled()

"""
Descope Auth SDK Polling

Waits for an out-of-band verification (such as the user clicking an
enchanted link on another device) by repeatedly checking for a session.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar, Union

from .errors import ENCHANTED_LINK_EXPIRED, DescopeError, is_pending_error

logger = logging.getLogger("descope_auth.polling")

T = TypeVar("T")

DEFAULT_POLL_TIMEOUT = 120.0
DEFAULT_POLL_INTERVAL = 1.0


@dataclass(frozen=True)
class _Completed(Generic[T]):
    result: T


@dataclass(frozen=True)
class _Pending:
    error: DescopeError


@dataclass(frozen=True)
class _Failed:
    error: DescopeError


_PollOutcome = Union[_Completed, _Pending, _Failed]


async def _attempt(check: Callable[[], Awaitable[T]]) -> _PollOutcome:
    try:
        return _Completed(await check())
    except DescopeError as e:
        if is_pending_error(e):
            return _Pending(e)
        return _Failed(e)


async def poll_until_complete(
    check: Callable[[], Awaitable[T]],
    timeout: Optional[float] = None,
    interval: float = DEFAULT_POLL_INTERVAL,
    clock: Callable[[], float] = time.monotonic,
) -> T:
    """
    Call check until it returns a result.

    Pending and network errors are waited through until the deadline; any
    other DescopeError is raised at once. Cancelling the calling task stops
    polling immediately and raises asyncio.CancelledError.

    Args:
        check: Performs a single status check
        timeout: Seconds to keep polling (default: 120)
        interval: Seconds to wait between checks
        clock: Monotonic clock, replaceable in tests

    Raises:
        DescopeError: ENCHANTED_LINK_EXPIRED when the deadline passes, or
            the first error that is neither pending nor a network error
    """
    if timeout is None:
        timeout = DEFAULT_POLL_TIMEOUT
    deadline = clock() + timeout
    attempts = 0

    while True:
        attempts += 1
        outcome = await _attempt(check)

        if isinstance(outcome, _Completed):
            logger.debug("Session check %d completed", attempts)
            return outcome.result
        if isinstance(outcome, _Failed):
            logger.debug("Session check %d failed with %s", attempts, outcome.error.code)
            raise outcome.error

        remaining = deadline - clock()
        if remaining <= 0:
            logger.debug("Polling expired after %d checks", attempts)
            raise ENCHANTED_LINK_EXPIRED.with_message(
                f"No session after {timeout:g} seconds"
            )

        logger.debug("Session check %d pending (%s)", attempts, outcome.error.code)
        await asyncio.sleep(min(interval, remaining))

"""
Tests for Descope Auth SDK verification polling
"""

import asyncio
import time

import pytest

from descope_auth.errors import (
    BAD_REQUEST,
    ENCHANTED_LINK_EXPIRED,
    ENCHANTED_LINK_PENDING,
    NETWORK_ERROR,
    DescopeError,
)
from descope_auth.polling import poll_until_complete


class StubCheck:
    """Returns or raises the scripted outcomes in order, repeating the last one."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    async def __call__(self):
        outcome = self.outcomes[min(self.calls, len(self.outcomes) - 1)]
        self.calls += 1
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


# =============================================================================
# Completion Tests
# =============================================================================

class TestPollCompletion:

    @pytest.mark.asyncio
    async def test_returns_after_pending(self):
        """Test pending checks are retried until one succeeds."""
        check = StubCheck(
            ENCHANTED_LINK_PENDING,
            ENCHANTED_LINK_PENDING,
            ENCHANTED_LINK_PENDING,
            "session",
        )

        result = await poll_until_complete(check, timeout=5, interval=0.01)

        assert result == "session"
        assert check.calls == 4

    @pytest.mark.asyncio
    async def test_immediate_success(self):
        check = StubCheck("session")

        assert await poll_until_complete(check, timeout=5, interval=0.01) == "session"
        assert check.calls == 1

    @pytest.mark.asyncio
    async def test_network_errors_are_retried(self):
        check = StubCheck(NETWORK_ERROR.with_cause(OSError("down")), "session")

        assert await poll_until_complete(check, timeout=5, interval=0.01) == "session"
        assert check.calls == 2


# =============================================================================
# Failure Tests
# =============================================================================

class TestPollFailure:

    @pytest.mark.asyncio
    async def test_other_error_stops_polling(self):
        error = BAD_REQUEST.with_message("Invalid pending reference")
        check = StubCheck(error, "session")

        with pytest.raises(DescopeError) as exc_info:
            await poll_until_complete(check, timeout=5, interval=0.01)

        assert exc_info.value is error
        assert check.calls == 1

    @pytest.mark.asyncio
    async def test_timeout_on_network_errors(self):
        """Test polling gives up with an expiry error, not the network error."""
        check = StubCheck(NETWORK_ERROR)
        started = time.monotonic()

        with pytest.raises(DescopeError) as exc_info:
            await poll_until_complete(check, timeout=0.1, interval=0.02)

        assert exc_info.value == ENCHANTED_LINK_EXPIRED
        assert exc_info.value != NETWORK_ERROR
        assert time.monotonic() - started >= 0.1
        assert check.calls >= 2

    @pytest.mark.asyncio
    async def test_zero_timeout_checks_once(self):
        check = StubCheck(ENCHANTED_LINK_PENDING)

        with pytest.raises(DescopeError) as exc_info:
            await poll_until_complete(check, timeout=0, interval=0.01)

        assert exc_info.value == ENCHANTED_LINK_EXPIRED
        assert check.calls == 1

    @pytest.mark.asyncio
    async def test_expiry_uses_clock(self):
        """Test the deadline is measured with the given clock."""
        now = [100.0]

        def clock():
            return now[0]

        async def check():
            now[0] += 30.0
            raise ENCHANTED_LINK_PENDING

        with pytest.raises(DescopeError) as exc_info:
            await poll_until_complete(check, timeout=60, interval=0, clock=clock)

        assert exc_info.value == ENCHANTED_LINK_EXPIRED
        assert exc_info.value.message == "No session after 60 seconds"
        assert now[0] == 160.0

    @pytest.mark.asyncio
    async def test_non_descope_errors_propagate(self):
        check = StubCheck(RuntimeError("bug"))

        with pytest.raises(RuntimeError):
            await poll_until_complete(check, timeout=5, interval=0.01)

        assert check.calls == 1


# =============================================================================
# Cancellation Tests
# =============================================================================

class TestPollCancellation:

    @pytest.mark.asyncio
    async def test_cancel_stops_polling(self):
        check = StubCheck(ENCHANTED_LINK_PENDING)

        task = asyncio.ensure_future(poll_until_complete(check, timeout=30, interval=0.01))
        await asyncio.sleep(0.05)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        calls = check.calls
        await asyncio.sleep(0.05)
        assert check.calls == calls
        assert calls >= 1

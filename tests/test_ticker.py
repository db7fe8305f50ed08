"""
Tests for the repeating timer.
"""
import asyncio

import pytest

from wrapsnake.ticker import RepeatingTimer


class CallLog:
    """Async callback that records which task ran it."""

    def __init__(self):
        self.tasks = []
        self._changed = asyncio.Event()

    async def __call__(self):
        self.tasks.append(asyncio.current_task())
        self._changed.set()

    async def wait_for_calls(self, count, timeout=5):
        async def _wait():
            while len(self.tasks) < count:
                self._changed.clear()
                await self._changed.wait()
        await asyncio.wait_for(_wait(), timeout)


class TestRepeatingTimer:
    """Tests for RepeatingTimer."""

    @pytest.mark.asyncio
    async def test_fires_repeatedly_until_cancelled(self):
        """Callbacks repeat at the interval and stop on cancel."""
        log = CallLog()

        timer = RepeatingTimer(0.01, log)
        timer.start()
        await log.wait_for_calls(3)
        await timer.cancel()

        fired = len(log.tasks)
        assert fired >= 3
        assert not timer.is_running

        await asyncio.sleep(0.05)
        assert len(log.tasks) == fired

    @pytest.mark.asyncio
    async def test_cancel_from_inside_callback(self):
        """A callback can stop its own timer."""
        calls = []
        called = asyncio.Event()

        async def callback():
            calls.append(1)
            await timer.cancel()
            called.set()

        timer = RepeatingTimer(0.01, callback)
        timer.start()
        await asyncio.wait_for(called.wait(), timeout=5)
        await asyncio.sleep(0.05)

        assert calls == [1]
        assert not timer.is_running

    @pytest.mark.asyncio
    async def test_cancel_interrupts_inflight_callback(self):
        """Cancelling while a callback is running does not wait for it."""
        started = asyncio.Event()
        finished = []

        async def callback():
            started.set()
            await asyncio.sleep(10)
            finished.append(1)

        timer = RepeatingTimer(0.01, callback)
        timer.start()
        await asyncio.wait_for(started.wait(), timeout=5)

        await asyncio.wait_for(timer.cancel(), timeout=5)

        assert not timer.is_running
        assert finished == []

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self):
        """Starting twice runs a single loop."""
        log = CallLog()

        timer = RepeatingTimer(0.01, log)
        timer.start()
        timer.start()
        await log.wait_for_calls(3)
        await timer.cancel()

        assert len(set(log.tasks)) == 1
        assert timer.fired == len(log.tasks)

    @pytest.mark.asyncio
    async def test_cancel_before_start(self):
        """Cancelling an idle timer is a no-op."""
        async def callback():
            pass

        timer = RepeatingTimer(0.01, callback)
        await timer.cancel()
        assert not timer.is_running

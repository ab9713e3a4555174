"""Tests for the bounded-concurrency executor."""

import asyncio

import pytest

from feedscout.engine import process_concurrently


class Recorder:
    """Task recording start order and peak concurrency."""

    def __init__(self, delay=0.01, fail_on=()):
        self.delay = delay
        self.fail_on = set(fail_on)
        self.started = []
        self.finished = []
        self.running = 0
        self.peak = 0

    async def __call__(self, item):
        self.started.append(item)
        self.running += 1
        self.peak = max(self.peak, self.running)
        try:
            await asyncio.sleep(self.delay)
            if item in self.fail_on:
                raise RuntimeError(f"failed on {item}")
            self.finished.append(item)
        finally:
            self.running -= 1


class TestProcessConcurrently:
    """Tests for process_concurrently."""

    @pytest.mark.asyncio
    async def test_processes_every_item(self):
        """Test that every item is handled exactly once."""
        task = Recorder()
        await process_concurrently(range(10), task, concurrency=3)
        assert sorted(task.finished) == list(range(10))

    @pytest.mark.asyncio
    async def test_concurrency_bound(self):
        """Test that no more than the limit run at once."""
        task = Recorder(delay=0.02)
        await process_concurrently(range(12), task, concurrency=4)
        assert task.peak == 4

    @pytest.mark.asyncio
    async def test_single_slot_is_sequential(self):
        """Test that concurrency 1 runs items in order."""
        task = Recorder(delay=0)
        await process_concurrently(["a", "b", "c"], task, concurrency=1)
        assert task.started == ["a", "b", "c"]
        assert task.peak == 1

    @pytest.mark.asyncio
    async def test_start_order_is_fifo(self):
        """Test that items start in the order given."""
        task = Recorder()
        await process_concurrently(range(8), task, concurrency=3)
        assert task.started == list(range(8))

    @pytest.mark.asyncio
    async def test_stop_prevents_new_starts(self):
        """Test that a stop signal leaves the remaining items untouched."""
        task = Recorder(delay=0)
        await process_concurrently(
            range(10), task, concurrency=1, should_stop=lambda: len(task.finished) >= 2
        )
        assert task.started == [0, 1]

    @pytest.mark.asyncio
    async def test_stop_waits_for_running_tasks(self):
        """Test that tasks already running are finished after a stop."""
        task = Recorder(delay=0.01)
        await process_concurrently(
            range(10), task, concurrency=3, should_stop=lambda: len(task.finished) >= 1
        )
        assert task.running == 0
        assert sorted(task.finished) == sorted(task.started)
        assert len(task.started) < 10

    @pytest.mark.asyncio
    async def test_failure_is_isolated(self):
        """Test that one failing task does not affect the others."""
        task = Recorder(fail_on={2, 5})
        await process_concurrently(range(8), task, concurrency=2)
        assert sorted(task.finished) == [0, 1, 3, 4, 6, 7]

    @pytest.mark.asyncio
    async def test_empty_items(self):
        """Test that an empty item list finishes immediately."""
        task = Recorder()
        await process_concurrently([], task, concurrency=2)
        assert task.started == []

    @pytest.mark.asyncio
    async def test_invalid_concurrency(self):
        """Test that the limit must be positive."""
        with pytest.raises(ValueError):
            await process_concurrently([1], Recorder(), concurrency=0)

    @pytest.mark.asyncio
    async def test_cancellation_cancels_running_tasks(self):
        """Test that cancelling the executor cancels its tasks."""
        task = Recorder(delay=10)
        runner = asyncio.ensure_future(process_concurrently(range(4), task, concurrency=2))
        await asyncio.sleep(0.01)
        runner.cancel()
        with pytest.raises(asyncio.CancelledError):
            await runner
        await asyncio.sleep(0)
        assert task.running == 0
        assert task.finished == []

"""Cancellation gate: turns an external shutdown request into something
every blocking point of the watch loop can race against.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from podwatcher.errors import CancellationRequested

T = TypeVar("T")


class CancellationGate:
    """One-shot shutdown signal backed by an asyncio.Event.

    ``cancel()`` is idempotent and safe to call from a signal handler
    installed with ``loop.add_signal_handler``.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()

    async def sleep(self, delay: float) -> bool:
        """Sleep for *delay* seconds or until cancelled.

        Returns True if the gate fired before the delay elapsed.
        """
        if self.cancelled:
            return True
        try:
            await asyncio.wait_for(self._event.wait(), timeout=delay)
        except TimeoutError:
            return False
        return True

    async def race(self, awaitable: Awaitable[T]) -> T:
        """Await *awaitable* unless the gate fires first.

        Raises CancellationRequested if cancelled before the awaitable
        completes; the pending awaitable is cancelled and awaited so it can
        release what it holds.
        """
        task = asyncio.ensure_future(awaitable)
        if self.cancelled:
            await _discard(task)
            raise CancellationRequested

        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task in done:
            return task.result()
        await _discard(task)
        raise CancellationRequested


async def _discard(task: asyncio.Future[T]) -> None:
    task.cancel()
    # Retrieve the outcome of the cancelled task.
    await asyncio.gather(task, return_exceptions=True)

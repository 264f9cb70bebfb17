"""Fan-in of keyboard input and subscribed producers into one event feed."""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterable, AsyncIterator, Optional, Protocol

from teaterm.core.input import KeyPress
from teaterm.model import Event

logger = logging.getLogger(__name__)

_END = object()


class KeySource(Protocol):
    """Anything with a non-blocking next_key(), such as InputReader."""

    def next_key(self) -> Optional[KeyPress]:
        ...


class EventMultiplexer:
    """
    Merges the keyboard and any number of producers into one async feed.

    Every source owns a task that puts into a shared queue; the run loop is
    the only consumer. Each source's own order is preserved, but there is no
    ordering across sources. The feed ends only when the keyboard task ends.
    """

    def __init__(self, keys: KeySource, poll_interval: float = 0.001) -> None:
        self._keys = keys
        self._poll_interval = poll_interval
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._keyboard: Optional[asyncio.Task[None]] = None
        self._producers: list[asyncio.Task[None]] = []
        self._closed = False
        self._keyboard_error: Optional[BaseException] = None

    @property
    def subscriptions(self) -> list[asyncio.Task[None]]:
        """Producer tasks that have not finished yet."""
        self._producers = [t for t in self._producers if not t.done()]
        return list(self._producers)

    @property
    def keyboard_error(self) -> Optional[BaseException]:
        """The exception that ended the keyboard task, if it failed."""
        return self._keyboard_error

    def start(self) -> None:
        """Start polling the keyboard. Must be called from a running loop."""
        if self._keyboard is None:
            self._keyboard = asyncio.create_task(self._poll_keyboard(), name="keyboard")

    def subscribe(self, producer: AsyncIterable[Event]) -> asyncio.Task[None]:
        """Merge a producer into the feed. Returns its cancellation handle."""
        if self._closed:
            raise RuntimeError("cannot subscribe to a closed multiplexer")
        task = asyncio.create_task(self._pump(producer))
        self._producers.append(task)
        logger.debug("Subscribed producer %r", producer)
        return task

    async def aclose(self) -> None:
        """
        Cancel every source and wait until they have stopped.

        Once this returns nothing can be put into the feed any more.
        """
        self._closed = True
        tasks = list(self._producers)
        if self._keyboard is not None:
            tasks.append(self._keyboard)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._producers.clear()

    def __aiter__(self) -> AsyncIterator[Event]:
        return self

    async def __anext__(self) -> Event:
        item = await self._queue.get()
        if item is _END:
            raise StopAsyncIteration
        return item  # type: ignore[return-value]

    async def _poll_keyboard(self) -> None:
        try:
            while True:
                key = self._keys.next_key()
                if key is not None:
                    await self._queue.put(key)
                await asyncio.sleep(self._poll_interval)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception("Keyboard source failed")
            self._keyboard_error = e
            raise
        finally:
            self._queue.put_nowait(_END)

    async def _pump(self, producer: AsyncIterable[Event]) -> None:
        try:
            async for event in producer:
                await self._queue.put(event)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Producer %r failed, dropping it", producer)
        else:
            logger.debug("Producer %r finished", producer)

#!/usr/bin/env python3
"""
Bounded queue between a member source and an extraction operator.

The queue is the back-pressure boundary of an async extraction run: the
producer suspends on ``put`` once ``maxsize`` items are in flight and
resumes as the operator drains the queue. Nothing is ever dropped.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, AsyncIterator, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')

_END_OF_STREAM = -1
_ERROR = -2


class QueueClosed(Exception):
    """Raised when putting into a queue that has been closed."""
    pass


@dataclass
class QueueItem(Generic[T]):
    """Item in a member queue with metadata."""
    value: T
    timestamp: float
    sequence_id: int


class MemberQueue(Generic[T]):
    """
    Bounded FIFO queue with an end-of-stream signal.

    Consumers iterate it with ``async for``; iteration ends after ``close()``
    and re-raises any exception passed to ``throw()``.
    """

    def __init__(self, maxsize: int = 1000):
        """
        Initialize the queue.

        Args:
            maxsize: High-water mark, the maximum number of items in flight
        """
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        self._queue: asyncio.Queue[QueueItem] = asyncio.Queue(maxsize=maxsize)
        self._maxsize = maxsize
        self._sequence_counter = 0
        self._closed = False
        self._high_water = 0

    async def put(self, item: T) -> None:
        """Put an item, waiting while the queue is full."""
        if self._closed:
            raise QueueClosed("Cannot put into a closed queue")
        await self._queue.put(QueueItem(
            value=item,
            timestamp=time.time(),
            sequence_id=self._get_next_sequence(),
        ))
        self._high_water = max(self._high_water, self._queue.qsize())

    async def get(self) -> QueueItem[T]:
        """Get the next item (may be the end-of-stream or error marker)."""
        return await self._queue.get()

    async def close(self) -> None:
        """Signal end of stream to the consumer."""
        if self._closed:
            return
        self._closed = True
        await self._queue.put(QueueItem(value=None, timestamp=time.time(),
                                        sequence_id=_END_OF_STREAM))

    async def throw(self, exception: BaseException) -> None:
        """Terminate the stream with ``exception`` on the consumer side."""
        if self._closed:
            return
        self._closed = True
        await self._queue.put(QueueItem(value=exception, timestamp=time.time(),
                                        sequence_id=_ERROR))

    async def __aiter__(self) -> AsyncIterator[T]:
        while True:
            item = await self._queue.get()
            if item.sequence_id == _END_OF_STREAM:
                return
            if item.sequence_id == _ERROR:
                raise item.value
            yield item.value

    @property
    def closed(self) -> bool:
        return self._closed

    def qsize(self) -> int:
        return self._queue.qsize()

    def full(self) -> bool:
        return self._queue.full()

    def _get_next_sequence(self) -> int:
        self._sequence_counter += 1
        return self._sequence_counter

    def get_stats(self) -> dict:
        """Get queue statistics."""
        return {
            'size': self.qsize(),
            'maxsize': self._maxsize,
            'high_water': self._high_water,
            'sequence_counter': self._sequence_counter,
            'closed': self._closed,
        }


async def pump(source: Any, queue: MemberQueue, stop: Optional[asyncio.Event] = None) -> int:
    """
    Copy every item of a sync or async iterable into ``queue``, then close it.

    Upstream errors are forwarded with ``queue.throw``. Returns the number of
    items produced.
    """
    produced = 0
    try:
        if hasattr(source, '__aiter__'):
            async for item in source:
                if stop is not None and stop.is_set():
                    break
                await queue.put(item)
                produced += 1
        else:
            for item in source:
                if stop is not None and stop.is_set():
                    break
                await queue.put(item)
                produced += 1
    except asyncio.CancelledError:
        logger.debug(f"Producer cancelled after {produced} items")
        raise
    except Exception as e:
        logger.error(f"Member source failed after {produced} items: {e}")
        await queue.throw(e)
        return produced

    await queue.close()
    return produced

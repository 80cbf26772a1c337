"""A queue of keyboard scancodes and an asynchronous stream over it."""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Generator, Optional

from xento.task import Waker

__all__ = ["ScancodeQueue", "ScancodeStream"]

_log = logging.getLogger(__name__)


class ScancodeQueue:
    """A bounded FIFO of scancodes that wakes a waiting reader."""

    def __init__(self, capacity: int = 100) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._scancodes: deque[int] = deque()
        self._capacity = capacity
        self._lock = threading.Lock()
        self._waker: Optional[Waker] = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._scancodes)

    def add_scancode(self, scancode: int) -> bool:
        """Queue a scancode; return False if the queue was full and it was dropped."""
        if not 0 <= scancode <= 0xFF:
            raise ValueError(f"scancode must be a byte, got {scancode}")
        with self._lock:
            if len(self._scancodes) >= self._capacity:
                full = True
                waker = None
            else:
                full = False
                self._scancodes.append(scancode)
                waker, self._waker = self._waker, None
        if full:
            _log.warning("scancode queue full; dropping keyboard input")
            return False
        if waker is not None:
            waker.wake()
        return True

    def pop(self) -> Optional[int]:
        """Remove and return the oldest scancode, or None if there is none."""
        with self._lock:
            return self._scancodes.popleft() if self._scancodes else None

    def _register_waker(self, waker: Waker) -> None:
        with self._lock:
            available = bool(self._scancodes)
            if not available:
                self._waker = waker
        if available:
            waker.wake()


class _ScancodeAvailable:
    def __init__(self, queue: ScancodeQueue) -> None:
        self._queue = queue

    def __await__(self) -> Generator:
        yield self._queue._register_waker


class ScancodeStream:
    """Reads scancodes from a queue, suspending while it is empty."""

    def __init__(self, queue: ScancodeQueue) -> None:
        self._queue = queue

    async def next(self) -> int:
        """Return the next scancode, waiting for one if necessary."""
        while (scancode := self._queue.pop()) is None:
            await _ScancodeAvailable(self._queue)
        return scancode

    def __aiter__(self) -> "ScancodeStream":
        return self

    async def __anext__(self) -> int:
        return await self.next()
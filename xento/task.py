"""Cooperative tasks and the executors that poll them.

A task wraps a coroutine or generator. When it suspends it may yield a
callable. The executor then calls that callable with the task's
:class:`Waker`, so that whatever the task waits for can wake it later.
"""

from __future__ import annotations

import itertools
import threading
from collections import deque
from functools import partial
from typing import Any, Callable, Optional

__all__ = ["QUEUE_CAPACITY", "Executor", "SimpleExecutor", "Task", "Waker"]

QUEUE_CAPACITY = 100

_task_ids = itertools.count()
_task_id_lock = threading.Lock()


class Waker:
    """Schedules a task to be polled again."""

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback

    def wake(self) -> None:
        """Ask the executor to poll the task again."""
        self._callback()


def _no_op() -> None:
    pass


class Task:
    """A coroutine together with a unique, increasing identifier."""

    def __init__(self, coroutine: Any) -> None:
        if not callable(getattr(coroutine, "send", None)):
            raise TypeError("a task needs a coroutine or a generator")
        with _task_id_lock:
            self.id = next(_task_ids)
        self._coroutine = coroutine
        self._done = False

    @property
    def done(self) -> bool:
        """Whether the coroutine has finished."""
        return self._done

    def poll(self, waker: Waker) -> bool:
        """Run the coroutine until it suspends; return True once it has finished."""
        if self._done:
            raise RuntimeError("task polled after completion")
        try:
            request = self._coroutine.send(None)
        except StopIteration:
            self._done = True
            return True
        except BaseException:
            self._done = True
            raise
        if callable(request):
            request(waker)
        return False


class SimpleExecutor:
    """Polls tasks round robin until all have finished."""

    def __init__(self) -> None:
        self._tasks: deque[Task] = deque()

    def spawn(self, task: Task) -> None:
        """Add a task to the back of the queue."""
        self._tasks.append(task)

    def run(self) -> None:
        """Poll queued tasks in turn until the queue is empty."""
        waker = Waker(_no_op)
        while self._tasks:
            task = self._tasks.popleft()
            if not task.poll(waker):
                self._tasks.append(task)


class _TaskQueue:
    """A bounded queue of task ids that wakes a sleeping executor."""

    def __init__(self, capacity: int) -> None:
        self._ids: deque[int] = deque()
        self._capacity = capacity
        self._ready = threading.Condition()

    def push(self, task_id: int, full_message: str) -> None:
        with self._ready:
            if len(self._ids) >= self._capacity:
                raise RuntimeError(full_message)
            self._ids.append(task_id)
            self._ready.notify()

    def pop(self) -> Optional[int]:
        with self._ready:
            return self._ids.popleft() if self._ids else None

    def wait(self) -> None:
        with self._ready:
            while not self._ids:
                self._ready.wait()


class Executor:
    """Polls only the tasks that have been woken."""

    def __init__(self) -> None:
        self._tasks: dict[int, Task] = {}
        self._queue = _TaskQueue(QUEUE_CAPACITY)
        self._wakers: dict[int, Waker] = {}

    def spawn(self, task: Task) -> None:
        """Add a task and schedule its first poll."""
        if task.id in self._tasks:
            raise RuntimeError("task with same ID already in tasks")
        self._tasks[task.id] = task
        self._queue.push(task.id, "queue full")

    def run_ready_tasks(self) -> None:
        """Poll every woken task until no task is waiting to be polled."""
        while (task_id := self._queue.pop()) is not None:
            task = self._tasks.get(task_id)
            if task is None:
                continue
            waker = self._wakers.get(task_id)
            if waker is None:
                waker = Waker(partial(self._queue.push, task_id, "task_queue full"))
                self._wakers[task_id] = waker
            if task.poll(waker):
                del self._tasks[task_id]
                del self._wakers[task_id]

    def run(self) -> None:
        """Run tasks, sleeping while none is woken, until all have finished."""
        while self._tasks:
            self.run_ready_tasks()
            if self._tasks:
                self._queue.wait()
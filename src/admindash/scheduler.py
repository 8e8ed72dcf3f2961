"""Cancelable deferred callbacks.

Every delayed side effect in admindash (realtime ticks, status-flap
reverts, domain verification, automated chat replies, the hard reset) is
scheduled through a Scheduler and returns a ScheduledTask handle. Handles
can be cancelled individually, by tag (e.g. everything pending for one app),
or all at once on shutdown.

Two implementations are provided: ManualScheduler runs on a virtual clock
that only moves when advance() is called, which makes timer-driven behavior
deterministic in tests and in the CLI; AsyncioScheduler runs callbacks on a
real asyncio event loop.
"""

import asyncio
import heapq
import itertools
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Hashable, Iterable, Optional

logger = logging.getLogger(__name__)


class ScheduledTask:
    """Handle for one scheduled (possibly repeating) callback."""

    def __init__(
        self,
        scheduler: "Scheduler",
        callback: Callable[..., Any],
        args: tuple,
        due: float,
        interval: Optional[float] = None,
        tag: Optional[Hashable] = None,
    ):
        self.scheduler = scheduler
        self.callback = callback
        self.args = args
        self.due = due
        self.interval = interval
        self.tag = tag
        self._cancelled = False
        self._done = False
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._done

    @property
    def repeating(self) -> bool:
        return self.interval is not None

    def cancel(self) -> bool:
        """Cancel the task. Returns False if it already ran or was cancelled."""
        if self._cancelled or self._done:
            return False
        self._cancelled = True
        self.scheduler._forget(self)
        return True

    def __repr__(self) -> str:
        name = getattr(self.callback, "__qualname__", repr(self.callback))
        state = "cancelled" if self._cancelled else "done" if self._done else "pending"
        return f"<ScheduledTask {name} due={self.due:.3f} tag={self.tag!r} {state}>"


class Scheduler(ABC):
    """Abstract scheduler interface."""

    def __init__(self):
        self._pending: set[ScheduledTask] = set()

    @abstractmethod
    def now(self) -> float:
        """Current scheduler time in seconds."""
        pass

    @abstractmethod
    def _arm(self, task: ScheduledTask, delay: float) -> None:
        """Arrange for task to run after delay seconds."""
        pass

    def _disarm(self, task: ScheduledTask) -> None:
        """Undo _arm for a cancelled task."""
        pass

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any, tag: Optional[Hashable] = None
    ) -> ScheduledTask:
        """Run callback(*args) once after delay seconds."""
        if delay < 0:
            raise ValueError(f"Delay must be non-negative, got {delay}")
        task = ScheduledTask(self, callback, args, self.now() + delay, tag=tag)
        self._pending.add(task)
        self._arm(task, delay)
        return task

    def call_every(
        self, interval: float, callback: Callable[..., Any], *args: Any, tag: Optional[Hashable] = None
    ) -> ScheduledTask:
        """Run callback(*args) every interval seconds until cancelled."""
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        task = ScheduledTask(self, callback, args, self.now() + interval, interval=interval, tag=tag)
        self._pending.add(task)
        self._arm(task, interval)
        return task

    def pending(self) -> list[ScheduledTask]:
        """Pending tasks ordered by due time."""
        return sorted(self._pending, key=lambda t: t.due)

    def cancel_tagged(self, tag: Hashable) -> int:
        """Cancel every pending task carrying tag. Returns how many were cancelled."""
        cancelled = 0
        for task in list(self._pending):
            if task.tag == tag and task.cancel():
                cancelled += 1
        return cancelled

    def cancel_all(self, keep: Iterable[ScheduledTask] = ()) -> int:
        """Cancel every pending task except those in keep."""
        keep = set(keep)
        cancelled = 0
        for task in list(self._pending):
            if task not in keep and task.cancel():
                cancelled += 1
        return cancelled

    def _forget(self, task: ScheduledTask) -> None:
        self._pending.discard(task)
        self._disarm(task)

    def _execute(self, task: ScheduledTask) -> None:
        """Run a due task. Failures are logged and never stop the scheduler."""
        if task.cancelled:
            return
        if not task.repeating:
            task._done = True
            self._pending.discard(task)
        try:
            task.callback(*task.args)
        except Exception:
            logger.exception("Scheduled callback %r failed", task)
        if task.repeating and not task.cancelled:
            task.due += task.interval
            self._arm(task, task.interval)


class ManualScheduler(Scheduler):
    """Scheduler driven by an explicit virtual clock."""

    def __init__(self, start: float = 0.0):
        super().__init__()
        self._now = start
        self._queue: list[tuple[float, int, ScheduledTask]] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._now

    def _arm(self, task: ScheduledTask, delay: float) -> None:
        heapq.heappush(self._queue, (task.due, next(self._counter), task))

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running every callback that falls due.

        Callbacks scheduled while advancing run too if they fall due before
        the new time. Returns the number of callbacks executed.
        """
        if seconds < 0:
            raise ValueError(f"Cannot move the clock backwards ({seconds})")
        target = self._now + seconds
        executed = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, task = heapq.heappop(self._queue)
            if task.cancelled or task.done:
                continue
            self._now = due
            self._execute(task)
            executed += 1
        self._now = target
        return executed

    def run_until_idle(self, max_seconds: float = 3600.0) -> int:
        """Advance until no one-shot task remains (or max_seconds elapse)."""
        deadline = self._now + max_seconds
        executed = 0
        while True:
            one_shots = [t.due for t in self._pending if not t.repeating]
            if not one_shots:
                break
            next_due = min(one_shots)
            if next_due > deadline:
                break
            executed += self.advance(max(0.0, next_due - self._now))
        return executed


class AsyncioScheduler(Scheduler):
    """Scheduler backed by an asyncio event loop.

    Construct it from inside a running loop, or pass the loop explicitly.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        super().__init__()
        self.loop = loop or asyncio.get_running_loop()

    def now(self) -> float:
        return self.loop.time()

    def _arm(self, task: ScheduledTask, delay: float) -> None:
        task._handle = self.loop.call_later(delay, self._execute, task)

    def _disarm(self, task: ScheduledTask) -> None:
        if task._handle is not None:
            task._handle.cancel()
            task._handle = None

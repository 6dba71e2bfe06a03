"""FIFO request serializer for outbound calls to the generative-text API.

Every call to the upstream service goes through an ``ApiQueue`` so that at
most one request is in flight at any time, no matter how many coroutines
submit work concurrently. Work items start in submission order and each
caller gets back a future settled with exactly that item's outcome.

Notes:
- Not thread-safe: ``submit``, ``clear`` and ``shutdown`` must run on the
  event loop thread.
- ``clear()`` leaves discarded futures unsettled unless ``cancel_pending`` is
  passed; callers awaiting queued work should apply their own timeout.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


Work = Callable[[], Awaitable[Any]]


@dataclass
class QueuedTask:
    """One unit of queued work plus the future handed back to its caller."""

    work: Work
    future: asyncio.Future[Any]


class ApiQueue:
    """Single-concurrency FIFO queue for asynchronous work.

    Attributes:
        name: Label used in log records to tell queue instances apart.
    """

    def __init__(self, name: str = "default") -> None:
        self.name = name
        self._backlog: deque[QueuedTask] = deque()
        self._draining = False
        self._drain_task: asyncio.Task[None] | None = None

    def __repr__(self) -> str:  # pragma: no cover - representation only
        return (
            f"ApiQueue(name={self.name!r}, length={len(self._backlog)}, "
            f"draining={self._draining})"
        )

    def __len__(self) -> int:
        return len(self._backlog)

    @property
    def length(self) -> int:
        """Number of tasks waiting to start (excludes the running one)."""

        return len(self._backlog)

    @property
    def is_draining(self) -> bool:
        """Whether a drain loop is currently active."""

        return self._draining

    def submit(self, work: Work) -> asyncio.Future[Any]:
        """Append ``work`` to the backlog and return its completion future.

        Args:
            work: Zero-argument callable returning an awaitable. The queue
                invokes it at most once, when the task reaches the head.

        Returns:
            Future resolved with the work's result or its raised exception.

        Raises:
            RuntimeError: If called without a running event loop.
        """

        loop = asyncio.get_running_loop()
        future: asyncio.Future[Any] = loop.create_future()
        self._backlog.append(QueuedTask(work=work, future=future))

        if not self._draining:
            self._draining = True
            self._drain_task = loop.create_task(self._drain())
            logger.debug(
                "api_queue.drain_started",
                extra={"queue": self.name, "queue_length": len(self._backlog)},
            )

        return future

    def clear(self, *, cancel_pending: bool = False) -> int:
        """Discard every task that has not started yet.

        The running task, if any, is left alone and settles normally.

        Args:
            cancel_pending: Cancel the discarded futures instead of leaving
                them unsettled.

        Returns:
            Number of discarded tasks.
        """

        discarded = list(self._backlog)
        self._backlog.clear()

        if cancel_pending:
            for task in discarded:
                task.future.cancel()

        if discarded:
            logger.debug(
                "api_queue.cleared",
                extra={
                    "queue": self.name,
                    "discarded": len(discarded),
                    "cancelled": cancel_pending,
                },
            )
        return len(discarded)

    async def shutdown(self) -> int:
        """Cancel pending futures and stop the running drain loop.

        Returns:
            Number of discarded tasks that had not started.
        """

        dropped = self.clear(cancel_pending=True)
        drain_task = self._drain_task
        if drain_task is not None and not drain_task.done():
            drain_task.cancel()
            try:
                await drain_task
            except asyncio.CancelledError:
                current = asyncio.current_task()
                if current is not None and current.cancelling():
                    raise
        return dropped

    async def _drain(self) -> None:
        """Run queued tasks one at a time until the backlog is empty."""

        try:
            while self._backlog:
                task = self._backlog.popleft()

                # Caller gave up before its turn
                if task.future.done():
                    continue

                try:
                    result = await task.work()
                except asyncio.CancelledError:
                    task.future.cancel()
                    current = asyncio.current_task()
                    if current is not None and current.cancelling():
                        raise
                    # Only the work was cancelled; keep draining
                    continue
                except Exception as exc:
                    if not task.future.done():
                        task.future.set_exception(exc)
                else:
                    if not task.future.done():
                        task.future.set_result(result)
        finally:
            self._draining = False
            self._drain_task = None

        logger.debug("api_queue.idle", extra={"queue": self.name})

"""Lifecycle-bound worker scope for store calls issued by viewmodels.

Work runs on a single background worker so store calls keep submission order.
Results are handed to ``post`` which must run the delivery callback on the
owner (UI) thread. Once :meth:`TaskScope.cancel` has been called no delivery
reaches its callback, so a torn-down viewmodel never mutates state again.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import CancelledError, Executor, Future, ThreadPoolExecutor
from typing import Callable, Optional, Set, TypeVar

T = TypeVar("T")

PostFn = Callable[[Callable[[], None]], None]
ErrorFn = Callable[[Exception], None]

_log = logging.getLogger(__name__)


class TaskScope:
    """Run blocking work off the owner thread and deliver results back to it."""

    def __init__(self, post: PostFn, executor: Optional[Executor] = None, *, name: str = "sleeptracker-io") -> None:
        """Store the owner-thread poster and create or adopt the worker.

        Args:
            post: Function that schedules a zero-arg callable on the owner
                thread (for example :meth:`TkDispatcher.post`).
            executor: Optional injected executor. When omitted the scope owns a
                single-worker ``ThreadPoolExecutor`` and shuts it down on cancel.
            name: Thread-name prefix for the owned worker.
        """
        self._post = post
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)
        self._pending: Set[Future] = set()
        self._lock = threading.Lock()
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def launch(
        self,
        work: Callable[[], T],
        on_done: Callable[[T], None],
        on_error: Optional[ErrorFn] = None,
    ) -> Optional[Future]:
        """Submit ``work`` and route its outcome back to the owner thread.

        Args:
            work: Blocking callable executed on the worker.
            on_done: Receives the result on the owner thread.
            on_error: Receives any exception raised by ``work`` on the owner
                thread. Without it the error is logged and dropped.

        Returns:
            The submitted future, or ``None`` when the scope is already
            cancelled.
        """
        if self._cancelled:
            _log.debug("Scope cancelled; dropping launch of %r", work)
            return None
        future = self._executor.submit(work)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(lambda fut: self._complete(fut, on_done, on_error))
        return future

    def cancel(self) -> None:
        """Cancel queued work and discard every result still in flight."""
        if self._cancelled:
            return
        self._cancelled = True
        with self._lock:
            pending = list(self._pending)
            self._pending.clear()
        for future in pending:
            future.cancel()
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)
        _log.debug("Scope cancelled with %d pending task(s)", len(pending))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _complete(self, future: Future, on_done: Callable, on_error: Optional[ErrorFn]) -> None:
        with self._lock:
            self._pending.discard(future)
        if future.cancelled() or self._cancelled:
            return
        self._post(lambda: self._deliver(future, on_done, on_error))

    def _deliver(self, future: Future, on_done: Callable, on_error: Optional[ErrorFn]) -> None:
        # runs on the owner thread; cancellation may have happened after posting
        if self._cancelled:
            return
        try:
            result = future.result()
        except CancelledError:
            return
        except Exception as exc:
            if on_error is None:
                _log.exception("Background task failed", exc_info=exc)
                return
            on_error(exc)
            return
        on_done(result)


__all__ = ["ErrorFn", "PostFn", "TaskScope"]

from __future__ import annotations

from concurrent.futures import Executor, Future
from typing import Callable, Iterable, List, Optional

from sleeptracker.adapters.session_store_memory import InMemorySessionStore
from sleeptracker.app.task_scope import TaskScope
from sleeptracker.domain.entities import SleepNight
from sleeptracker.domain.errors import StoreFailure
from sleeptracker.viewmodels.sleep_tracker_vm import SleepTrackerVM


class InlineExecutor(Executor):
    """Runs submitted work immediately on the calling thread."""

    def __init__(self) -> None:
        self.submitted = 0

    def submit(self, fn, /, *args, **kwargs) -> Future:
        self.submitted += 1
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future


class ManualDispatcher:
    """Collects posted callbacks until the test runs them."""

    def __init__(self) -> None:
        self.queue: List[Callable[[], None]] = []

    def post(self, callback: Callable[[], None]) -> None:
        self.queue.append(callback)

    def run_pending(self) -> int:
        ran = 0
        while self.queue:
            self.queue.pop(0)()
            ran += 1
        return ran


class StepClock:
    """Returns start, start+step, start+2*step, ... on each call."""

    def __init__(self, start: int = 1_000_000, step: int = 60_000) -> None:
        self.now = start - step
        self.step = step

    def __call__(self) -> int:
        self.now += self.step
        return self.now


class FlakyStore(InMemorySessionStore):
    """In-memory store that raises StoreFailure for the named operations."""

    def __init__(self, failing: Iterable[str] = ()) -> None:
        super().__init__()
        self.failing = set(failing)

    def _check(self, op: str) -> None:
        if op in self.failing:
            raise StoreFailure(op, "disk I/O error")

    def insert(self, night: SleepNight) -> SleepNight:
        self._check("insert")
        return super().insert(night)

    def update(self, night: SleepNight) -> None:
        self._check("update")
        super().update(night)

    def get_most_recent(self) -> Optional[SleepNight]:
        self._check("get_most_recent")
        return super().get_most_recent()

    def list_all(self) -> List[SleepNight]:
        self._check("list_all")
        return super().list_all()

    def clear(self) -> None:
        self._check("clear")
        super().clear()


def make_vm(store=None, *, dispatcher=None, clock=None, **kwargs) -> SleepTrackerVM:
    """Build a VM whose store work runs inline; delivery is immediate unless a dispatcher is given."""
    post = dispatcher.post if dispatcher is not None else (lambda cb: cb())
    scope = TaskScope(post, executor=InlineExecutor())
    return SleepTrackerVM(
        store if store is not None else InMemorySessionStore(),
        scope=scope,
        clock=clock or StepClock(),
        **kwargs,
    )


__all__ = ["FlakyStore", "InlineExecutor", "ManualDispatcher", "StepClock", "make_vm"]

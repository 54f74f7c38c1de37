"""ViewModel for the sleep tracker screen.

Call context:
    ``sleeptracker.app.main`` builds one instance per window and binds the
    tracker view's buttons to the ``*_tracking``/``clear_history`` commands.

Threading:
    Commands are called on the UI thread. Store access runs inside the
    injected :class:`~sleeptracker.app.task_scope.TaskScope`; results come
    back on the UI thread, so state is only ever mutated there. After
    :meth:`SleepTrackerVM.close` no result is applied.
"""

from __future__ import annotations

import logging
import time
from datetime import tzinfo
from typing import Callable, List, Optional, Tuple

from ..app.task_scope import TaskScope
from ..domain.entities import SleepNight
from ..domain.errors import UseCaseError
from ..domain.ports import SessionStorePort
from ..usecases import ClearNights, ListNights, LoadTonight, StartNight, StopNight
from ..usecases.error_mapping import map_store_error
from .history_format import DEFAULT_TIME_FORMAT, format_nights

Clock = Callable[[], int]
CLEARED_NOTICE = "All your sleep data has been cleared."

_log = logging.getLogger(__name__)


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class SleepTrackerVM:
    """Tracks tonight's session and exposes history/navigation state."""

    def __init__(
        self,
        store: SessionStorePort,
        *,
        scope: TaskScope,
        clock: Optional[Clock] = None,
        time_format: str = DEFAULT_TIME_FORMAT,
        history_limit: int = 0,
        tz: Optional[tzinfo] = None,
        autoload: bool = True,
    ) -> None:
        self._scope = scope
        self._clock = clock or _epoch_ms
        self._time_format = time_format
        self._history_limit = history_limit
        self._tz = tz

        self._load_tonight = LoadTonight(store)
        self._start_night = StartNight(store)
        self._stop_night = StopNight(store)
        self._clear_nights = ClearNights(store)
        self._list_nights = ListNights(store)

        self.tonight: Optional[SleepNight] = None
        self.nights: List[SleepNight] = []
        self.history_lines: List[str] = []
        self.navigate_to_quality: Optional[SleepNight] = None
        self.show_cleared_notice: bool = False
        self.error: Optional[UseCaseError] = None

        self.on_tonight_changed: Optional[Callable[[Optional[SleepNight]], None]] = None
        self.on_history_changed: Optional[Callable[[List[str]], None]] = None
        self.on_navigate_to_quality: Optional[Callable[[SleepNight], None]] = None
        self.on_notice: Optional[Callable[[str], None]] = None
        self.on_error: Optional[Callable[[UseCaseError], None]] = None

        self._loading = False
        self._start_pending = False
        self._stop_pending = False
        self._closed = False

        if autoload:
            self.initialize()

    # ------------------------------------------------------------------
    # Derived UI state
    # ------------------------------------------------------------------
    @property
    def busy(self) -> bool:
        """True while the startup load or a start/stop is still in flight."""
        return self._loading or self._start_pending or self._stop_pending

    @property
    def start_enabled(self) -> bool:
        return self.tonight is None and not self.busy

    @property
    def stop_enabled(self) -> bool:
        return self.tonight is not None and not self.busy

    @property
    def clear_enabled(self) -> bool:
        return bool(self.nights) and not self.busy

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def initialize(self) -> None:
        """Recover an unfinished night (if any) and load the history."""
        if self._loading:
            return

        def work() -> Tuple[Optional[SleepNight], List[SleepNight]]:
            return self._load_tonight(), self._list_nights()

        def done(result: Tuple[Optional[SleepNight], List[SleepNight]]) -> None:
            self._loading = False
            tonight, nights = result
            if tonight is not None:
                _log.info("Resuming unfinished night %s", tonight.night_id)
            self._set_tonight(tonight)
            self._set_nights(nights)

        def failed() -> None:
            self._loading = False

        self._loading = True
        if not self._launch(work, done, failed):
            self._loading = False

    def start_tracking(self) -> None:
        if self.tonight is not None or self.busy:
            _log.warning("Start ignored: a night is tracked or the store is busy.")
            return
        now_ms = self._clock()

        def work() -> Tuple[Optional[SleepNight], List[SleepNight]]:
            return self._start_night(now_ms), self._list_nights()

        def done(result: Tuple[Optional[SleepNight], List[SleepNight]]) -> None:
            self._start_pending = False
            tonight, nights = result
            _log.info("Started tracking night %s", tonight.night_id if tonight else None)
            self._set_tonight(tonight)
            self._set_nights(nights)

        def failed() -> None:
            self._start_pending = False

        self._start_pending = True
        if not self._launch(work, done, failed):
            self._start_pending = False

    def stop_tracking(self) -> None:
        night = self.tonight
        if night is None or self.busy:
            return
        now_ms = self._clock()

        def work() -> Tuple[SleepNight, List[SleepNight]]:
            return self._stop_night(night, now_ms), self._list_nights()

        def done(result: Tuple[SleepNight, List[SleepNight]]) -> None:
            self._stop_pending = False
            closed, nights = result
            _log.info("Stopped tracking night %s after %d ms", closed.night_id, closed.duration_ms)
            self._set_tonight(None)
            self._set_nights(nights)
            self.navigate_to_quality = closed
            if self.on_navigate_to_quality:
                self.on_navigate_to_quality(closed)

        def failed() -> None:
            self._stop_pending = False

        self._stop_pending = True
        if not self._launch(work, done, failed):
            self._stop_pending = False

    def clear_history(self) -> None:
        """Delete every stored night. Irreversible.

        Refused while a load, start or stop is in flight, so no pending result
        can refer to a night the clear has removed.
        """
        if self.busy:
            _log.warning("Clear ignored: a store operation is still in flight.")
            return

        def done(_: None) -> None:
            _log.info("Sleep history cleared")
            self._set_tonight(None)
            self._set_nights([])
            self.navigate_to_quality = None
            self.show_cleared_notice = True
            if self.on_notice:
                self.on_notice(CLEARED_NOTICE)

        self._launch(self._clear_nights, done)

    def acknowledge_navigation(self) -> None:
        self.navigate_to_quality = None

    def acknowledge_notice(self) -> None:
        self.show_cleared_notice = False

    def acknowledge_error(self) -> None:
        self.error = None

    def close(self) -> None:
        """Tear down: cancel pending store calls and ignore late results."""
        if self._closed:
            return
        self._closed = True
        self._scope.cancel()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _launch(self, work, done, failed: Optional[Callable[[], None]] = None) -> bool:
        """Submit ``work`` to the scope; False when the VM is already closed."""
        if self._closed:
            _log.debug("Command ignored after close")
            return False

        def on_error(exc: Exception) -> None:
            if failed is not None:
                failed()
            self._report(exc)

        return self._scope.launch(work, done, on_error) is not None

    def _report(self, exc: Exception) -> None:
        err = map_store_error(exc, default_code="STORE_FAILURE")
        _log.warning("Sleep store operation failed [%s]: %s", err.code, err.message)
        self.error = err
        if self.on_error:
            self.on_error(err)

    def _set_tonight(self, night: Optional[SleepNight]) -> None:
        self.tonight = night
        if self.on_tonight_changed:
            self.on_tonight_changed(night)

    def _set_nights(self, nights: List[SleepNight]) -> None:
        self.nights = list(nights)
        self.history_lines = format_nights(
            self.nights,
            time_format=self._time_format,
            limit=self._history_limit,
            tz=self._tz,
        )
        if self.on_history_changed:
            self.on_history_changed(list(self.history_lines))


__all__ = ["CLEARED_NOTICE", "SleepTrackerVM"]

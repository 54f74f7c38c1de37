"""Owner-thread dispatcher that drains worker results on the Tk event loop.

Tk widgets must only be touched from the thread running ``mainloop``. Worker
threads call :meth:`TkDispatcher.post`, which only enqueues; a repeating
``after`` tick on the Tk thread runs the queued callbacks.
"""

from __future__ import annotations

import logging
import queue
from typing import Callable, Optional

_log = logging.getLogger(__name__)


class TkDispatcher:
    """Thread-safe ``post`` for Tk applications, pumped by ``after``."""

    def __init__(self, widget, interval_ms: int = 50) -> None:
        """Bind the dispatcher to a Tk widget.

        Args:
            widget: Any Tk widget exposing ``after``/``after_cancel``.
            interval_ms: Delay between queue drains.
        """
        self._widget = widget
        self._interval_ms = max(1, int(interval_ms))
        self._queue: "queue.Queue[Callable[[], None]]" = queue.Queue()
        self._after_id: Optional[str] = None

    def start(self) -> None:
        if self._after_id is None:
            self._after_id = self._widget.after(self._interval_ms, self._on_tick)

    def stop(self) -> None:
        """Cancel the pending tick; queued callbacks are dropped."""
        if self._after_id is not None:
            try:
                self._widget.after_cancel(self._after_id)
            except Exception:
                _log.debug("after_cancel failed (widget destroyed?)", exc_info=True)
            self._after_id = None
        self.drop_pending()

    def post(self, callback: Callable[[], None]) -> None:
        self._queue.put(callback)

    def drain(self) -> int:
        """Run every queued callback on the calling thread; return how many ran."""
        ran = 0
        while True:
            try:
                callback = self._queue.get_nowait()
            except queue.Empty:
                return ran
            try:
                callback()
            except Exception:
                _log.exception("Dispatched callback failed")
            ran += 1

    def drop_pending(self) -> None:
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                return

    def _on_tick(self) -> None:
        """Cooperative drain tick executed on the Tkinter thread."""
        self._after_id = None
        self.drain()
        self._after_id = self._widget.after(self._interval_ms, self._on_tick)


__all__ = ["TkDispatcher"]

# sleeptracker/app/main.py
from __future__ import annotations

import argparse
import logging
import tkinter as tk
from tkinter import messagebox
from typing import List, Optional, Sequence

from ..adapters.session_store_memory import InMemorySessionStore
from ..adapters.session_store_sql import SqlSessionStore
from ..adapters.storage_local import StorageLocal
from ..domain.entities import SleepNight
from ..domain.errors import StoreFailure, UseCaseError
from ..domain.ports import SessionStorePort
from ..utils import logging as logging_utils
from ..viewmodels.history_format import format_tonight
from ..viewmodels.settings_vm import SettingsVM
from ..viewmodels.sleep_tracker_vm import SleepTrackerVM
from .task_scope import TaskScope
from .ui_dispatcher import TkDispatcher
from .views.tracker_view import TrackerView

MEMORY_DB = "memory"

_log = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="sleeptracker", description="Track sleep sessions.")
    parser.add_argument(
        "--db",
        default=None,
        help=f"Database URL (overrides saved settings); '{MEMORY_DB}' keeps nights in memory only.",
    )
    parser.add_argument(
        "--settings-dir",
        default=".",
        help="Directory holding user_settings.json.",
    )
    return parser.parse_args(argv)


def load_settings(storage: StorageLocal) -> SettingsVM:
    """Build the settings VM from the saved file.

    Unknown keys are dropped with a warning and the remaining values kept. If a
    known value is invalid the file is left alone: defaults are used and the
    returned VM has no ``on_save``, so closing the window cannot overwrite it.
    """
    settings = SettingsVM(on_save=storage.save_user_settings)
    try:
        payload = storage.load_user_settings()
        if payload:
            unknown = sorted(set(payload) - settings.known_keys())
            if unknown:
                _log.warning("Dropping unknown settings keys: %s", ", ".join(unknown))
            settings.apply_dict({k: v for k, v in payload.items() if k not in unknown})
    except ValueError as exc:
        _log.warning("Ignoring saved settings (%s); using defaults without saving.", exc)
        settings = SettingsVM()
    return settings


def build_store(database_url: str) -> SessionStorePort:
    if database_url == MEMORY_DB:
        return InMemorySessionStore()
    return SqlSessionStore(database_url=database_url)


class App:
    """Tk window wiring TrackerView to SleepTrackerVM."""

    def __init__(self, settings: SettingsVM, store: SessionStorePort) -> None:
        self.settings = settings

        self.win = tk.Tk()
        self.win.title("Sleep Tracker")
        self.win.geometry("640x420")
        self.view = TrackerView(self.win)
        self.view.pack(fill=tk.BOTH, expand=True)

        self.dispatcher = TkDispatcher(self.win)
        self.dispatcher.start()
        self.vm = SleepTrackerVM(
            store,
            scope=TaskScope(self.dispatcher.post),
            time_format=settings.time_format,
            history_limit=settings.history_limit,
            autoload=False,
        )
        self._bind()
        self.vm.initialize()
        self._refresh_buttons()

        self.win.protocol("WM_DELETE_WINDOW", self.on_close)

    def _bind(self) -> None:
        self.view.on_start = self._on_start
        self.view.on_stop = self._on_stop
        self.view.on_clear = self._on_clear
        self.vm.on_tonight_changed = self._on_tonight_changed
        self.vm.on_history_changed = self._on_history_changed
        self.vm.on_navigate_to_quality = self._on_navigate_to_quality
        self.vm.on_notice = self._on_notice
        self.vm.on_error = self._on_error

    # ---- View -> VM ----
    def _on_start(self) -> None:
        self.vm.start_tracking()
        self._refresh_buttons()

    def _on_stop(self) -> None:
        self.vm.stop_tracking()
        self._refresh_buttons()

    def _on_clear(self) -> None:
        if not messagebox.askyesno("Clear history", "Delete every recorded night?", parent=self.win):
            return
        self.vm.clear_history()

    # ---- VM -> View ----
    def _on_tonight_changed(self, night: Optional[SleepNight]) -> None:
        self.view.set_tonight(format_tonight(night, time_format=self.settings.time_format))
        self._refresh_buttons()

    def _on_history_changed(self, lines: List[str]) -> None:
        self.view.set_history(lines)
        self._refresh_buttons()

    def _on_navigate_to_quality(self, night: SleepNight) -> None:
        # the quality screen lives elsewhere; only announce the finished night
        self.view.show_status(f"Night #{night.night_id} saved. It can now be rated.")
        self.vm.acknowledge_navigation()

    def _on_notice(self, message: str) -> None:
        self.view.show_status(message)
        self.vm.acknowledge_notice()

    def _on_error(self, err: UseCaseError) -> None:
        self.view.show_status(f"{err.message} [{err.code}]")
        self.vm.acknowledge_error()
        self._refresh_buttons()

    def _refresh_buttons(self) -> None:
        self.view.set_buttons(
            start=self.vm.start_enabled,
            stop=self.vm.stop_enabled,
            clear=self.vm.clear_enabled,
        )

    def on_close(self) -> None:
        self.vm.close()
        self.dispatcher.stop()
        try:
            self.settings.cmd_save()
        except OSError as exc:
            _log.warning("Could not save settings: %s", exc)
        self.win.destroy()

    def run(self) -> None:
        self.win.mainloop()


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging_utils.configure_root()
    args = parse_args(argv)
    storage = StorageLocal(root_dir=args.settings_dir)
    settings = load_settings(storage)
    database_url = args.db or settings.database_url
    level = logging_utils.apply_preferences(settings.debug_logging)
    _log.debug("Log level %s, database %s", logging.getLevelName(level), database_url)
    try:
        store = build_store(database_url)
    except StoreFailure as exc:
        _log.error("Cannot open sleep database %s: %s", database_url, exc)
        return 1
    App(settings, store).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

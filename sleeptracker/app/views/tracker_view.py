"""Tracker view: start/stop/clear buttons, tonight status and history list.

The view renders state pushed by the app layer and forwards button clicks
through the ``on_*`` callbacks. It holds no tracking logic.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, List, Optional


class TrackerView(ttk.Frame):
    def __init__(self, parent, **kwargs):
        super().__init__(parent, **kwargs)

        toolbar = ttk.Frame(self)
        toolbar.pack(side=tk.TOP, fill=tk.X, padx=6, pady=6)

        self.btn_start = ttk.Button(toolbar, text="Start", command=self._on_start_click)
        self.btn_stop = ttk.Button(toolbar, text="Stop", command=self._on_stop_click, state="disabled")
        self.btn_clear = ttk.Button(toolbar, text="Clear", command=self._on_clear_click, state="disabled")
        self.btn_start.pack(side=tk.LEFT, padx=(0, 6))
        self.btn_stop.pack(side=tk.LEFT, padx=(0, 6))
        self.btn_clear.pack(side=tk.LEFT)

        self.tonight_var = tk.StringVar(value="Not tracking")
        ttk.Label(self, textvariable=self.tonight_var).pack(side=tk.TOP, anchor=tk.W, padx=6)

        body = ttk.Frame(self)
        body.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=6, pady=6)
        self.history = tk.Listbox(body, height=14, activestyle="none")
        vsb = ttk.Scrollbar(body, orient="vertical", command=self.history.yview)
        self.history.configure(yscrollcommand=vsb.set)
        self.history.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        vsb.pack(side=tk.RIGHT, fill=tk.Y)

        self.status_var = tk.StringVar(value="")
        ttk.Label(self, textvariable=self.status_var, foreground="#45556c").pack(
            side=tk.BOTTOM, anchor=tk.W, padx=6, pady=(0, 6)
        )

        self.on_start: Optional[Callable[[], None]] = None
        self.on_stop: Optional[Callable[[], None]] = None
        self.on_clear: Optional[Callable[[], None]] = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def set_buttons(self, *, start: bool, stop: bool, clear: bool) -> None:
        self.btn_start.configure(state="normal" if start else "disabled")
        self.btn_stop.configure(state="normal" if stop else "disabled")
        self.btn_clear.configure(state="normal" if clear else "disabled")

    def set_tonight(self, text: str) -> None:
        self.tonight_var.set(text)

    def set_history(self, lines: List[str]) -> None:
        self.history.delete(0, tk.END)
        for line in lines:
            self.history.insert(tk.END, line)

    def show_status(self, message: str) -> None:
        self.status_var.set(message)

    # ------------------------------------------------------------------
    def _on_start_click(self) -> None:
        if self.on_start:
            self.on_start()

    def _on_stop_click(self) -> None:
        if self.on_stop:
            self.on_stop()

    def _on_clear_click(self) -> None:
        if self.on_clear:
            self.on_clear()


__all__ = ["TrackerView"]

"""Sleep tracker desktop application (Tkinter MVVM)."""

__version__ = "0.1.0"

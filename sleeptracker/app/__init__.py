"""Application composition layer for the Tkinter GUI.

Modules in this package wire views, view models, adapters and use cases into
the runnable tracker window and own the worker/UI-thread hand-off.
"""

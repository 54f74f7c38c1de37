"""ViewModel package for UI state and command surfaces.

Call context:
    ``sleeptracker/app/main.py`` imports concrete viewmodels from this package
    to bind view callbacks to state transitions.

Dependencies:
    Modules in this package depend on domain types, use cases and formatting
    helpers. Storage adapters are injected, never constructed here.
"""

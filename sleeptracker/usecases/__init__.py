"""Use-case callables that wrap session-store access.

Each use case runs on the task-scope worker thread and converts any store
failure into a :class:`~sleeptracker.domain.errors.UseCaseError`.
"""

from .clear_nights import ClearNights
from .list_nights import ListNights
from .load_tonight import LoadTonight
from .start_night import StartNight
from .stop_night import StopNight

__all__ = ["ClearNights", "ListNights", "LoadTonight", "StartNight", "StopNight"]

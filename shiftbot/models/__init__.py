# Shared Models
"""
Pydantic models for shifts and change events.
"""

from shiftbot.models.events import ChangeEvent, ChangeState
from shiftbot.models.shift import CachedShift, Location, Shift

__all__ = [
    "CachedShift",
    "ChangeEvent",
    "ChangeState",
    "Location",
    "Shift",
]

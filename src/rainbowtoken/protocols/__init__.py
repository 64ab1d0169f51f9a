"""Protocol definitions for ledger events and their observers."""

from .events import GameEvent
from .observers import GameObserver

__all__ = [
    # Events
    "GameEvent",
    # Observers
    "GameObserver",
]

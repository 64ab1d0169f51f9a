"""Generic helpers for Pydantic models: JSON persistence and observer management."""

from rainbowtoken.model_manager.observer import ObserverManager
from rainbowtoken.model_manager.persistence import PydanticPersistence

__all__ = [
    "ObserverManager",
    "PydanticPersistence",
]

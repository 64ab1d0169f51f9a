"""CLI commands for rainbowtoken."""

from .config import config
from .game import blend, claim, deploy, events, join, self_blend, set_price, show

__all__ = ["blend", "claim", "config", "deploy", "events", "join", "self_blend", "set_price", "show"]

"""Game ledger and its color sources."""

from .ledger import ENTRY_FEE, SELF_BLEND_PRICE, GameLedger
from .randomness import ColorSource, HashColorSource, RandomColorSource, ScriptedColorSource

__all__ = [
    "ENTRY_FEE",
    "SELF_BLEND_PRICE",
    "ColorSource",
    "GameLedger",
    "HashColorSource",
    "RandomColorSource",
    "ScriptedColorSource",
]

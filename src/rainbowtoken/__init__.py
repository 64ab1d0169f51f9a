"""Rainbow Token: a color blending race for a shared pool."""

__version__ = "0.1.0"

from .core import ENTRY_FEE, SELF_BLEND_PRICE, GameLedger
from .models import Color, Player, Receipt

__all__ = [
    "ENTRY_FEE",
    "SELF_BLEND_PRICE",
    "Color",
    "GameLedger",
    "Player",
    "Receipt",
]

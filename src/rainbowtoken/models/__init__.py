"""Data models for the game ledger."""

from .color import (
    DEFAULT_TARGET_MARGIN,
    PRIMARY_CHANNEL_VALUES,
    Color,
    is_valid_target_channel,
    validate_target_color,
)
from .config import WEI_PER_ETHER, GameConfig
from .events import (
    Blended,
    BlendingPriceUpdated,
    GameOver,
    LedgerEvent,
    PlayerJoined,
    Receipt,
    SelfBlended,
)
from .player import Player
from .snapshot import GamePhase, LedgerSnapshot

__all__ = [
    # Models
    "Color",
    "GameConfig",
    "LedgerSnapshot",
    "Player",
    "Receipt",
    # Events
    "Blended",
    "BlendingPriceUpdated",
    "GameOver",
    "LedgerEvent",
    "PlayerJoined",
    "SelfBlended",
    # Enums
    "GamePhase",
    # Color rules
    "DEFAULT_TARGET_MARGIN",
    "PRIMARY_CHANNEL_VALUES",
    "WEI_PER_ETHER",
    "is_valid_target_channel",
    "validate_target_color",
]

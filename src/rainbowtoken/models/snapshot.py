"""Serializable image of a whole ledger."""

from enum import Enum

from pydantic import BaseModel, Field

from .color import DEFAULT_TARGET_MARGIN, Color
from .events import LedgerEvent
from .player import Player


class GamePhase(Enum):
    """Macro-state of a game."""

    OPEN = "open"  # Players may join, reprice and blend
    OVER = "over"  # The pool was claimed


class LedgerSnapshot(BaseModel):
    """Everything needed to rebuild a ledger exactly."""

    target_color: Color
    target_margin: int = DEFAULT_TARGET_MARGIN
    entry_fee: int = Field(gt=0)
    self_blend_price: int = Field(gt=0)
    players: dict[str, Player] = Field(default_factory=dict)
    balance: int = Field(default=0, ge=0)
    total_received: int = Field(default=0, ge=0)
    total_paid_out: int = Field(default=0, ge=0)
    phase: GamePhase = GamePhase.OPEN
    winner: str | None = None
    block: int = Field(default=0, ge=0)
    payouts: dict[str, int] = Field(default_factory=dict)
    events: list[LedgerEvent] = Field(default_factory=list)
    seed: str | None = Field(default=None, description="Seed of the hash color source, if any")

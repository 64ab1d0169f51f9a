"""Event records emitted by the ledger and transaction receipts."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from rainbowtoken.protocols import GameEvent

from .color import Color


class _EventRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    @property
    def event(self) -> GameEvent:
        """The event type of this record."""
        return GameEvent(self.kind)


class PlayerJoined(_EventRecord):
    """An account joined and was assigned its original color."""

    kind: Literal["player_joined"] = "player_joined"
    account: str
    original_color: Color


class BlendingPriceUpdated(_EventRecord):
    """A player changed the fee others pay to blend against it."""

    kind: Literal["blending_price_updated"] = "blending_price_updated"
    account: str
    blending_price: int


class SelfBlended(_EventRecord):
    """A player blended its color with its original color."""

    kind: Literal["self_blended"] = "self_blended"
    account: str
    color: Color


class Blended(_EventRecord):
    """A player blended against another player's current color."""

    kind: Literal["blended"] = "blended"
    account: str
    blending_account: str
    color: Color
    blending_color: Color


class GameOver(_EventRecord):
    """The pool was paid out to the winner."""

    kind: Literal["game_over"] = "game_over"
    winner: str
    amount: int


LedgerEvent = Annotated[
    Union[PlayerJoined, BlendingPriceUpdated, SelfBlended, Blended, GameOver],
    Field(discriminator="kind"),
]


class Receipt(BaseModel):
    """Outcome of one successful transaction."""

    model_config = ConfigDict(frozen=True)

    sender: str
    value: int = 0
    block: int = Field(description="Sequence number of the transaction")
    events: tuple[LedgerEvent, ...] = ()

    def find(self, event: GameEvent) -> LedgerEvent | None:
        """Return the first emitted record of the given event type, if any."""
        for record in self.events:
            if record.kind == event.value:
                return record
        return None

"""Player record held by the ledger."""

from pydantic import BaseModel, Field

from .color import Color


class Player(BaseModel):
    """A joined account's game state."""

    original_color: Color = Field(default_factory=Color.black, description="Color drawn at join")
    color: Color = Field(default_factory=Color.black, description="Current color")
    blending_price: int = Field(default=0, ge=0, description="Fee to blend against this player (wei)")

    @classmethod
    def joined(cls, original_color: Color, blending_price: int) -> "Player":
        """Create the record of a player that just joined."""
        return cls(
            original_color=original_color,
            color=original_color,
            blending_price=blending_price,
        )

    @classmethod
    def empty(cls) -> "Player":
        """The zero record, read for accounts that never joined."""
        return cls()

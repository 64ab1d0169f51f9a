"""Domain events for observer pattern.

One event per successful state-changing ledger call.
"""

from enum import Enum


class GameEvent(Enum):
    """Events emitted by the game ledger."""

    PLAYER_JOINED = "player_joined"                    # Account joined, original color drawn
    BLENDING_PRICE_UPDATED = "blending_price_updated"  # Player changed its blending price
    SELF_BLENDED = "self_blended"                      # Player blended with its original color
    BLENDED = "blended"                                # Player blended against another player
    GAME_OVER = "game_over"                            # Pool paid out to the winner

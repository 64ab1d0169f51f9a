"""Ledger rejections.

Every rejection raised by the game ledger is a GameError. Besides the usual
user/technical messages, each one exposes a `signature`: a deterministic
rendering of the error name and its parameters, e.g.
`SenderNotAPlayer("0xabc")` or `ColorNotMatching([128, 0, 0], [255, 0, 0])`,
so that callers can match a failure exactly instead of parsing prose.
"""

from typing import TYPE_CHECKING, Optional

from .base import RainbowTokenError

if TYPE_CHECKING:
    from rainbowtoken.models import Color


def _render_color(color: "Color") -> str:
    r, g, b = color.to_rgb_tuple()
    return f"[{r}, {g}, {b}]"


class GameError(RainbowTokenError):
    """A transaction was rejected by the ledger. No state was changed."""

    def __init__(self, signature: str, user_message: str, **kwargs):
        kwargs.setdefault("technical_message", f"Transaction reverted: {signature}")
        kwargs.setdefault("recoverable", True)
        super().__init__(user_message, **kwargs)
        self.signature = signature


class InvalidTargetColor(GameError):
    """The target color given at construction is not acceptable."""

    def __init__(self, r: int, g: int, b: int):
        super().__init__(
            f"InvalidTargetColor({r}, {g}, {b})",
            f"Invalid target color ({r}, {g}, {b})",
            recoverable=False,
            recovery_hint="Pick channels away from the 0 and 255 extremes (see target_margin)",
        )
        self.r = r
        self.g = g
        self.b = b


class SenderNotAPlayer(GameError):
    """The sending account has not joined the game."""

    def __init__(self, account: str):
        super().__init__(
            f'SenderNotAPlayer("{account}")',
            f"Account '{account}' is not a player",
            recovery_hint="Join the game first",
        )
        self.account = account


class BlendingAccountNotAPlayer(GameError):
    """The counterparty of a blend has not joined the game."""

    def __init__(self, account: str):
        super().__init__(
            f'BlendingAccountNotAPlayer("{account}")',
            f"Blending account '{account}' is not a player",
        )
        self.account = account


class SenderAlreadyPlayer(GameError):
    """The sending account has already joined the game."""

    def __init__(self, account: str):
        super().__init__(
            f'SenderAlreadyPlayer("{account}")',
            f"Account '{account}' has already joined the game",
        )
        self.account = account


class InsufficientValue(GameError):
    """The value attached to the transaction is below the required amount."""

    def __init__(self, value_sent: int, required: Optional[int] = None):
        technical = f"Transaction reverted: InsufficientValue({value_sent})"
        hint = None
        if required is not None:
            technical += f" (required {required})"
            hint = f"Send at least {required} wei"
        super().__init__(
            f"InsufficientValue({value_sent})",
            f"Insufficient value sent: {value_sent} wei",
            technical_message=technical,
            recovery_hint=hint,
        )
        self.value_sent = value_sent
        self.required = required


class InvalidZeroBlendingPrice(GameError):
    """A player tried to set its blending price to zero."""

    def __init__(self):
        super().__init__(
            "InvalidZeroBlendingPrice()",
            "Blending price must be strictly positive",
        )


class ColorNotMatching(GameError):
    """The expected counterparty color differs from its current color."""

    def __init__(self, given: "Color", actual: "Color"):
        super().__init__(
            f"ColorNotMatching({_render_color(given)}, {_render_color(actual)})",
            f"Blending color {_render_color(given)} does not match current color {_render_color(actual)}",
            recovery_hint="Read the counterparty's color again and resubmit",
        )
        self.given = given
        self.actual = actual


class PlayerNotWinner(GameError):
    """The claimant's color is not exactly the target color."""

    def __init__(self, account: str):
        super().__init__(
            f'PlayerNotWinner("{account}")',
            f"Account '{account}' does not hold the target color",
        )
        self.account = account


class GameIsOver(GameError):
    """A mutating call was submitted after the pool was claimed."""

    def __init__(self, winner: Optional[str]):
        super().__init__(
            f'GameIsOver("{winner}")',
            f"The game is over, won by '{winner}'",
            recoverable=False,
        )
        self.winner = winner


class LedgerInvariantError(RainbowTokenError):
    """Ledger bookkeeping is inconsistent. Indicates a bug, never a user error."""

    def __init__(self, detail: str):
        super().__init__(
            "Ledger state is inconsistent",
            technical_message=f"Ledger invariant violated: {detail}",
        )
        self.detail = detail


class ColorSourceExhaustedError(RainbowTokenError):
    """A scripted color source ran out of colors."""

    def __init__(self, drawn: int):
        super().__init__(
            "No more colors available from the color source",
            technical_message=f"Scripted color source exhausted after {drawn} draws",
        )
        self.drawn = drawn

"""Root of every error raised by the game ledger, its store and the CLI.

Two families hang off RainbowTokenError: ledger rejections (GameError,
recoverable by resubmitting with other input, never a state change) and
failures around the ledger (bad game or config files, broken bookkeeping).
The CLI shows `user_message` and `recovery_hint`; logs get
`technical_message`, which for a rejection carries its exact signature.
"""

from typing import Optional


class RainbowTokenError(Exception):
    """
    Base exception for all RainbowToken errors.

    Attributes:
        user_message: Message printed by the CLI, e.g. "Account 'bob' is not a player"
        technical_message: Message for the log, e.g. 'Transaction reverted: SenderNotAPlayer("bob")'
        recoverable: True when the same call can succeed with other input
            (more value, a fresh color read), False for broken state or a finished game
        recovery_hint: What to do next, e.g. "Join the game first"
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
        *args,
        **kwargs
    ):
        super().__init__(user_message, *args, **kwargs)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """User message followed by the recovery hint, if any."""
        msg = self.user_message
        if self.recovery_hint:
            msg += f"\n\nSuggestion: {self.recovery_hint}"
        return msg

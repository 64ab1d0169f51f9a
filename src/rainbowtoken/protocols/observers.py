"""Observer protocol definitions for ledger events."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from rainbowtoken.models.events import LedgerEvent

from .events import GameEvent


@runtime_checkable
class GameObserver(Protocol):
    """
    Observer that receives ledger events.

    This protocol allows loose coupling between the ledger and whatever
    reacts to committed transactions (loggers, bots, displays, tests).
    """

    def on_game_event(self, event: GameEvent, record: "LedgerEvent") -> None:
        """
        Handle a committed ledger event.

        Args:
            event: The type of ledger event
            record: The emitted event record (PlayerJoined, Blended, ...)

        Threading:
            Called after the ledger lock is released, from the thread that
            submitted the transaction. Observers may read the ledger.

        Error Handling:
            Exceptions raised by observers are caught and logged. They do not
            propagate to the caller and never undo the transaction.
        """
        ...

"""Services around the game ledger."""

from rainbowtoken.services.ledger_store import LedgerStore

__all__ = [
    "LedgerStore",
]

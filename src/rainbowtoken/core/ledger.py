"""The game ledger: registration, color blending, fees and the win condition."""

import functools
import logging
from collections.abc import Callable
from threading import Lock

from rainbowtoken.exceptions import (
    BlendingAccountNotAPlayer,
    ColorNotMatching,
    GameError,
    GameIsOver,
    InsufficientValue,
    InvalidZeroBlendingPrice,
    LedgerInvariantError,
    PlayerNotWinner,
    SenderAlreadyPlayer,
    SenderNotAPlayer,
)
from rainbowtoken.model_manager import ObserverManager
from rainbowtoken.models import (
    DEFAULT_TARGET_MARGIN,
    WEI_PER_ETHER,
    Blended,
    BlendingPriceUpdated,
    Color,
    GameOver,
    GamePhase,
    LedgerEvent,
    LedgerSnapshot,
    Player,
    PlayerJoined,
    Receipt,
    SelfBlended,
    validate_target_color,
)
from rainbowtoken.protocols import GameObserver

from .randomness import ColorSource, HashColorSource

logger = logging.getLogger(__name__)

ENTRY_FEE = WEI_PER_ETHER // 10
SELF_BLEND_PRICE = 5 * ENTRY_FEE


def _as_color(color: Color | tuple[int, int, int]) -> Color:
    return color if isinstance(color, Color) else Color.from_rgb_tuple(color)


def _require_non_negative(name: str, amount: int) -> None:
    if amount < 0:
        raise ValueError(f"{name} must be a non-negative amount of wei, got {amount}")


def _transaction(method: Callable[..., Receipt]) -> Callable[..., Receipt]:
    """Run a ledger entry point as one serialized, all-or-nothing transaction.

    The wrapped method validates everything before calling `_commit`, so a
    raised error leaves the ledger untouched. Observers are notified only
    after the lock is released.
    """

    @functools.wraps(method)
    def wrapper(self: "GameLedger", sender: str, *args, **kwargs) -> Receipt:
        try:
            with self._lock:
                if self._phase is GamePhase.OVER:
                    raise GameIsOver(self._winner)
                receipt = method(self, sender, *args, **kwargs)
        except GameError as e:
            logger.info(f"{method.__name__} from {sender} rejected: {e.signature}")
            raise

        for record in receipt.events:
            self._observers.notify("on_game_event", record.event, record)
        return receipt

    return wrapper


class GameLedger:
    """
    Single shared state object of a game.

    Holds the player registry and the pool, and exposes the five
    state-changing entry points (join, update_blending_price, self_blend,
    blend, claim_victory) plus read accessors. Each entry point is identified
    by its sender account and, when payable, the attached value in wei.

    Entry points are serialized by an internal lock. Every precondition is
    checked against committed state before anything is written; a failing
    call raises a GameError and changes nothing.

    Example:
        ```python
        ledger = GameLedger((127, 127, 127))
        ledger.join("alice", value=ENTRY_FEE)
        ledger.join("bob", value=ENTRY_FEE)
        bob = ledger.get_player("bob")
        ledger.blend("alice", "bob", bob.color, value=bob.blending_price)
        ```
    """

    def __init__(
        self,
        target_color: Color | tuple[int, int, int],
        *,
        entry_fee: int = ENTRY_FEE,
        self_blend_price: int = SELF_BLEND_PRICE,
        color_source: ColorSource | None = None,
        target_margin: int = DEFAULT_TARGET_MARGIN,
    ) -> None:
        """
        Deploy a new game.

        Args:
            target_color: Color players race to reach
            entry_fee: Fee to join, also the initial blending price of every player
            self_blend_price: Fee to blend with one's own original color
            color_source: Source of original colors (defaults to a HashColorSource)
            target_margin: Minimum distance of target channels from 0 and 255

        Raises:
            InvalidTargetColor: If the target color is rejected
            ValueError: If a fee is not strictly positive or the margin is not
                between 0 and 127
        """
        if not 0 <= target_margin <= 127:
            raise ValueError(f"target_margin must be between 0 and 127, got {target_margin}")
        rgb = target_color.to_rgb_tuple() if isinstance(target_color, Color) else tuple(target_color)
        self._target_color = validate_target_color(*rgb, margin=target_margin)
        if entry_fee <= 0 or self_blend_price <= 0:
            raise ValueError("entry_fee and self_blend_price must be strictly positive")

        self._target_margin = target_margin
        self._entry_fee = entry_fee
        self._self_blend_price = self_blend_price
        self._color_source: ColorSource = color_source or HashColorSource()

        self._lock = Lock()
        self._observers = ObserverManager[GameObserver](observer_type_name="game")

        self._players: dict[str, Player] = {}
        self._balance = 0
        self._total_received = 0
        self._total_paid_out = 0
        self._phase = GamePhase.OPEN
        self._winner: str | None = None
        self._block = 0
        self._payouts: dict[str, int] = {}
        self._events: list[LedgerEvent] = []

        logger.info(
            f"Game deployed: target={self._target_color}, entry_fee={entry_fee}, "
            f"self_blend_price={self_blend_price}"
        )

    # Observers

    def register_observer(self, observer: GameObserver) -> None:
        """Register an observer notified of every committed event."""
        self._observers.register(observer)

    def unregister_observer(self, observer: GameObserver) -> None:
        """Unregister an observer."""
        self._observers.unregister(observer)

    # Entry points

    @_transaction
    def join(self, sender: str, value: int = 0) -> Receipt:
        """
        Join the game, paying at least the entry fee.

        Raises:
            SenderAlreadyPlayer: If the sender already joined
            InsufficientValue: If value is below the entry fee
        """
        _require_non_negative("value", value)
        if sender in self._players:
            raise SenderAlreadyPlayer(sender)
        if value < self._entry_fee:
            raise InsufficientValue(value, required=self._entry_fee)

        original_color = self._color_source.draw(sender, len(self._players))
        if not original_color.is_primary:
            raise ValueError(f"Color source returned a non-primary color {original_color}")

        player = Player.joined(original_color, self._entry_fee)
        return self._commit(
            sender,
            value,
            PlayerJoined(account=sender, original_color=original_color),
            updates={sender: player},
        )

    @_transaction
    def update_blending_price(self, sender: str, price: int) -> Receipt:
        """
        Set the fee other players pay to blend against the sender.

        Raises:
            SenderNotAPlayer: If the sender has not joined
            InvalidZeroBlendingPrice: If price is zero
        """
        _require_non_negative("price", price)
        player = self._require_player(sender)
        if price == 0:
            raise InvalidZeroBlendingPrice()

        return self._commit(
            sender,
            0,
            BlendingPriceUpdated(account=sender, blending_price=price),
            updates={sender: player.model_copy(update={"blending_price": price})},
        )

    @_transaction
    def self_blend(self, sender: str, value: int = 0) -> Receipt:
        """
        Blend the sender's current color with its original color.

        Raises:
            SenderNotAPlayer: If the sender has not joined
            InsufficientValue: If value is below the self-blend price
        """
        _require_non_negative("value", value)
        player = self._require_player(sender)
        if value < self._self_blend_price:
            raise InsufficientValue(value, required=self._self_blend_price)

        color = player.color.blend(player.original_color)
        return self._commit(
            sender,
            value,
            SelfBlended(account=sender, color=color),
            updates={sender: player.model_copy(update={"color": color})},
        )

    @_transaction
    def blend(
        self,
        sender: str,
        blending_account: str,
        blending_color: Color | tuple[int, int, int],
        value: int = 0,
    ) -> Receipt:
        """
        Blend the counterparty's current color with the sender's original color.

        `blending_color` is the color the sender expects the counterparty to
        hold. It is compared with the counterparty's color at execution time
        so that a blend never runs against a color changed in the meantime.
        The fee goes to the pool, not to the counterparty.

        Raises:
            SenderNotAPlayer: If the sender has not joined
            BlendingAccountNotAPlayer: If the counterparty has not joined
            InsufficientValue: If value is below the counterparty's blending price
            ColorNotMatching: If blending_color is not the counterparty's current color
        """
        _require_non_negative("value", value)
        expected = _as_color(blending_color)
        player = self._require_player(sender)
        counterparty = self._players.get(blending_account)
        if counterparty is None:
            raise BlendingAccountNotAPlayer(blending_account)
        if value < counterparty.blending_price:
            raise InsufficientValue(value, required=counterparty.blending_price)
        if expected != counterparty.color:
            raise ColorNotMatching(expected, counterparty.color)

        color = counterparty.color.blend(player.original_color)
        return self._commit(
            sender,
            value,
            Blended(
                account=sender,
                blending_account=blending_account,
                color=color,
                blending_color=counterparty.color,
            ),
            updates={sender: player.model_copy(update={"color": color})},
        )

    @_transaction
    def claim_victory(self, sender: str) -> Receipt:
        """
        Claim the whole pool. Ends the game.

        Raises:
            SenderNotAPlayer: If the sender has not joined
            PlayerNotWinner: If the sender's color is not exactly the target color
        """
        player = self._require_player(sender)
        if player.color != self._target_color:
            raise PlayerNotWinner(sender)

        amount = self._balance
        receipt = self._commit(sender, 0, GameOver(winner=sender, amount=amount), payout=amount)
        self._phase = GamePhase.OVER
        self._winner = sender
        logger.info(f"Game over: {sender} won {amount} wei")
        return receipt

    # Read accessors

    def get_target_color(self) -> Color:
        return self._target_color

    def get_player(self, account: str) -> Player:
        """
        Get a copy of an account's record.

        Accounts that never joined read as the zero record (black colors,
        zero blending price); use is_player() to tell them apart.
        """
        with self._lock:
            player = self._players.get(account)
            return player.model_copy() if player else Player.empty()

    def is_player(self, account: str) -> bool:
        with self._lock:
            return account in self._players

    @property
    def players(self) -> tuple[str, ...]:
        """Joined accounts, in join order."""
        with self._lock:
            return tuple(self._players)

    @property
    def balance(self) -> int:
        """Current pool, in wei."""
        return self._balance

    @property
    def total_received(self) -> int:
        return self._total_received

    @property
    def total_paid_out(self) -> int:
        return self._total_paid_out

    @property
    def entry_fee(self) -> int:
        return self._entry_fee

    @property
    def self_blend_price(self) -> int:
        return self._self_blend_price

    @property
    def target_margin(self) -> int:
        return self._target_margin

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def is_over(self) -> bool:
        return self._phase is GamePhase.OVER

    @property
    def winner(self) -> str | None:
        return self._winner

    @property
    def block(self) -> int:
        """Number of committed transactions."""
        return self._block

    @property
    def events(self) -> tuple[LedgerEvent, ...]:
        """Every event emitted so far, oldest first."""
        with self._lock:
            return tuple(self._events)

    @property
    def color_source(self) -> ColorSource:
        return self._color_source

    def payout_of(self, account: str) -> int:
        """Amount paid out to an account (the winner's prize, 0 for anyone else)."""
        with self._lock:
            return self._payouts.get(account, 0)

    def check_invariants(self) -> None:
        """
        Verify the ledger's bookkeeping.

        Raises:
            LedgerInvariantError: If the pool does not match what was received
                minus what was paid out, or another structural rule is broken
        """
        with self._lock:
            if self._balance != self._total_received - self._total_paid_out:
                raise LedgerInvariantError(
                    f"balance {self._balance} != received {self._total_received} "
                    f"- paid out {self._total_paid_out}"
                )
            if sum(self._payouts.values()) != self._total_paid_out:
                raise LedgerInvariantError("payouts do not add up to total paid out")
            if (self._phase is GamePhase.OVER) != (self._winner is not None):
                raise LedgerInvariantError(f"phase {self._phase.value} with winner {self._winner}")
            if self._phase is GamePhase.OVER and self._balance != 0:
                raise LedgerInvariantError(f"game over with {self._balance} wei left in the pool")
            for account, player in self._players.items():
                if not player.original_color.is_primary:
                    raise LedgerInvariantError(f"{account} has a non-primary original color")
                if player.blending_price <= 0:
                    raise LedgerInvariantError(f"{account} has a zero blending price")

    # Persistence

    def to_snapshot(self) -> LedgerSnapshot:
        """Capture the full ledger state."""
        with self._lock:
            seed = self._color_source.seed if isinstance(self._color_source, HashColorSource) else None
            return LedgerSnapshot(
                target_color=self._target_color,
                target_margin=self._target_margin,
                entry_fee=self._entry_fee,
                self_blend_price=self._self_blend_price,
                players={account: p.model_copy() for account, p in self._players.items()},
                balance=self._balance,
                total_received=self._total_received,
                total_paid_out=self._total_paid_out,
                phase=self._phase,
                winner=self._winner,
                block=self._block,
                payouts=dict(self._payouts),
                events=list(self._events),
                seed=seed,
            )

    @classmethod
    def from_snapshot(
        cls, snapshot: LedgerSnapshot, color_source: ColorSource | None = None
    ) -> "GameLedger":
        """
        Rebuild a ledger from a snapshot.

        Args:
            snapshot: Previously captured state
            color_source: Source for future joins. Defaults to a HashColorSource
                using the snapshot's seed.

        Raises:
            LedgerInvariantError: If the snapshot's bookkeeping is inconsistent
        """
        ledger = cls(
            snapshot.target_color,
            entry_fee=snapshot.entry_fee,
            self_blend_price=snapshot.self_blend_price,
            color_source=color_source or HashColorSource(snapshot.seed),
            target_margin=snapshot.target_margin,
        )
        ledger._players = {account: p.model_copy() for account, p in snapshot.players.items()}
        ledger._balance = snapshot.balance
        ledger._total_received = snapshot.total_received
        ledger._total_paid_out = snapshot.total_paid_out
        ledger._phase = snapshot.phase
        ledger._winner = snapshot.winner
        ledger._block = snapshot.block
        ledger._payouts = dict(snapshot.payouts)
        ledger._events = list(snapshot.events)
        ledger.check_invariants()
        return ledger

    # Internals

    def _require_player(self, account: str) -> Player:
        player = self._players.get(account)
        if player is None:
            raise SenderNotAPlayer(account)
        return player

    def _commit(
        self,
        sender: str,
        value: int,
        record: LedgerEvent,
        updates: dict[str, Player] | None = None,
        payout: int = 0,
    ) -> Receipt:
        """Apply a fully validated transaction. Must hold the lock; must not fail."""
        if updates:
            self._players.update(updates)
        self._balance += value - payout
        self._total_received += value
        if payout:
            self._total_paid_out += payout
            self._payouts[sender] = self._payouts.get(sender, 0) + payout
        self._block += 1
        self._events.append(record)

        logger.info(f"Block {self._block}: {record.kind} from {sender} (value={value}, pool={self._balance})")
        return Receipt(sender=sender, value=value, block=self._block, events=(record,))

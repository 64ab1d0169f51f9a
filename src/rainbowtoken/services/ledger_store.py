"""Service for keeping a deployed game in a JSON file between invocations."""

import fcntl
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from rainbowtoken.core import ColorSource, GameLedger, HashColorSource
from rainbowtoken.exceptions import GameAlreadyDeployedError, GameNotDeployedError
from rainbowtoken.model_manager import PydanticPersistence
from rainbowtoken.models import Color, GameConfig, LedgerSnapshot

logger = logging.getLogger(__name__)


class LedgerStore:
    """
    Handles deploying, loading and saving a game ledger.

    The store keeps no ledger in memory: every call reads or writes the
    state file, so each command line invocation sees the last committed
    state. Use transaction() to load, act and save in one step.

    Writers are serialized with an exclusive POSIX lock on a `<state>.lock`
    file next to the game file, so overlapping invocations (threads or
    processes) each see the state the previous one committed. The lock is
    not reentrant: do not open a transaction inside another one.
    """

    def __init__(self, path: Path, color_source: ColorSource | None = None):
        """
        Initialize the store.

        Args:
            path: JSON file holding the ledger snapshot
            color_source: Source for joins on loaded ledgers (defaults to the
                hash source seeded from the file)
        """
        self.path = path
        self.lock_path = path.with_suffix(path.suffix + ".lock")
        self._color_source = color_source

    @classmethod
    def from_config(cls, config: GameConfig) -> "LedgerStore":
        """Create a store for the state file named in the configuration."""
        return cls(config.state_file)

    def exists(self) -> bool:
        return self.path.exists()

    def create(
        self,
        target_color: Color | tuple[int, int, int],
        config: GameConfig | None = None,
        seed: str | None = None,
        force: bool = False,
    ) -> GameLedger:
        """
        Deploy a new game and save it.

        Args:
            target_color: Target color of the new game
            config: Fees and target margin (defaults to GameConfig())
            seed: Seed of the hash color source (random if None)
            force: Replace an existing game file

        Raises:
            GameAlreadyDeployedError: If a game exists and force is False
            InvalidTargetColor: If the target color is rejected
        """
        config = config or GameConfig()
        with self._exclusive_lock():
            if self.exists() and not force:
                raise GameAlreadyDeployedError(self.path)

            ledger = GameLedger(
                target_color,
                entry_fee=config.entry_fee,
                self_blend_price=config.self_blend_price,
                color_source=self._color_source or HashColorSource(seed),
                target_margin=config.target_margin,
            )
            self.save(ledger)
        logger.info(f"Deployed game to {self.path}")
        return ledger

    def load(self) -> GameLedger:
        """
        Load the deployed game.

        Raises:
            GameNotDeployedError: If there is no game file
            ConfigFileInvalidError: If the file is not valid JSON
            ConfigValidationError: If the file does not describe a ledger
            LedgerInvariantError: If the stored bookkeeping is inconsistent
        """
        try:
            snapshot = PydanticPersistence.load_json(self.path, LedgerSnapshot)
        except FileNotFoundError as e:
            raise GameNotDeployedError(self.path) from e
        return GameLedger.from_snapshot(snapshot, color_source=self._color_source)

    def save(self, ledger: GameLedger) -> None:
        """Write the ledger state, keeping a .bak of the previous file."""
        PydanticPersistence.save_json(ledger.to_snapshot(), self.path)

    @contextmanager
    def transaction(self) -> Iterator[GameLedger]:
        """
        Load the ledger, yield it, and save it if the block completes.

        Ledger calls are all-or-nothing on their own; this extends that to
        the file: when the block raises, nothing is written. The store lock
        is held from the load to the save.

        Example:
            ```python
            with store.transaction() as ledger:
                ledger.join("alice", value=ledger.entry_fee)
            ```
        """
        with self._exclusive_lock():
            ledger = self.load()
            yield ledger
            self.save(ledger)

    @contextmanager
    def _exclusive_lock(self) -> Iterator[None]:
        self.lock_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.lock_path, "a") as handle:
            fcntl.flock(handle, fcntl.LOCK_EX)
            logger.debug(f"Acquired store lock {self.lock_path}")
            try:
                yield
            finally:
                fcntl.flock(handle, fcntl.LOCK_UN)

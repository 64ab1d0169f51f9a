"""Sources of original colors for joining players.

The ledger never draws randomness itself; it asks a ColorSource. The
default HashColorSource mimics entropy taken from public transaction data
(a seed, the sender and a counter) and is just as predictable: anyone who
knows the seed can compute the color an account will receive. Swap in
another source when that matters.
"""

import hashlib
import logging
import random
import secrets
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from rainbowtoken.exceptions import ColorSourceExhaustedError
from rainbowtoken.models import PRIMARY_CHANNEL_VALUES, Color

logger = logging.getLogger(__name__)


@runtime_checkable
class ColorSource(Protocol):
    """Provides the primary color assigned to a joining account.

    The ledger draws before committing a join and refuses a non-primary
    result with ValueError. Such a draw is not rolled back in the source, so
    implementations must only ever hand out primary colors.
    """

    def draw(self, account: str, nonce: int) -> Color:
        """
        Draw an original color.

        Args:
            account: The joining account
            nonce: Number of accounts that joined before this one

        Returns:
            A primary color (every channel 0 or 255)
        """
        ...


class HashColorSource:
    """Derives one bit per channel from sha256(seed, account, nonce)."""

    def __init__(self, seed: str | None = None):
        self.seed = seed if seed is not None else secrets.token_hex(16)

    def draw(self, account: str, nonce: int) -> Color:
        digest = hashlib.sha256(f"{self.seed}:{account}:{nonce}".encode()).digest()
        bits = digest[0]
        return Color(
            r=PRIMARY_CHANNEL_VALUES[bits & 1],
            g=PRIMARY_CHANNEL_VALUES[(bits >> 1) & 1],
            b=PRIMARY_CHANNEL_VALUES[(bits >> 2) & 1],
        )

    def __repr__(self) -> str:
        return f"HashColorSource(seed={self.seed!r})"


class RandomColorSource:
    """Draws each channel independently with random.Random."""

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def draw(self, account: str, nonce: int) -> Color:
        return Color(
            r=self._rng.choice(PRIMARY_CHANNEL_VALUES),
            g=self._rng.choice(PRIMARY_CHANNEL_VALUES),
            b=self._rng.choice(PRIMARY_CHANNEL_VALUES),
        )


class ScriptedColorSource:
    """Hands out a predetermined sequence of colors, in order."""

    def __init__(self, colors: Iterable[Color | tuple[int, int, int]]):
        """
        Raises:
            ValueError: If any of the colors is not primary
        """
        self._colors = [
            c if isinstance(c, Color) else Color.from_rgb_tuple(c) for c in colors
        ]
        for color in self._colors:
            if not color.is_primary:
                raise ValueError(f"Scripted colors must be primary, got {color}")
        self._drawn = 0

    @property
    def remaining(self) -> int:
        return len(self._colors) - self._drawn

    def draw(self, account: str, nonce: int) -> Color:
        if self._drawn >= len(self._colors):
            raise ColorSourceExhaustedError(self._drawn)
        color = self._colors[self._drawn]
        self._drawn += 1
        logger.debug(f"Scripted color {color} for {account}")
        return color

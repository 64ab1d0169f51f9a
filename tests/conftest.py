"""Pytest fixtures for tests."""

import pytest

from rainbowtoken.core import ENTRY_FEE, GameLedger, ScriptedColorSource
from rainbowtoken.models import Color

WHITE = Color(r=255, g=255, b=255)
BLACK = Color(r=0, g=0, b=0)
RED = Color(r=255, g=0, b=0)
CYAN = Color(r=0, g=255, b=255)
MAGENTA = Color(r=255, g=0, b=255)

TARGET_COLOR = Color(r=125, g=125, b=125)


@pytest.fixture
def make_ledger():
    """Factory for ledgers whose players receive the given colors, in join order."""

    def _make(*colors: Color, target=TARGET_COLOR, **kwargs) -> GameLedger:
        return GameLedger(target, color_source=ScriptedColorSource(colors), **kwargs)

    return _make


@pytest.fixture
def ledger(make_ledger):
    """Ledger with target (125, 125, 125) and two scripted joiners: red, then cyan."""
    return make_ledger(RED, CYAN)


@pytest.fixture
def two_players(ledger):
    """The ledger fixture with player0 (red) and player1 (cyan) joined."""
    ledger.join("player0", value=ENTRY_FEE)
    ledger.join("player1", value=ENTRY_FEE)
    return ledger


@pytest.fixture
def winnable(make_ledger):
    """Target (127, 127, 127) with a white and a black player joined."""
    game = make_ledger(WHITE, BLACK, target=(127, 127, 127))
    game.join("white", value=ENTRY_FEE)
    game.join("black", value=ENTRY_FEE)
    return game

"""Smoke tests for CLI commands.

Tests that CLI commands parse correctly, submit transactions against a game
file in a temporary directory and report rejections with exit code 1.
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from rainbowtoken.cli.main import cli
from rainbowtoken.core import ENTRY_FEE, ScriptedColorSource
from rainbowtoken.models import GameConfig
from rainbowtoken.services import LedgerStore

from .conftest import BLACK, WHITE


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(runner, tmp_path: Path):
    """Invoke the CLI with state, config and log files inside tmp_path."""

    def _invoke(*args: str):
        return runner.invoke(
            cli,
            [
                "--state", str(tmp_path / "game.json"),
                "--config", str(tmp_path / "config.json"),
                "--log-file", str(tmp_path / "rainbowtoken.log"),
                *args,
            ],
        )

    return _invoke


@pytest.fixture
def winnable_game(tmp_path: Path) -> Path:
    """A saved game with target (127, 127, 127) and a white and a black player."""
    store = LedgerStore(tmp_path / "game.json", color_source=ScriptedColorSource([WHITE, BLACK]))
    store.create((127, 127, 127))
    with store.transaction() as ledger:
        ledger.join("white", value=ENTRY_FEE)
        ledger.join("black", value=ENTRY_FEE)
    return store.path


@pytest.mark.integration
class TestCLIHelp:
    """Test that all commands have working help text."""

    def test_main_help(self, runner):
        """Test main CLI help displays."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Rainbow Token" in result.output
        for command in ("deploy", "join", "set-price", "self-blend", "blend", "claim", "show", "events", "config"):
            assert command in result.output

    def test_version_flag(self, runner):
        """Test --version flag works."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    @pytest.mark.parametrize("command", ["deploy", "join", "blend", "claim", "config"])
    def test_command_help(self, runner, command):
        result = runner.invoke(cli, [command, "--help"])
        assert result.exit_code == 0


@pytest.mark.integration
class TestGameCommands:
    """Test submitting transactions through the CLI."""

    def test_deploy(self, invoke, tmp_path):
        result = invoke("deploy", "125", "125", "125", "--seed", "abc")
        assert result.exit_code == 0, result.output
        assert "Game deployed to" in result.output
        assert "(125, 125, 125)" in result.output
        assert "0.1 ETH" in result.output
        assert (tmp_path / "game.json").exists()

    def test_deploy_invalid_target(self, invoke, tmp_path):
        result = invoke("deploy", "5", "125", "125")
        assert result.exit_code == 1
        assert "InvalidTargetColor(5, 125, 125)" in result.output
        assert not (tmp_path / "game.json").exists()

    def test_deploy_twice_needs_force(self, invoke):
        assert invoke("deploy", "125", "125", "125").exit_code == 0
        result = invoke("deploy", "60", "60", "60")
        assert result.exit_code == 1
        assert "already exists" in result.output

        result = invoke("deploy", "60", "60", "60", "--force")
        assert result.exit_code == 0
        assert "(60, 60, 60)" in result.output

    def test_deploy_with_custom_fees(self, invoke):
        result = invoke("deploy", "125", "125", "125", "--entry-fee", "0.25", "--self-blend-price", "1")
        assert result.exit_code == 0
        assert "Entry fee:        0.25 ETH" in result.output
        assert "Self-blend price: 1 ETH" in result.output

    def test_commands_without_game(self, invoke):
        result = invoke("join", "alice")
        assert result.exit_code == 1
        assert "No game found" in result.output

    def test_game_round(self, invoke):
        assert invoke("deploy", "125", "125", "125", "--seed", "round").exit_code == 0

        result = invoke("join", "alice")
        assert result.exit_code == 0, result.output
        assert "[block 1] alice joined with original color" in result.output
        assert invoke("join", "bob").exit_code == 0

        result = invoke("set-price", "bob", "0.2")
        assert result.exit_code == 0
        assert "bob set its blending price to 0.2 ETH" in result.output

        result = invoke("blend", "alice", "bob")
        assert result.exit_code == 0, result.output
        assert "[block 4] alice blended with bob" in result.output

        result = invoke("self-blend", "bob")
        assert result.exit_code == 0
        assert "[block 5] bob self blended to" in result.output

        result = invoke("show")
        assert result.exit_code == 0
        assert "Pool:         0.9 ETH" in result.output
        assert "Players (2):" in result.output

        result = invoke("events")
        assert result.exit_code == 0
        assert len(result.output.strip().splitlines()) == 5

        # Every reachable channel after one blend is 0, 127 or 255
        result = invoke("claim", "alice")
        assert result.exit_code == 1
        assert 'PlayerNotWinner("alice")' in result.output

    def test_rejections_exit_with_signature(self, invoke):
        invoke("deploy", "125", "125", "125")
        invoke("join", "alice")

        result = invoke("join", "alice")
        assert result.exit_code == 1
        assert 'SenderAlreadyPlayer("alice")' in result.output

        result = invoke("join", "bob", "--value", "0.05")
        assert result.exit_code == 1
        assert f"InsufficientValue({ENTRY_FEE // 2})" in result.output

        result = invoke("set-price", "alice", "0")
        assert result.exit_code == 1
        assert "InvalidZeroBlendingPrice()" in result.output

        result = invoke("blend", "alice", "carol")
        assert result.exit_code == 1
        assert 'BlendingAccountNotAPlayer("carol")' in result.output

    def test_stale_color_is_rejected(self, invoke, winnable_game):
        result = invoke("blend", "white", "black", "--color", "1", "2", "3")
        assert result.exit_code == 1
        assert "ColorNotMatching([1, 2, 3], [0, 0, 0])" in result.output

    def test_invalid_amount(self, invoke, winnable_game):
        result = invoke("set-price", "white", "lots")
        assert result.exit_code == 1
        assert "ERROR:" in result.output

    def test_winning_game(self, invoke, winnable_game):
        result = invoke("blend", "white", "black", "--color", "0", "0", "0")
        assert result.exit_code == 0, result.output
        assert "now holds (127, 127, 127)" in result.output

        result = invoke("claim", "white")
        assert result.exit_code == 0, result.output
        assert "[block 4] white won 0.3 ETH" in result.output

        result = invoke("show")
        assert "over, won by white (0.3 ETH)" in result.output
        assert "Pool:         0 ETH" in result.output

        result = invoke("join", "latecomer")
        assert result.exit_code == 1
        assert 'GameIsOver("white")' in result.output

    def test_show_account(self, invoke, winnable_game):
        result = invoke("show", "white")
        assert result.exit_code == 0
        assert "#FFFFFF" in result.output
        assert "Blending price: 0.1 ETH" in result.output

        result = invoke("show", "nobody")
        assert "nobody is not a player" in result.output


@pytest.mark.integration
class TestConfigCommands:
    """Test the config command group."""

    def test_show_defaults(self, invoke):
        result = invoke("config", "show")
        assert result.exit_code == 0
        assert "entry_fee:        0.1 ETH" in result.output
        assert "target_margin:    10" in result.output

    def test_set_and_use(self, invoke, tmp_path):
        result = invoke("config", "set", "--entry-fee", "0.2", "--target-margin", "0")
        assert result.exit_code == 0, result.output
        assert "Updated entry_fee, target_margin" in result.output

        saved = GameConfig.load_or_default(tmp_path / "config.json")
        assert saved.entry_fee == 2 * ENTRY_FEE
        assert saved.target_margin == 0

        # Zero margin lets a channel sit at the extremes
        result = invoke("deploy", "0", "255", "125")
        assert result.exit_code == 0, result.output
        assert "Entry fee:        0.2 ETH" in result.output

    def test_set_invalid_value(self, invoke, tmp_path):
        result = invoke("config", "set", "--target-margin", "200")
        assert result.exit_code == 1
        assert not (tmp_path / "config.json").exists()

    def test_set_nothing(self, invoke):
        result = invoke("config", "set")
        assert result.exit_code == 0
        assert "Nothing to update" in result.output

    def test_reset(self, invoke, tmp_path):
        invoke("config", "set", "--entry-fee", "0.2")
        result = invoke("config", "reset", "--yes")
        assert result.exit_code == 0
        assert GameConfig.load_or_default(tmp_path / "config.json").entry_fee == ENTRY_FEE

"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from rainbowtoken import __version__

from .commands import blend, claim, config, deploy, events, join, self_blend, set_price, show

logger = logging.getLogger(__name__)


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)
    """
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Override with explicit log level if provided
    if log_file:
        level = getattr(logging, log_level.upper())

    if debug and not log_file:
        log_path = Path.cwd() / "rainbowtoken-debug.log"
    elif log_file:
        log_path = log_file
    else:
        log_dir = Path.home() / ".rainbowtoken" / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / "rainbowtoken.log"

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Keeps last 5 files, max 10MB each
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")


@click.group()
@click.pass_context
@click.version_option(version=__version__, prog_name="rainbowtoken")
@click.option(
    '--state',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Game file to use (default: state_file from the configuration)'
)
@click.option(
    '--config',
    'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Configuration file (default: ~/.rainbowtoken/config.json)'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./rainbowtoken-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
def cli(
    ctx,
    state: Optional[Path],
    config_path: Optional[Path],
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    Rainbow Token - race to blend the target color and win the pool.

    Players pay to join and receive a random primary color. They then pay
    to blend their original color with another player's current color, or
    with their own, until one of them holds the target color exactly and
    claims everything paid so far.

    Every command below submits one transaction to the game stored in the
    state file. Amounts are in ether.

    \b
    Examples:
      # Deploy a game whose target is (127, 127, 127)
      rainbowtoken deploy 127 127 127

      # Two players join (default value: the entry fee)
      rainbowtoken join alice
      rainbowtoken join bob

      # alice blends against bob's current color
      rainbowtoken blend alice bob

      # Inspect the game, then claim
      rainbowtoken show
      rainbowtoken claim alice
    """
    setup_logging(verbose, debug, log_file, log_level)

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["state"] = state


cli.add_command(deploy)
cli.add_command(join)
cli.add_command(set_price)
cli.add_command(self_blend)
cli.add_command(blend)
cli.add_command(claim)
cli.add_command(show)
cli.add_command(events)
cli.add_command(config)

if __name__ == "__main__":
    cli()

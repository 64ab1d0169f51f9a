"""
Config command group.

Commands:
    - config show                         # Display configuration
    - config set --entry-fee 0.2 ...      # Update configuration and save
    - config reset                        # Restore defaults
"""

from pathlib import Path
from typing import Optional

import click

from rainbowtoken.cli.decorators import report_errors
from rainbowtoken.models import GameConfig
from rainbowtoken.models.config import DEFAULT_CONFIG_PATH
from rainbowtoken.utils import format_ether, parse_ether


def _config_path(ctx: click.Context) -> Path:
    ctx.ensure_object(dict)
    return ctx.obj.get("config_path") or DEFAULT_CONFIG_PATH


def _echo_config(config: GameConfig) -> None:
    click.echo(f"entry_fee:        {format_ether(config.entry_fee)} ETH ({config.entry_fee} wei)")
    click.echo(f"self_blend_price: {format_ether(config.self_blend_price)} ETH ({config.self_blend_price} wei)")
    click.echo(f"target_margin:    {config.target_margin}")
    click.echo(f"state_file:       {config.state_file}")


@click.group(name="config")
def config():
    """Configure defaults for new games."""
    pass


@config.command(name="show")
@click.pass_context
@report_errors("show the configuration")
def show_config(ctx):
    """Display the configuration."""
    path = _config_path(ctx)
    click.echo(f"Configuration ({path}):\n")
    _echo_config(GameConfig.load_or_default(path))


@config.command(name="set")
@click.option("--entry-fee", type=str, default=None, help="Entry fee in ether")
@click.option("--self-blend-price", type=str, default=None, help="Self-blend price in ether")
@click.option("--target-margin", type=int, default=None, help="Minimum distance of target channels from 0 and 255")
@click.option("--state-file", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Game file")
@click.pass_context
@report_errors("update the configuration")
def set_config(
    ctx,
    entry_fee: Optional[str],
    self_blend_price: Optional[str],
    target_margin: Optional[int],
    state_file: Optional[Path],
):
    """Update configuration values and save."""
    updates = {}
    if entry_fee is not None:
        updates["entry_fee"] = parse_ether(entry_fee)
    if self_blend_price is not None:
        updates["self_blend_price"] = parse_ether(self_blend_price)
    if target_margin is not None:
        updates["target_margin"] = target_margin
    if state_file is not None:
        updates["state_file"] = state_file

    if not updates:
        click.echo("Nothing to update. See 'rainbowtoken config set --help'.")
        return

    path = _config_path(ctx)
    current = GameConfig.load_or_default(path)
    updated = GameConfig.model_validate({**current.model_dump(), **updates})
    updated.save(path)

    click.echo(f"Updated {', '.join(updates)} in {path}\n")
    _echo_config(updated)


@config.command(name="reset")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
@report_errors("reset the configuration")
def reset_config(ctx, yes: bool):
    """Restore the default configuration."""
    path = _config_path(ctx)
    if not yes:
        click.confirm(f"Reset {path} to defaults?", abort=True)
    GameConfig().save(path)
    click.echo(f"Configuration reset: {path}")

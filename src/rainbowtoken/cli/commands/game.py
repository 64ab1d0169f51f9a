"""Game command implementations: deploy, submit transactions, inspect."""

from typing import Optional

import click

from rainbowtoken.cli.decorators import report_errors
from rainbowtoken.models import Color, GameConfig, LedgerEvent
from rainbowtoken.protocols import GameEvent
from rainbowtoken.services import LedgerStore
from rainbowtoken.utils import format_ether, parse_ether


def _load_config(ctx: click.Context) -> GameConfig:
    ctx.ensure_object(dict)
    return GameConfig.load_or_default(ctx.obj.get("config_path"))


def _store(ctx: click.Context) -> LedgerStore:
    ctx.ensure_object(dict)
    state = ctx.obj.get("state")
    return LedgerStore(state if state is not None else _load_config(ctx).state_file)


def describe_event(record: LedgerEvent) -> str:
    """One-line human description of an event record."""
    match record.event:
        case GameEvent.PLAYER_JOINED:
            return f"{record.account} joined with original color {record.original_color}"
        case GameEvent.BLENDING_PRICE_UPDATED:
            return f"{record.account} set its blending price to {format_ether(record.blending_price)} ETH"
        case GameEvent.SELF_BLENDED:
            return f"{record.account} self blended to {record.color}"
        case GameEvent.BLENDED:
            return (
                f"{record.account} blended with {record.blending_account} "
                f"{record.blending_color} and now holds {record.color}"
            )
        case GameEvent.GAME_OVER:
            return f"{record.winner} won {format_ether(record.amount)} ETH"


@click.command()
@click.argument("r", type=int)
@click.argument("g", type=int)
@click.argument("b", type=int)
@click.option("--entry-fee", type=str, default=None, help="Entry fee in ether (default: from config)")
@click.option("--self-blend-price", type=str, default=None, help="Self-blend price in ether (default: from config)")
@click.option("--seed", type=str, default=None, help="Seed for original colors (default: random)")
@click.option("--force", is_flag=True, help="Replace an existing game")
@click.pass_context
@report_errors("deploy a game")
def deploy(
    ctx,
    r: int,
    g: int,
    b: int,
    entry_fee: Optional[str],
    self_blend_price: Optional[str],
    seed: Optional[str],
    force: bool,
):
    """Deploy a new game with target color R G B."""
    config = _load_config(ctx)
    updates = {}
    if entry_fee is not None:
        updates["entry_fee"] = parse_ether(entry_fee)
    if self_blend_price is not None:
        updates["self_blend_price"] = parse_ether(self_blend_price)
    if updates:
        config = GameConfig.model_validate({**config.model_dump(), **updates})

    store = _store(ctx)
    ledger = store.create((r, g, b), config=config, seed=seed, force=force)

    click.echo(f"Game deployed to {store.path}")
    click.echo(f"  Target color:     {ledger.get_target_color()}")
    click.echo(f"  Entry fee:        {format_ether(ledger.entry_fee)} ETH")
    click.echo(f"  Self-blend price: {format_ether(ledger.self_blend_price)} ETH")


@click.command()
@click.argument("account")
@click.option("--value", type=str, default=None, help="Value in ether (default: the entry fee)")
@click.pass_context
@report_errors("join the game")
def join(ctx, account: str, value: Optional[str]):
    """Join the game as ACCOUNT."""
    with _store(ctx).transaction() as ledger:
        wei = parse_ether(value) if value is not None else ledger.entry_fee
        receipt = ledger.join(account, value=wei)

    record = receipt.find(GameEvent.PLAYER_JOINED)
    click.echo(f"[block {receipt.block}] {describe_event(record)}")


@click.command(name="set-price")
@click.argument("account")
@click.argument("price")
@click.pass_context
@report_errors("update the blending price")
def set_price(ctx, account: str, price: str):
    """Set the PRICE (ether) others pay to blend against ACCOUNT."""
    with _store(ctx).transaction() as ledger:
        receipt = ledger.update_blending_price(account, parse_ether(price))

    click.echo(f"[block {receipt.block}] {describe_event(receipt.events[0])}")


@click.command(name="self-blend")
@click.argument("account")
@click.option("--value", type=str, default=None, help="Value in ether (default: the self-blend price)")
@click.pass_context
@report_errors("self blend")
def self_blend(ctx, account: str, value: Optional[str]):
    """Blend ACCOUNT's color with its original color."""
    with _store(ctx).transaction() as ledger:
        wei = parse_ether(value) if value is not None else ledger.self_blend_price
        receipt = ledger.self_blend(account, value=wei)

    click.echo(f"[block {receipt.block}] {describe_event(receipt.events[0])}")


@click.command()
@click.argument("account")
@click.argument("counterparty")
@click.option(
    "--color",
    type=(int, int, int),
    default=None,
    help="Color COUNTERPARTY is expected to hold (default: its current color)",
)
@click.option("--value", type=str, default=None, help="Value in ether (default: COUNTERPARTY's blending price)")
@click.pass_context
@report_errors("blend")
def blend(ctx, account: str, counterparty: str, color: Optional[tuple[int, int, int]], value: Optional[str]):
    """Blend ACCOUNT's original color with COUNTERPARTY's current color."""
    with _store(ctx).transaction() as ledger:
        observed = ledger.get_player(counterparty)
        expected = Color.from_rgb_tuple(color) if color is not None else observed.color
        wei = parse_ether(value) if value is not None else observed.blending_price
        receipt = ledger.blend(account, counterparty, expected, value=wei)

    click.echo(f"[block {receipt.block}] {describe_event(receipt.events[0])}")


@click.command()
@click.argument("account")
@click.pass_context
@report_errors("claim victory")
def claim(ctx, account: str):
    """Claim the pool as ACCOUNT, if it holds the target color."""
    with _store(ctx).transaction() as ledger:
        receipt = ledger.claim_victory(account)

    click.echo(f"[block {receipt.block}] {describe_event(receipt.events[0])}")


@click.command()
@click.argument("account", required=False)
@click.pass_context
@report_errors("show the game")
def show(ctx, account: Optional[str]):
    """Show the game, or a single ACCOUNT."""
    ledger = _store(ctx).load()

    if account is not None:
        if not ledger.is_player(account):
            click.echo(f"{account} is not a player")
            return
        player = ledger.get_player(account)
        click.echo(f"{account}")
        click.echo(f"  Color:          {player.color} {player.color.to_hex()}")
        click.echo(f"  Original color: {player.original_color} {player.original_color.to_hex()}")
        click.echo(f"  Blending price: {format_ether(player.blending_price)} ETH")
        return

    target = ledger.get_target_color()
    click.echo(f"Target color: {target} {target.to_hex()}")
    click.echo(f"Pool:         {format_ether(ledger.balance)} ETH")
    if ledger.is_over:
        click.echo(f"Status:       over, won by {ledger.winner} ({format_ether(ledger.payout_of(ledger.winner))} ETH)")
    else:
        click.echo("Status:       open")

    click.echo(f"\nPlayers ({len(ledger.players)}):")
    if not ledger.players:
        click.echo("  No players yet.")
    for name in ledger.players:
        player = ledger.get_player(name)
        marker = "  *" if player.color == target else ""
        click.echo(
            f"  {name}: {player.color} (original {player.original_color}), "
            f"price {format_ether(player.blending_price)} ETH{marker}"
        )


@click.command()
@click.pass_context
@report_errors("list events")
def events(ctx):
    """List every event emitted by the game."""
    ledger = _store(ctx).load()
    if not ledger.events:
        click.echo("No events yet.")
        return
    for index, record in enumerate(ledger.events, start=1):
        click.echo(f"{index:>4}. {describe_event(record)}")

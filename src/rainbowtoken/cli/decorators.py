"""Decorators for CLI commands."""

import logging
from functools import wraps

import click

from rainbowtoken.exceptions import ErrorContext, RainbowTokenError, format_error_for_display

logger = logging.getLogger(__name__)


def report_errors(operation_name: str):
    """
    Turn application errors raised by a command into a clean message and exit code 1.

    RainbowTokenError (ledger rejections, bad files) and ValueError (bad
    amounts or colors typed by the user) are shown without a traceback.
    Anything else propagates.

    Example:
        @game.command()
        @report_errors("join the game")
        def join(...):
            ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                with ErrorContext(operation_name, logger_instance=logger):
                    return func(*args, **kwargs)
            except (RainbowTokenError, ValueError) as e:
                user_message, recovery_hint = format_error_for_display(e)
                click.echo(f"ERROR: {user_message}", err=True)
                if recovery_hint:
                    click.echo(recovery_hint, err=True)
                raise SystemExit(1) from e
        return wrapper
    return decorator

"""Utility functions."""

from .units import format_ether, parse_ether

__all__ = ["format_ether", "parse_ether"]

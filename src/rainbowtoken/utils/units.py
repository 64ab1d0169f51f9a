"""Conversion between ether amounts and wei."""

from decimal import Decimal, InvalidOperation

from rainbowtoken.models import WEI_PER_ETHER


def parse_ether(amount: str | int | Decimal) -> int:
    """Convert an ether amount to wei.

    Args:
        amount: Amount in ether, e.g. "0.1"

    Returns:
        int: Amount in wei

    Raises:
        ValueError: If the amount is not a number, negative, or finer than 1 wei

    Examples:
        >>> parse_ether("0.1")
        100000000000000000
        >>> parse_ether("2")
        2000000000000000000
    """
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation as e:
        raise ValueError(f"Not an ether amount: {amount!r}") from e

    if not value.is_finite():
        raise ValueError(f"Not an ether amount: {amount!r}")
    if value < 0:
        raise ValueError(f"Ether amount must not be negative: {amount!r}")

    wei = value * WEI_PER_ETHER
    if wei != wei.to_integral_value():
        raise ValueError(f"Ether amount has more than 18 decimals: {amount!r}")
    return int(wei)


def format_ether(wei: int) -> str:
    """Render a wei amount in ether without trailing zeros.

    Examples:
        >>> format_ether(100000000000000000)
        '0.1'
        >>> format_ether(0)
        '0'
    """
    whole, fraction = divmod(wei, WEI_PER_ETHER)
    if fraction == 0:
        return str(whole)
    return f"{whole}.{fraction:018d}".rstrip("0")

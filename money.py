from typing import List

# Smallest currency unit. Balances strictly below this magnitude are settled.
MINOR_UNIT_TOLERANCE = 1


def is_amount(value) -> bool:
    """True for a plain integer amount (bool is not an amount)"""
    return isinstance(value, int) and not isinstance(value, bool)


def is_settled(balance: int, tolerance: int = MINOR_UNIT_TOLERANCE) -> bool:
    return abs(balance) < tolerance


def split_evenly(amount: int, count: int) -> List[int]:
    """
    Split an amount of minor units into `count` integer shares.

    The shares always sum to `amount`. When the division is not exact the
    remainder is handed out one unit at a time to the first shares, so the
    caller controls who absorbs it through the order it assigns shares in.

    Example:
        >>> split_evenly(500000, 3)
        [166667, 166667, 166666]
    """
    if count <= 0:
        raise ValueError("count must be positive")

    share, remainder = divmod(amount, count)
    return [share + 1 if i < remainder else share for i in range(count)]


def round_half_up_div(numerator: int, denominator: int) -> int:
    """Integer division of non-negative values, rounding halves up"""
    quotient, remainder = divmod(numerator, denominator)
    if remainder * 2 >= denominator:
        quotient += 1
    return quotient


def format_minor_units(amount: int, exponent: int = 2) -> str:
    """Render minor units as a major-unit string, e.g. 221667 -> '2216.67'"""
    if exponent == 0:
        return str(amount)

    sign = "-" if amount < 0 else ""
    major, minor = divmod(abs(amount), 10 ** exponent)
    return f"{sign}{major}.{minor:0{exponent}d}"

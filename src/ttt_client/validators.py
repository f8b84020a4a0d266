# Area: Shared
"""
ttt_client.validators — Input validators and amount conversion
==============================================================

Pure predicates on user-supplied strings, plus conversion of a human
decimal amount into integer base units of a token mint.
"""

from __future__ import annotations
import string

from solders.pubkey import Pubkey

from .errors import InputError, StakePrecisionError, ZeroStakeError

_ALPHANUMERIC = frozenset(string.ascii_letters + string.digits)

# Characters the base-58 alphabet leaves out
_EXCLUDED_ADDRESS_CHARS = frozenset("0IOl")

MIN_ADDRESS_LENGTH = 32
MAX_ADDRESS_LENGTH = 44


def is_valid_address(value: str) -> bool:
    """Return True if ``value`` is shaped like a base-58 ledger address."""
    if len(value) < MIN_ADDRESS_LENGTH or len(value) > MAX_ADDRESS_LENGTH:
        return False
    for char in value:
        if char not in _ALPHANUMERIC:
            return False
        if char in _EXCLUDED_ADDRESS_CHARS:
            return False
    return True


def is_public_key(value: str) -> bool:
    """
    Return True if ``value`` decodes to a 32-byte public key.

    Many strings that pass ``is_valid_address`` decode to a different
    length (most 32 character strings, or 44 characters of high digits).
    """
    try:
        Pubkey.from_string(value)
    except ValueError:
        return False
    return True


def is_valid_number(value: str) -> bool:
    """
    Return True if ``value`` is digits with at most one decimal point.

    Signs, spaces and exponents are rejected. A bare "." is accepted.
    """
    if len(value) == 0:
        return False
    period_found = False
    for char in value:
        if char == ".":
            if period_found:
                return False
            period_found = True
            continue
        if char not in string.digits:
            return False
    return True


def to_base_units(amount: str, decimals: int) -> int:
    """
    Convert a human decimal string to an integer amount of base units.

    Args:
        amount: Human amount, e.g. "1.5"
        decimals: The mint's declared precision

    Returns:
        ``amount * 10**decimals`` as an exact integer

    Raises:
        InputError: If ``amount`` is not a valid number
        StakePrecisionError: If it has more fractional digits than ``decimals``
        ZeroStakeError: If the converted amount is zero
    """
    amount = amount.strip()
    if not is_valid_number(amount):
        raise InputError("The value entered is not a valid number")

    whole, _, fraction = amount.partition(".")
    if len(fraction) > decimals:
        raise StakePrecisionError(len(fraction), decimals)

    base_units = int((whole or "0") + fraction.ljust(decimals, "0"))
    if base_units == 0:
        raise ZeroStakeError()
    return base_units


def format_amount(base_units: int, decimals: int) -> str:
    """Render base units as a human decimal string without float rounding."""
    if decimals == 0:
        return str(base_units)
    whole, fraction = divmod(base_units, 10 ** decimals)
    fraction_text = str(fraction).rjust(decimals, "0").rstrip("0")
    return f"{whole}.{fraction_text}" if fraction_text else str(whole)

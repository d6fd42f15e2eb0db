"""
Conversion between human prices ("1.25") and the ledger's integer minor unit.

The registry stores prices the way ether amounts are stored: an integer with
18 implied decimal places. Scaling is exact; anything that cannot be scaled
without losing digits is rejected instead of rounded.
"""

from decimal import Decimal, Inexact, InvalidOperation, localcontext
from typing import Union

from web3 import Web3

from ledger.errors import InvalidPrice

DECIMALS = 18
UNIT = "ether"
MAX_MINOR_UNITS = 2**256 - 1

# enough digits for any uint256 with 18 decimals
_PREC = 120
# position of the leading digit of MAX_MINOR_UNITS
_MAX_ADJUSTED = len(str(MAX_MINOR_UNITS)) - 1

PriceLike = Union[str, Decimal, int]


def _to_decimal(value: PriceLike) -> Decimal:
    if isinstance(value, bool):
        raise InvalidPrice(f"not a price: {value!r}")
    if isinstance(value, float):
        value = repr(value)
    try:
        d = Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidPrice(f"not a number: {value!r}") from None
    if not d.is_finite():
        raise InvalidPrice(f"not a finite number: {value!r}")
    return d


def scale_price(value: PriceLike) -> int:
    """
    "1.25" -> 1250000000000000000

    Raises InvalidPrice for non-numeric, negative, too precise or out of range input.
    """
    d = _to_decimal(value)
    if d < 0:
        raise InvalidPrice(f"negative price: {value!r}")

    if d.is_zero():
        return 0

    # bound by exponent first, "1e-2000000" or "1e1000000" never reach scaleb
    if d.adjusted() < -DECIMALS:
        raise InvalidPrice(f"more than {DECIMALS} decimal places: {value!r}")
    if d.adjusted() + DECIMALS > _MAX_ADJUSTED:
        raise InvalidPrice(f"price out of range: {value!r}")

    with localcontext() as ctx:
        ctx.prec = _PREC
        ctx.traps[Inexact] = True
        try:
            scaled = d.scaleb(DECIMALS)
        except Inexact:
            raise InvalidPrice(f"more than {DECIMALS} decimal places: {value!r}") from None
        if scaled != scaled.to_integral_value():
            raise InvalidPrice(f"more than {DECIMALS} decimal places: {value!r}")
        if scaled > MAX_MINOR_UNITS:
            raise InvalidPrice(f"price out of range: {value!r}")

    try:
        return Web3.to_wei(d, UNIT)
    except ValueError as e:
        raise InvalidPrice(str(e)) from e


def display_price(minor_units: int) -> str:
    """
    1500000000000000000 -> "1.5"

    Exact inverse of scale_price for canonical decimals (no trailing zeros).
    """
    value = Decimal(Web3.from_wei(int(minor_units), UNIT))
    with localcontext() as ctx:
        ctx.prec = _PREC
        return format(value.normalize(), "f")

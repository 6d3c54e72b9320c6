"""Boost formula and time-weighted aggregation."""

from decimal import Decimal, localcontext
from typing import Iterable, Sequence

from vote_boost_toolkit.shared.constants import BoostConstants

_UNIT = Decimal(10**BoostConstants.DECIMALS)


def from_raw(value: int) -> Decimal:
    """Convert an 18-decimal fixed point integer into token units."""
    with localcontext() as ctx:
        ctx.prec = 60
        return Decimal(int(value)) / _UNIT


def working_balance(
    gauge_balance: Decimal,
    voting_balance: Decimal,
    ve_total_supply: Decimal,
    gauge_total_supply: Decimal,
    tokenless_production: int = BoostConstants.TOKENLESS_PRODUCTION,
) -> Decimal:
    """
    Boosted balance of a gauge depositor, capped at the gauge balance.

    ``lim`` starts at ``tokenless_production`` percent of the gauge balance
    and grows with the holder's share of the escrow supply. The bonus is
    skipped entirely when the escrow supply is zero.
    """
    with localcontext() as ctx:
        ctx.prec = 60
        l = Decimal(gauge_balance)
        lim = l * tokenless_production
        if ve_total_supply > 0:
            lim += (
                Decimal(gauge_total_supply)
                * Decimal(voting_balance)
                / Decimal(ve_total_supply)
                * (100 - tokenless_production)
            )
        lim = lim / 100
        return min(l, lim)


def average(
    numbers: Sequence[Decimal], address: str, whitelisted: Iterable[str]
) -> Decimal:
    """
    Time-weighted voting power of an address.

    Whitelisted addresses get the most recent working balance, everyone
    else the arithmetic mean of all samples.
    """
    if len(numbers) == 0:
        return Decimal(0)

    if address.lower() in {a.lower() for a in whitelisted}:
        return numbers[-1]

    with localcontext() as ctx:
        ctx.prec = 60
        return sum(numbers, Decimal(0)) / len(numbers)

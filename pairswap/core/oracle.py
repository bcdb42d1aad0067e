"""
Time-weighted average price helpers over a pair's cumulative prices.

This module is pure: it reads a pair's accumulators and reserves and never
mutates them. A consumer stores two `PriceObservation`s some window apart and
divides the accumulator delta by the elapsed time to get the average price.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..kernels import uq112x112
from ..kernels.safe_math import wrapping_add, wrapping_sub
from .pair import TIMESTAMP_BITS, Pair


@dataclass(frozen=True)
class PriceObservation:
    """Cumulative prices as of `timestamp` (timestamp modulo 2**32)."""

    timestamp: int
    price0_cumulative: int
    price1_cumulative: int

    def __post_init__(self) -> None:
        if not (0 <= self.timestamp < (1 << TIMESTAMP_BITS)):
            raise ValueError(f"timestamp must fit in uint32: {self.timestamp}")


def current_block_timestamp(timestamp: int) -> int:
    if timestamp < 0:
        raise ValueError(f"timestamp must be non-negative: {timestamp}")
    return timestamp % (1 << TIMESTAMP_BITS)


def current_cumulative_prices(pair: Pair, timestamp: Optional[int] = None) -> Tuple[int, int, int]:
    """
    Cumulative prices as they would read if the pair were synced at `timestamp`.

    Saves a `sync` call: if time has passed since the last update, the
    accumulation over the gap is computed counterfactually from the current
    reserves.
    """
    block_timestamp = current_block_timestamp(pair.block_timestamp if timestamp is None else timestamp)
    price0 = pair.price0_cumulative_last
    price1 = pair.price1_cumulative_last

    reserve0, reserve1, last = pair.get_reserves()
    if last != block_timestamp and reserve0 != 0 and reserve1 != 0:
        elapsed = wrapping_sub(block_timestamp, last, bits=TIMESTAMP_BITS)
        price0 = wrapping_add(price0, uq112x112.mul(uq112x112.uqdiv(uq112x112.encode(reserve1), reserve0), elapsed))
        price1 = wrapping_add(price1, uq112x112.mul(uq112x112.uqdiv(uq112x112.encode(reserve0), reserve1), elapsed))
    return price0, price1, block_timestamp


def observe(pair: Pair, timestamp: Optional[int] = None) -> PriceObservation:
    price0, price1, block_timestamp = current_cumulative_prices(pair, timestamp)
    return PriceObservation(timestamp=block_timestamp, price0_cumulative=price0, price1_cumulative=price1)


def average_prices(start: PriceObservation, end: PriceObservation) -> Tuple[int, int]:
    """
    Average (price0, price1) as UQ112x112 over the window [start, end].

    Both subtractions are modular, so a window spanning a timestamp or
    accumulator wrap still yields the right average.
    """
    elapsed = wrapping_sub(end.timestamp, start.timestamp, bits=TIMESTAMP_BITS)
    if elapsed == 0:
        raise ValueError("observation window is empty")
    price0_average = wrapping_sub(end.price0_cumulative, start.price0_cumulative) // elapsed
    price1_average = wrapping_sub(end.price1_cumulative, start.price1_cumulative) // elapsed
    return price0_average, price1_average


def consult(price_average: int, amount_in: int) -> int:
    """Value `amount_in` at a UQ112x112 average price, truncated to an integer."""
    if amount_in < 0:
        raise ValueError(f"amount_in must be non-negative: {amount_in}")
    return uq112x112.decode(uq112x112.mul(price_average, amount_in))


def is_fresh(observation: PriceObservation, timestamp: int, max_staleness_seconds: int) -> bool:
    """True if `observation` is at most `max_staleness_seconds` old at `timestamp`."""
    if max_staleness_seconds <= 0:
        raise ValueError(f"max_staleness_seconds must be positive: {max_staleness_seconds}")
    age = wrapping_sub(current_block_timestamp(timestamp), observation.timestamp, bits=TIMESTAMP_BITS)
    return age <= max_staleness_seconds

"""
Constant Product Market Maker (CPMM) arithmetic.

Pure, integer-only formulas shared by the pool engine and by clients that size
trades. Every intermediate goes through the checked `safe_math` helpers, so an
out-of-range value raises instead of wrapping.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Deterministic Floor Rounding
- Fee: 0.3% of the input side (3 / 1000), retained by the pool
- Invariant: after each swap, (1000*x' - 3*in_x) * (1000*y' - 3*in_y) >= x*y*1000**2
"""

from typing import Tuple

from ..errors import (
    InsufficientAmountError,
    InsufficientInputAmountError,
    InsufficientLiquidityBurnedError,
    InsufficientLiquidityError,
    InsufficientLiquidityMintedError,
    InsufficientOutputAmountError,
)
from ..kernels import safe_math
from ..state.balances import Amount

# Shares permanently locked on the first deposit so the pool can never be
# emptied and re-seeded at an extreme share price.
MINIMUM_LIQUIDITY = 1000

FEE_DENOMINATOR = 1000
FEE_NUMERATOR = 3  # charged on input
FEE_COMPLEMENT = FEE_DENOMINATOR - FEE_NUMERATOR  # 997

# Protocol takes 1/(PROTOCOL_FEE_DIVISOR + 1) of the growth in sqrt(k).
PROTOCOL_FEE_DIVISOR = 5


def compute_liquidity_minted(
    amount0: Amount,
    amount1: Amount,
    reserve0: Amount,
    reserve1: Amount,
    total_supply: Amount,
) -> Amount:
    """
    Compute shares to mint for a deposit of (amount0, amount1).

    For the first deposit (total_supply == 0):
        shares = floor(sqrt(amount0 * amount1)) - MINIMUM_LIQUIDITY
    (the caller separately locks MINIMUM_LIQUIDITY at the null account).

    Otherwise:
        shares = min(floor(amount0 * total_supply / reserve0),
                     floor(amount1 * total_supply / reserve1))
    Any excess of the larger-ratio asset accrues to existing holders.

    Raises:
        ArithmeticOverflowError: If sqrt(amount0 * amount1) < MINIMUM_LIQUIDITY
        InsufficientLiquidityMintedError: If the result is zero
    """
    if total_supply == 0:
        liquidity = safe_math.sub(safe_math.sqrt(safe_math.mul(amount0, amount1)), MINIMUM_LIQUIDITY)
    else:
        if reserve0 == 0 or reserve1 == 0:
            raise InsufficientLiquidityMintedError("cannot price a deposit against an empty reserve")
        liquidity = safe_math.minimum(
            safe_math.mul(amount0, total_supply) // reserve0,
            safe_math.mul(amount1, total_supply) // reserve1,
        )
    if liquidity <= 0:
        raise InsufficientLiquidityMintedError()
    return liquidity


def compute_liquidity_burned(
    liquidity: Amount,
    balance0: Amount,
    balance1: Amount,
    total_supply: Amount,
) -> Tuple[Amount, Amount]:
    """
    Compute assets returned for burning `liquidity` shares.

    Pro-rata against live balances (not recorded reserves), so surplus sent to
    the pool is distributed too:
        amount0 = floor(liquidity * balance0 / total_supply)
        amount1 = floor(liquidity * balance1 / total_supply)

    Raises:
        InsufficientLiquidityBurnedError: If either amount is zero
    """
    if total_supply == 0:
        raise InsufficientLiquidityBurnedError()
    amount0 = safe_math.mul(liquidity, balance0) // total_supply
    amount1 = safe_math.mul(liquidity, balance1) // total_supply
    if amount0 <= 0 or amount1 <= 0:
        raise InsufficientLiquidityBurnedError()
    return amount0, amount1


def compute_protocol_fee_liquidity(
    total_supply: Amount,
    reserve0: Amount,
    reserve1: Amount,
    k_last: int,
) -> Amount:
    """
    Shares owed to the protocol for invariant growth since `k_last`.

        root_k = sqrt(reserve0 * reserve1), root_k_last = sqrt(k_last)
        shares = total_supply * (root_k - root_k_last) / (5 * root_k + root_k_last)

    Minting this dilutes holders by ~1/6 of the fee-driven growth in sqrt(k).
    Returns 0 when there is no snapshot or no growth.
    """
    if k_last == 0:
        return 0
    root_k = safe_math.sqrt(safe_math.mul(reserve0, reserve1))
    root_k_last = safe_math.sqrt(k_last)
    if root_k <= root_k_last:
        return 0
    numerator = safe_math.mul(total_supply, safe_math.sub(root_k, root_k_last))
    denominator = safe_math.add(safe_math.mul(root_k, PROTOCOL_FEE_DIVISOR), root_k_last)
    return numerator // denominator


def balance_adjusted(balance: Amount, amount_in: Amount) -> int:
    """Balance scaled by 1000 with the 0.3% input fee removed: 1000*b - 3*in."""
    return safe_math.sub(
        safe_math.mul(balance, FEE_DENOMINATOR),
        safe_math.mul(amount_in, FEE_NUMERATOR),
    )


def satisfies_invariant(
    balance0_adjusted: int,
    balance1_adjusted: int,
    reserve0: Amount,
    reserve1: Amount,
) -> bool:
    """True iff the fee-adjusted product is at least the pre-trade product (same scale)."""
    return safe_math.mul(balance0_adjusted, balance1_adjusted) >= safe_math.mul(
        safe_math.mul(reserve0, reserve1), FEE_DENOMINATOR * FEE_DENOMINATOR
    )


def quote(amount_a: Amount, reserve_a: Amount, reserve_b: Amount) -> Amount:
    """Equivalent amount of asset B for `amount_a` at the current reserve ratio (no fee)."""
    if amount_a <= 0:
        raise InsufficientAmountError()
    if reserve_a <= 0 or reserve_b <= 0:
        raise InsufficientLiquidityError()
    return safe_math.mul(amount_a, reserve_b) // reserve_a


def get_amount_out(amount_in: Amount, reserve_in: Amount, reserve_out: Amount) -> Amount:
    """
    Maximum output for an exact input, after the 0.3% fee.

        out = floor(997 * in * reserve_out / (1000 * reserve_in + 997 * in))
    """
    if amount_in <= 0:
        raise InsufficientInputAmountError()
    if reserve_in <= 0 or reserve_out <= 0:
        raise InsufficientLiquidityError()
    amount_in_with_fee = safe_math.mul(amount_in, FEE_COMPLEMENT)
    numerator = safe_math.mul(amount_in_with_fee, reserve_out)
    denominator = safe_math.add(safe_math.mul(reserve_in, FEE_DENOMINATOR), amount_in_with_fee)
    return numerator // denominator


def get_amount_in(amount_out: Amount, reserve_in: Amount, reserve_out: Amount) -> Amount:
    """
    Minimum input for an exact output, after the 0.3% fee (rounded up).

        in = floor(1000 * reserve_in * out / (997 * (reserve_out - out))) + 1
    """
    if amount_out <= 0:
        raise InsufficientOutputAmountError()
    if reserve_in <= 0 or reserve_out <= 0 or amount_out >= reserve_out:
        raise InsufficientLiquidityError()
    numerator = safe_math.mul(safe_math.mul(reserve_in, amount_out), FEE_DENOMINATOR)
    denominator = safe_math.mul(safe_math.sub(reserve_out, amount_out), FEE_COMPLEMENT)
    return numerator // denominator + 1

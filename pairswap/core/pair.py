"""
Pool invariant engine for one constant-product pair.

A `Pair` is both the reserve-holding pool and the claim-token ledger of its
shares. Deposits and share redemptions are two-step: the caller first moves
assets (or shares) to the pool, then calls `mint` (or `burn`); the pool diffs
its live balances against recorded reserves to learn what arrived.

Every state-mutating entry point runs under the pool lock (`guards.locked`),
so a flash-swap callback cannot re-enter the same pool while reserves are
inconsistent.
"""

from __future__ import annotations

import logging
from typing import Tuple

from ..errors import (
    ArithmeticOverflowError,
    InsufficientInputAmountError,
    InsufficientLiquidityError,
    InsufficientOutputAmountError,
    InvalidRecipientError,
    InvariantViolationError,
    TransferFailedError,
    UnauthorizedError,
)
from ..kernels import safe_math, uq112x112
from ..kernels.safe_math import UINT112_MAX
from ..state.balances import Address, Amount
from ..state.canonical import ZERO_ADDRESS, canonical_address
from ..state.pools import PairState
from . import cpmm
from .claim_token import ClaimToken
from .cpmm import MINIMUM_LIQUIDITY
from .guards import locked


logger = logging.getLogger(__name__)

TIMESTAMP_BITS = 32


class Pair(ClaimToken):
    def __init__(self, factory: Address) -> None:
        super().__init__()
        self.factory = canonical_address(factory, name="factory")
        self.state = PairState()

    # -- reads ---------------------------------------------------------------

    @property
    def asset0(self) -> Address:
        return self.state.asset0

    @property
    def asset1(self) -> Address:
        return self.state.asset1

    @property
    def price0_cumulative_last(self) -> int:
        return self.state.price0_cumulative_last

    @property
    def price1_cumulative_last(self) -> int:
        return self.state.price1_cumulative_last

    @property
    def k_last(self) -> int:
        return self.state.k_last

    def get_reserves(self) -> Tuple[Amount, Amount, int]:
        return self.state.get_reserves()

    # -- setup ---------------------------------------------------------------

    def initialize(self, asset0: Address, asset1: Address) -> None:
        """Called once by the factory right after deployment."""
        if self.msg_sender != self.factory:
            raise UnauthorizedError()
        if self.state.initialized:
            raise UnauthorizedError("pair already initialized")
        self.state.asset0 = canonical_address(asset0, name="asset0")
        self.state.asset1 = canonical_address(asset1, name="asset1")

    # -- helpers -------------------------------------------------------------

    def _asset_balance(self, asset: Address) -> Amount:
        return self._call(asset, "balance_of", self.address)

    def _safe_transfer(self, asset: Address, to: Address, value: Amount) -> None:
        """
        Transfer `value` of `asset` to `to`.

        Succeeds only if the transfer call succeeds and returns nothing or True,
        so legacy ledgers without a return value are accepted. Any failure of
        the call, including a missing ledger or a ledger without a usable
        `transfer`, is reported as TransferFailedError.
        """
        try:
            result = self._call(asset, "transfer", to, value)
        except Exception as exc:
            raise TransferFailedError(f"transfer of {value} {asset} failed: {exc}") from exc
        if result is not None and result is not True:
            raise TransferFailedError(f"transfer of {value} {asset} returned {result!r}")

    def _update(self, balance0: Amount, balance1: Amount, reserve0: Amount, reserve1: Amount) -> None:
        """
        Overwrite reserves with live balances and advance the price accumulators.

        The accumulators gain reserve1/reserve0 and reserve0/reserve1 (UQ112x112)
        times the seconds elapsed since the last update, computed from the
        previous reserves. Time is kept modulo 2**32 and the accumulators modulo
        2**256; differences stay correct across a wrap.
        """
        if balance0 > UINT112_MAX or balance1 > UINT112_MAX:
            raise ArithmeticOverflowError()
        st = self.state
        block_timestamp = self.block_timestamp % (1 << TIMESTAMP_BITS)
        time_elapsed = safe_math.wrapping_sub(block_timestamp, st.block_timestamp_last, bits=TIMESTAMP_BITS)
        if time_elapsed > 0 and reserve0 != 0 and reserve1 != 0:
            st.price0_cumulative_last = safe_math.wrapping_add(
                st.price0_cumulative_last,
                uq112x112.mul(uq112x112.uqdiv(uq112x112.encode(reserve1), reserve0), time_elapsed),
            )
            st.price1_cumulative_last = safe_math.wrapping_add(
                st.price1_cumulative_last,
                uq112x112.mul(uq112x112.uqdiv(uq112x112.encode(reserve0), reserve1), time_elapsed),
            )
        st.reserve0 = balance0
        st.reserve1 = balance1
        st.block_timestamp_last = block_timestamp
        self._emit("Sync", reserve0=balance0, reserve1=balance1)

    def _mint_fee(self, reserve0: Amount, reserve1: Amount) -> bool:
        """Mint the protocol's share of fee growth; returns whether the fee is on."""
        fee_to = self._call(self.factory, "fee_to")
        fee_on = fee_to != ZERO_ADDRESS
        if fee_on:
            liquidity = cpmm.compute_protocol_fee_liquidity(
                self.total_supply, reserve0, reserve1, self.state.k_last
            )
            if liquidity > 0:
                logger.debug("protocol fee: minting %d shares to %s", liquidity, fee_to)
                self._mint(fee_to, liquidity)
        elif self.state.k_last != 0:
            self.state.k_last = 0
        return fee_on

    # -- entry points --------------------------------------------------------

    def mint(self, to: Address) -> Amount:
        """
        Credit shares to `to` for assets already transferred to the pool.

        Returns the number of shares minted.
        """
        with locked(self.state) as st:
            to = canonical_address(to, name="to")
            reserve0, reserve1, _ = st.get_reserves()
            balance0 = self._asset_balance(st.asset0)
            balance1 = self._asset_balance(st.asset1)
            amount0 = safe_math.sub(balance0, reserve0)
            amount1 = safe_math.sub(balance1, reserve1)

            fee_on = self._mint_fee(reserve0, reserve1)
            total_supply = self.total_supply  # may have changed in _mint_fee
            liquidity = cpmm.compute_liquidity_minted(amount0, amount1, reserve0, reserve1, total_supply)
            if total_supply == 0:
                self._mint(ZERO_ADDRESS, MINIMUM_LIQUIDITY)
            self._mint(to, liquidity)

            self._update(balance0, balance1, reserve0, reserve1)
            if fee_on:
                st.k_last = safe_math.mul(st.reserve0, st.reserve1)
            self._emit("Mint", sender=self.msg_sender, amount0=amount0, amount1=amount1)
            return liquidity

    def burn(self, to: Address) -> Tuple[Amount, Amount]:
        """
        Redeem the shares held by the pool itself and send the assets to `to`.

        Returns (amount0, amount1) paid out.
        """
        with locked(self.state) as st:
            to = canonical_address(to, name="to")
            reserve0, reserve1, _ = st.get_reserves()
            asset0, asset1 = st.asset0, st.asset1
            balance0 = self._asset_balance(asset0)
            balance1 = self._asset_balance(asset1)
            liquidity = self.balance_of(self.address)

            fee_on = self._mint_fee(reserve0, reserve1)
            amount0, amount1 = cpmm.compute_liquidity_burned(liquidity, balance0, balance1, self.total_supply)
            self._burn(self.address, liquidity)
            self._safe_transfer(asset0, to, amount0)
            self._safe_transfer(asset1, to, amount1)
            balance0 = self._asset_balance(asset0)
            balance1 = self._asset_balance(asset1)

            self._update(balance0, balance1, reserve0, reserve1)
            if fee_on:
                st.k_last = safe_math.mul(st.reserve0, st.reserve1)
            self._emit("Burn", sender=self.msg_sender, amount0=amount0, amount1=amount1, to=to)
            return amount0, amount1

    def swap(self, amount0_out: Amount, amount1_out: Amount, to: Address, data: bytes = b"") -> None:
        """
        Send the requested outputs to `to`, then verify enough input arrived.

        Outputs are transferred optimistically. With non-empty `data` the
        recipient's `pair_call` runs next and may pay for the outputs there.
        The fee-adjusted product of the new balances must not fall below the
        product of the old reserves.
        """
        with locked(self.state) as st:
            to = canonical_address(to, name="to")
            if amount0_out < 0 or amount1_out < 0:
                raise ValueError(f"outputs must be non-negative: ({amount0_out}, {amount1_out})")
            if amount0_out == 0 and amount1_out == 0:
                raise InsufficientOutputAmountError()
            reserve0, reserve1, _ = st.get_reserves()
            if amount0_out >= reserve0 or amount1_out >= reserve1:
                raise InsufficientLiquidityError()

            asset0, asset1 = st.asset0, st.asset1
            if to == asset0 or to == asset1:
                raise InvalidRecipientError()
            if amount0_out > 0:
                self._safe_transfer(asset0, to, amount0_out)
            if amount1_out > 0:
                self._safe_transfer(asset1, to, amount1_out)
            if data:
                self._call(to, "pair_call", self.msg_sender, amount0_out, amount1_out, bytes(data))
            balance0 = self._asset_balance(asset0)
            balance1 = self._asset_balance(asset1)

            expected0 = reserve0 - amount0_out
            expected1 = reserve1 - amount1_out
            amount0_in = balance0 - expected0 if balance0 > expected0 else 0
            amount1_in = balance1 - expected1 if balance1 > expected1 else 0
            if amount0_in <= 0 and amount1_in <= 0:
                raise InsufficientInputAmountError()

            balance0_adjusted = cpmm.balance_adjusted(balance0, amount0_in)
            balance1_adjusted = cpmm.balance_adjusted(balance1, amount1_in)
            if not cpmm.satisfies_invariant(balance0_adjusted, balance1_adjusted, reserve0, reserve1):
                raise InvariantViolationError()

            self._update(balance0, balance1, reserve0, reserve1)
            self._emit(
                "Swap",
                sender=self.msg_sender,
                amount0_in=amount0_in,
                amount1_in=amount1_in,
                amount0_out=amount0_out,
                amount1_out=amount1_out,
                to=to,
            )

    def skim(self, to: Address) -> None:
        """Send any balance above the recorded reserves to `to`; reserves are unchanged."""
        with locked(self.state) as st:
            to = canonical_address(to, name="to")
            asset0, asset1 = st.asset0, st.asset1
            self._safe_transfer(asset0, to, safe_math.sub(self._asset_balance(asset0), st.reserve0))
            self._safe_transfer(asset1, to, safe_math.sub(self._asset_balance(asset1), st.reserve1))

    def sync(self) -> None:
        """Set recorded reserves to live balances without moving assets."""
        with locked(self.state) as st:
            self._update(
                self._asset_balance(st.asset0),
                self._asset_balance(st.asset1),
                st.reserve0,
                st.reserve1,
            )

from __future__ import annotations

from pair_harness import OTHER, WALLET, PairHarness
from pairswap.core.cpmm import MINIMUM_LIQUIDITY, get_amount_out
from pairswap.state.canonical import ZERO_ADDRESS

E18 = 10**18
FEE_RECIPIENT = OTHER


def _assert_shares_balanced(harness: PairHarness) -> None:
    assert harness.pair._balances.total() == harness.pair.total_supply


def _deposit_swap_withdraw(harness: PairHarness) -> None:
    shares = harness.add_liquidity(1000 * E18, 1000 * E18)
    assert shares == 1000 * E18 - MINIMUM_LIQUIDITY
    _assert_shares_balanced(harness)

    amount_out = get_amount_out(E18, 1000 * E18, 1000 * E18)
    assert amount_out == 996006981039903216
    harness.send(WALLET, harness.token1.address, "transfer", harness.pair.address, E18)
    harness.send(WALLET, harness.pair.address, "swap", amount_out, 0, WALLET)
    _assert_shares_balanced(harness)

    harness.remove_liquidity(shares)
    _assert_shares_balanced(harness)


def test_fee_off(harness: PairHarness) -> None:
    _deposit_swap_withdraw(harness)
    assert harness.pair.total_supply == MINIMUM_LIQUIDITY
    assert harness.pair.k_last == 0


def test_fee_on_mints_a_sixth_of_growth(harness: PairHarness) -> None:
    harness.set_fee_to(FEE_RECIPIENT)
    _deposit_swap_withdraw(harness)

    fee_shares = 249750499251388
    assert harness.pair.balance_of(FEE_RECIPIENT) == fee_shares
    assert harness.pair.total_supply == MINIMUM_LIQUIDITY + fee_shares
    pair = harness.pair.address
    assert harness.token0.balance_of(pair) == 1000 + 249501683697445
    assert harness.token1.balance_of(pair) == 1000 + 250000187312969
    assert harness.pair.k_last == harness.token0.balance_of(pair) * harness.token1.balance_of(pair)


def test_k_last_tracks_liquidity_events_only(harness: PairHarness) -> None:
    harness.set_fee_to(FEE_RECIPIENT)
    harness.add_liquidity(10_000, 40_000)
    assert harness.pair.k_last == 10_000 * 40_000

    harness.send(WALLET, harness.token0.address, "transfer", harness.pair.address, 1000)
    harness.send(WALLET, harness.pair.address, "swap", 0, 3626, WALLET)
    assert harness.pair.k_last == 10_000 * 40_000


def test_switching_fee_off_clears_k_last(harness: PairHarness) -> None:
    harness.set_fee_to(FEE_RECIPIENT)
    harness.add_liquidity(10_000, 40_000)
    assert harness.pair.k_last != 0

    harness.set_fee_to(ZERO_ADDRESS)
    harness.add_liquidity(1000, 4000)
    assert harness.pair.k_last == 0
    assert harness.pair.balance_of(FEE_RECIPIENT) == 0


def test_fee_recipient_redeems_and_ledger_stays_balanced(harness: PairHarness) -> None:
    harness.set_fee_to(FEE_RECIPIENT)
    _deposit_swap_withdraw(harness)

    fee_shares = harness.pair.balance_of(FEE_RECIPIENT)
    harness.send(FEE_RECIPIENT, harness.pair.address, "transfer", harness.pair.address, fee_shares)
    _assert_shares_balanced(harness)
    harness.send(FEE_RECIPIENT, harness.pair.address, "burn", FEE_RECIPIENT)
    _assert_shares_balanced(harness)

    assert harness.pair.total_supply == MINIMUM_LIQUIDITY
    assert harness.pair.balance_of(ZERO_ADDRESS) == MINIMUM_LIQUIDITY
    assert harness.token0.balance_of(FEE_RECIPIENT) > 0
    assert harness.token1.balance_of(FEE_RECIPIENT) > 0

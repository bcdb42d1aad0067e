from __future__ import annotations

import pytest

from pair_harness import WALLET, PairHarness, deploy_pair, new_chain
from pairswap.core import oracle

Q112 = 1 << 112


def test_observation_matches_sync(harness: PairHarness) -> None:
    harness.add_liquidity(10_000, 40_000)
    harness.chain.advance_time(10)
    counterfactual = oracle.observe(harness.pair)

    harness.send(WALLET, harness.pair.address, "sync")
    assert counterfactual.price0_cumulative == harness.pair.price0_cumulative_last
    assert counterfactual.price1_cumulative == harness.pair.price1_cumulative_last
    assert counterfactual.timestamp == harness.pair.get_reserves()[2]


def test_observe_does_not_mutate(harness: PairHarness) -> None:
    harness.add_liquidity(10_000, 40_000)
    harness.chain.advance_time(10)
    oracle.observe(harness.pair)
    assert harness.pair.price0_cumulative_last == 0


def test_average_price_over_window(harness: PairHarness) -> None:
    harness.add_liquidity(10_000, 40_000)
    start = oracle.observe(harness.pair)
    harness.chain.advance_time(60)
    # price moves halfway through the window
    harness.send(WALLET, harness.token1.address, "transfer", harness.pair.address, 40_000)
    harness.send(WALLET, harness.pair.address, "sync")
    harness.chain.advance_time(60)
    end = oracle.observe(harness.pair)

    price0, price1 = oracle.average_prices(start, end)
    # (4 * 60 + 8 * 60) / 120
    assert price0 == 6 * Q112
    assert oracle.consult(price0, 1000) == 6000
    assert price1 == (Q112 // 4 * 60 + Q112 // 8 * 60) // 120


def test_average_price_across_timestamp_wrap() -> None:
    chain = new_chain(genesis=(1 << 32) - 30)
    h = deploy_pair(chain)
    h.add_liquidity(10_000, 40_000)
    start = oracle.observe(h.pair)
    chain.advance_time(60)
    end = oracle.observe(h.pair)
    assert end.timestamp == 30
    assert oracle.average_prices(start, end) == (4 * Q112, Q112 // 4)


def test_empty_window_rejected(harness: PairHarness) -> None:
    harness.add_liquidity(10_000, 40_000)
    obs = oracle.observe(harness.pair)
    with pytest.raises(ValueError):
        oracle.average_prices(obs, obs)


def test_freshness(harness: PairHarness) -> None:
    harness.add_liquidity(10_000, 40_000)
    obs = oracle.observe(harness.pair)
    now = harness.chain.timestamp
    assert oracle.is_fresh(obs, now + 300, 300)
    assert not oracle.is_fresh(obs, now + 301, 300)
    with pytest.raises(ValueError):
        oracle.is_fresh(obs, now, 0)

from __future__ import annotations

import pytest

from pairswap.errors import ArithmeticOverflowError
from pairswap.kernels.safe_math import UINT256_MAX
from pairswap.state.balances import BalanceTable
from pairswap.state.nonces import NonceTable

ALICE = "0x" + "a1" * 20
BOB = "0x" + "b2" * 20


def test_balance_table_is_sparse() -> None:
    t = BalanceTable()
    t.set(ALICE, 10)
    t.set(BOB, 5)
    assert t.get(ALICE) == 10
    assert t.total() == 15
    t.set(ALICE, 0)
    assert len(t) == 1
    assert t.sorted_items() == [(BOB, 5)]


def test_balance_table_rejects_out_of_range() -> None:
    t = BalanceTable()
    with pytest.raises(ValueError):
        t.set(ALICE, -1)
    with pytest.raises(ValueError):
        t.set(ALICE, UINT256_MAX + 1)


def test_nonce_table_advances_once_per_use() -> None:
    n = NonceTable()
    assert n.get(ALICE) == 0
    assert n.use(ALICE) == 0
    assert n.use(ALICE) == 1
    assert n.get(ALICE) == 2
    assert n.get(BOB) == 0


def test_nonce_table_never_wraps() -> None:
    n = NonceTable({ALICE: UINT256_MAX})
    with pytest.raises(ArithmeticOverflowError):
        n.use(ALICE)

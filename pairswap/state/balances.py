"""
Account balance tracking for fungible ledgers.

Implements BalanceTable[Address] -> Amount. The claim-token ledger and the
pooled asset ledgers each own one table; arithmetic on entries is done by the
ledger through `pairswap.kernels.safe_math`, the table only stores.
"""

from typing import Dict

from ..kernels.safe_math import UINT256_MAX
from .canonical import ZERO_ADDRESS


# Type aliases
Address = str  # 20-byte hex string (0x...)
Amount = int  # uint256

__all__ = ["Address", "Amount", "BalanceTable", "ZERO_ADDRESS"]


class BalanceTable:
    """
    Sparse balance table mapping account -> amount.

    Note: do not rely on dict iteration order; sort keys explicitly when a
    deterministic listing is needed (see `sorted_items`).
    """

    def __init__(self):
        self._balances: Dict[Address, Amount] = {}

    def get(self, account: Address) -> Amount:
        """Get balance for account. Returns 0 if not found."""
        return self._balances.get(account, 0)

    def set(self, account: Address, amount: Amount) -> None:
        """
        Set balance for account.

        Raises:
            ValueError: If amount is outside [0, 2**256)
        """
        if amount < 0 or amount > UINT256_MAX:
            raise ValueError(f"Balance out of uint256 range: {amount}")
        if amount == 0:
            # Remove zero balances to keep table sparse
            self._balances.pop(account, None)
        else:
            self._balances[account] = amount

    def total(self) -> Amount:
        return sum(self._balances.values())

    def sorted_items(self):
        return sorted(self._balances.items())

    def __len__(self) -> int:
        return len(self._balances)

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} entries)"

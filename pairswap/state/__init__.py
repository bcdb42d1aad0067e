"""
State tables and canonical encodings for PairSwap
"""

from .balances import Address, Amount, BalanceTable
from .canonical import ZERO_ADDRESS, canonical_address, keccak256
from .nonces import NonceTable
from .pools import PairState, compute_pair_address, sort_assets

__all__ = [
    "Address",
    "Amount",
    "BalanceTable",
    "NonceTable",
    "PairState",
    "ZERO_ADDRESS",
    "canonical_address",
    "compute_pair_address",
    "keccak256",
    "sort_assets",
]

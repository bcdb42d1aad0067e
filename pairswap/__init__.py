"""
PairSwap: two-asset constant-product liquidity pools.

Subpackages, leaves first:
- `pairswap.kernels`: checked integer arithmetic and the UQ112x112 price codec
- `pairswap.state`: account tables, pool state and canonical encodings
- `pairswap.core`: claim-token ledger, pool invariant engine and registry
- `pairswap.integration`: in-memory host chain and deployment config
- `pairswap.agents`: off-chain permit signing
"""

__version__ = "0.2.0"

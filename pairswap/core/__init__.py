"""
Core pool algorithms: claim-token ledger, pool invariant engine, registry
"""

from .assets import FungibleAsset, LegacyFungibleAsset
from .callee import PairCallee
from .claim_token import ClaimToken
from .contract import Contract
from .cpmm import (
    MINIMUM_LIQUIDITY,
    compute_liquidity_burned,
    compute_liquidity_minted,
    compute_protocol_fee_liquidity,
    get_amount_in,
    get_amount_out,
    quote,
)
from .factory import Factory
from .oracle import PriceObservation, average_prices, consult, current_cumulative_prices, observe
from .pair import Pair

__all__ = [
    "ClaimToken",
    "Contract",
    "Factory",
    "FungibleAsset",
    "LegacyFungibleAsset",
    "MINIMUM_LIQUIDITY",
    "Pair",
    "PairCallee",
    "PriceObservation",
    "average_prices",
    "compute_liquidity_burned",
    "compute_liquidity_minted",
    "compute_protocol_fee_liquidity",
    "consult",
    "current_cumulative_prices",
    "get_amount_in",
    "get_amount_out",
    "observe",
    "quote",
]

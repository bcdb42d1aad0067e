"""Exception types for pools, the claim-token ledger and the registry.

Every protocol-level rejection is a ``PairError`` subclass with a short, stable
``code``. All of them abort the current call; the host rolls back state.
"""

from __future__ import annotations

from typing import Optional


class PairError(Exception):
    """Base class for protocol rejections."""

    code: str = "ERROR"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.code)


class ArithmeticOverflowError(PairError):
    """Raised when a checked operation cannot represent its result."""

    code = "OVERFLOW"


class ReentrantCallError(PairError):
    """Raised when a pool entry point is invoked while the pool is locked."""

    code = "LOCKED"


class UnauthorizedError(PairError):
    code = "FORBIDDEN"


class ExpiredAuthorizationError(PairError):
    code = "EXPIRED"


class InvalidSignatureError(PairError):
    code = "INVALID_SIGNATURE"


class InsufficientLiquidityError(PairError):
    code = "INSUFFICIENT_LIQUIDITY"


class InsufficientLiquidityMintedError(PairError):
    code = "INSUFFICIENT_LIQUIDITY_MINTED"


class InsufficientLiquidityBurnedError(PairError):
    code = "INSUFFICIENT_LIQUIDITY_BURNED"


class InsufficientInputAmountError(PairError):
    code = "INSUFFICIENT_INPUT_AMOUNT"


class InsufficientOutputAmountError(PairError):
    code = "INSUFFICIENT_OUTPUT_AMOUNT"


class InsufficientAmountError(PairError):
    code = "INSUFFICIENT_AMOUNT"


class InvalidRecipientError(PairError):
    code = "INVALID_TO"


class InvariantViolationError(PairError):
    """Raised when the fee-adjusted product falls below the pre-trade product."""

    code = "K"


class TransferFailedError(PairError):
    code = "TRANSFER_FAILED"


class PairExistsError(PairError):
    code = "PAIR_EXISTS"


class IdenticalAssetsError(PairError):
    code = "IDENTICAL_ADDRESSES"


class NullAssetError(PairError):
    code = "ZERO_ADDRESS"

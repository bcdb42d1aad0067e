"""
Off-chain agent helpers for PairSwap
"""

from .permit_signer import PermitSignature, private_key_to_address, sign_digest, sign_permit

__all__ = [
    "PermitSignature",
    "private_key_to_address",
    "sign_digest",
    "sign_permit",
]

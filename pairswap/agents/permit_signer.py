"""
Off-chain permit signing for claim-token holders.

Computes the same typed-data digest the ledger verifies and signs it with a
secp256k1 private key, so a relayer can submit `permit` on the owner's behalf.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from py_ecc.secp256k1 import secp256k1

from ..core import eip712
from ..core.claim_token import ClaimToken
from ..state.balances import Address, Amount
from ..state.canonical import canonical_address


@dataclass(frozen=True)
class PermitSignature:
    v: int
    r: int
    s: int

    def as_args(self):
        return self.v, self.r, self.s


def _require_private_key(private_key: bytes) -> None:
    if not isinstance(private_key, (bytes, bytearray)) or len(private_key) != 32:
        raise ValueError("private_key must be 32 bytes")
    if not (0 < int.from_bytes(private_key, "big") < eip712.SECP256K1_N):
        raise ValueError("private_key out of range for secp256k1")


def private_key_to_address(private_key: bytes) -> Address:
    _require_private_key(private_key)
    return eip712.public_key_to_address(secp256k1.privtopub(bytes(private_key)))


def sign_digest(digest: bytes, private_key: bytes) -> PermitSignature:
    _require_private_key(private_key)
    if len(digest) != 32:
        raise ValueError("digest must be 32 bytes")
    v, r, s = secp256k1.ecdsa_raw_sign(digest, bytes(private_key))
    return PermitSignature(v=v, r=r, s=s)


def permit_digest(
    token: ClaimToken,
    *,
    owner: Address,
    spender: Address,
    value: Amount,
    nonce: int,
    deadline: int,
) -> bytes:
    return eip712.typed_data_digest(
        token.DOMAIN_SEPARATOR,
        eip712.permit_struct_hash(owner=owner, spender=spender, value=value, nonce=nonce, deadline=deadline),
    )


def sign_permit(
    private_key: bytes,
    token: ClaimToken,
    spender: Address,
    value: Amount,
    deadline: int,
    nonce: Optional[int] = None,
) -> PermitSignature:
    """
    Sign a permit for `spender` over the owner's current nonce (or `nonce`).

    The owner is the address of `private_key`.
    """
    owner = private_key_to_address(private_key)
    if nonce is None:
        nonce = token.nonces(owner)
    digest = permit_digest(
        token,
        owner=owner,
        spender=canonical_address(spender, name="spender"),
        value=value,
        nonce=nonce,
        deadline=deadline,
    )
    return sign_digest(digest, private_key)

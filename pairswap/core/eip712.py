"""
Domain-separated signature digests and signer recovery.

Digests follow the typed structured-data scheme used by permit-capable
ledgers:

    digest = keccak256(0x19 0x01 || domain_separator || struct_hash)

The domain separator binds a signature to one ledger name, version tag, chain
id and ledger address, so a signature never verifies on another ledger
instance or another chain. Recovery is secp256k1 public-key recovery, with the
same null-account result on failure as the host's `ecrecover`.
"""

from __future__ import annotations

from typing import Tuple

from py_ecc.secp256k1 import secp256k1

from ..state.balances import Address
from ..state.canonical import (
    ZERO_ADDRESS,
    abi_words,
    address_from_hash,
    canonical_address,
    keccak256,
    keccak256_text,
)


EIP712_DOMAIN_TYPEHASH = keccak256_text(
    "EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
)
PERMIT_TYPEHASH = keccak256_text(
    "Permit(address owner,address spender,uint256 value,uint256 nonce,uint256 deadline)"
)

SECP256K1_N = secp256k1.N


def domain_separator(*, name: str, version: str, chain_id: int, verifying_contract: Address) -> bytes:
    return keccak256(
        abi_words(
            ["bytes32", "bytes32", "bytes32", "uint256", "address"],
            [
                EIP712_DOMAIN_TYPEHASH,
                keccak256_text(name),
                keccak256_text(version),
                chain_id,
                canonical_address(verifying_contract),
            ],
        )
    )


def permit_struct_hash(*, owner: Address, spender: Address, value: int, nonce: int, deadline: int) -> bytes:
    return keccak256(
        abi_words(
            ["bytes32", "address", "address", "uint256", "uint256", "uint256"],
            [PERMIT_TYPEHASH, canonical_address(owner), canonical_address(spender), value, nonce, deadline],
        )
    )


def typed_data_digest(domain_sep: bytes, struct_hash: bytes) -> bytes:
    if len(domain_sep) != 32 or len(struct_hash) != 32:
        raise ValueError("domain separator and struct hash must be 32 bytes")
    return keccak256(b"\x19\x01" + domain_sep + struct_hash)


def public_key_to_address(public_key: Tuple[int, int]) -> Address:
    x, y = public_key
    return address_from_hash(keccak256(int(x).to_bytes(32, "big") + int(y).to_bytes(32, "big")))


def recover_signer(digest: bytes, v: int, r: int, s: int) -> Address:
    """
    Recover the signing address of `digest`, or the null address if the
    signature is malformed or does not correspond to a curve point.
    """
    if len(digest) != 32:
        raise ValueError("digest must be 32 bytes")
    if v not in (27, 28):
        return ZERO_ADDRESS
    if not (0 < r < SECP256K1_N and 0 < s < SECP256K1_N):
        return ZERO_ADDRESS
    try:
        point = secp256k1.ecdsa_raw_recover(digest, (v, r, s))
    except ValueError:
        return ZERO_ADDRESS
    if not point:
        return ZERO_ADDRESS
    return public_key_to_address(point)

"""
Deterministic canonical encoding primitives.

Addresses are 20-byte identifiers rendered as lower-case `0x`-prefixed hex;
ordering between assets is the ordering of these strings, which equals the
numeric ordering of the underlying bytes. Hashing is keccak-256 and structured
payloads use the Ethereum ABI word encoding so digests match what any
standard signing client computes.
"""

from __future__ import annotations

import re
from typing import Any, Sequence

from eth_abi import encode as abi_encode
from eth_utils import keccak


ADDRESS_NBYTES = 20
ZERO_ADDRESS = "0x" + "00" * ADDRESS_NBYTES

_HEX_CHARS_RE = re.compile(r"^[0-9a-fA-F]+$")


def keccak256(data: bytes) -> bytes:
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("data must be bytes")
    return keccak(bytes(data))


def keccak256_text(text: str) -> bytes:
    return keccak(text=text)


def canonical_hex_fixed_allow_0x(value: Any, *, nbytes: int, name: str) -> str:
    """
    Canonicalize a fixed-length hex string to lower-case `0x` form.

    Raises TypeError/ValueError on anything that is not exactly `nbytes` of hex.
    """
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    s = value[2:] if value.startswith(("0x", "0X")) else value
    if len(s) != 2 * nbytes:
        raise ValueError(f"{name} must be {nbytes} bytes (hex length {2 * nbytes})")
    if not _HEX_CHARS_RE.fullmatch(s):
        raise ValueError(f"{name} must be valid hex")
    return "0x" + s.lower()


def canonical_address(value: Any, *, name: str = "address") -> str:
    return canonical_hex_fixed_allow_0x(value, nbytes=ADDRESS_NBYTES, name=name)


def address_to_bytes(value: str) -> bytes:
    return bytes.fromhex(canonical_address(value)[2:])


def address_from_bytes(raw: bytes) -> str:
    if len(raw) != ADDRESS_NBYTES:
        raise ValueError(f"address must be {ADDRESS_NBYTES} bytes, got {len(raw)}")
    return "0x" + raw.hex()


def address_from_hash(digest: bytes) -> str:
    """Take the low 20 bytes of a 32-byte hash as an address."""
    if len(digest) != 32:
        raise ValueError("digest must be 32 bytes")
    return address_from_bytes(digest[-ADDRESS_NBYTES:])


def abi_words(types: Sequence[str], values: Sequence[Any]) -> bytes:
    """ABI-encode static values, one 32-byte word each (`abi.encode`)."""
    if len(types) != len(values):
        raise ValueError("types/values length mismatch")
    return abi_encode(list(types), list(values))

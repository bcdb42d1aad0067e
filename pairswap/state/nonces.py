"""
Nonce table for signature replay protection.

Per owner we track the next nonce a permit signature must commit to. A nonce
is consumed exactly once; the counter only moves forward.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from ..kernels import safe_math
from .balances import Address


@dataclass
class NonceTable:
    """Mutable mapping: owner -> next unused nonce."""

    _next: Dict[Address, int] = field(default_factory=dict)

    def get(self, owner: Address) -> int:
        v = self._next.get(owner, 0)
        if not isinstance(v, int) or isinstance(v, bool) or v < 0:
            raise ValueError(f"invalid stored nonce for {owner!r}: {v!r}")
        return int(v)

    def use(self, owner: Address) -> int:
        """Return the current nonce for `owner` and advance it."""
        current = self.get(owner)
        self._next[owner] = safe_math.add(current, 1)
        return current

"""
Claim-token ledger: the fungible liquidity-share token of a pair.

Standard balances/allowances plus `permit`, an approval granted by a
domain-separated secp256k1 signature instead of a call from the owner.
Invariant: the sum of all balances equals `total_supply`.
"""

from __future__ import annotations

import logging

from ..errors import ExpiredAuthorizationError, InvalidSignatureError
from ..kernels import safe_math
from ..kernels.safe_math import UINT256_MAX
from ..state.balances import Address, Amount, BalanceTable
from ..state.canonical import ZERO_ADDRESS, canonical_address
from ..state.nonces import NonceTable
from . import eip712
from .contract import Contract


logger = logging.getLogger(__name__)

CLAIM_TOKEN_NAME = "PairSwap V2"
CLAIM_TOKEN_SYMBOL = "PSW-V2"
CLAIM_TOKEN_VERSION = "1"


class ClaimToken(Contract):
    """
    Fungible share ledger with signature-based approvals.

    `_mint` and `_burn` are internal: only the owning pool calls them.
    """

    decimals = 18
    PERMIT_TYPEHASH = eip712.PERMIT_TYPEHASH

    def __init__(self, name: str = CLAIM_TOKEN_NAME, symbol: str = CLAIM_TOKEN_SYMBOL) -> None:
        self.name = name
        self.symbol = symbol
        self.total_supply: Amount = 0
        self._balances = BalanceTable()
        self._allowances: dict = {}
        self._nonces = NonceTable()
        self.DOMAIN_SEPARATOR = b""

    def on_deploy(self) -> None:
        self.DOMAIN_SEPARATOR = eip712.domain_separator(
            name=self.name,
            version=CLAIM_TOKEN_VERSION,
            chain_id=self.chain.chain_id,
            verifying_contract=self.address,
        )

    # -- reads ---------------------------------------------------------------

    def balance_of(self, account: Address) -> Amount:
        return self._balances.get(account)

    def allowance(self, owner: Address, spender: Address) -> Amount:
        return self._allowances.get((owner, spender), 0)

    def nonces(self, owner: Address) -> int:
        return self._nonces.get(owner)

    # -- internal ledger moves ----------------------------------------------

    def _mint(self, to: Address, value: Amount) -> None:
        self.total_supply = safe_math.add(self.total_supply, value)
        self._balances.set(to, safe_math.add(self._balances.get(to), value))
        self._emit("Transfer", sender=ZERO_ADDRESS, to=to, value=value)

    def _burn(self, owner: Address, value: Amount) -> None:
        self._balances.set(owner, safe_math.sub(self._balances.get(owner), value))
        self.total_supply = safe_math.sub(self.total_supply, value)
        self._emit("Transfer", sender=owner, to=ZERO_ADDRESS, value=value)

    def _approve(self, owner: Address, spender: Address, value: Amount) -> None:
        if value < 0 or value > UINT256_MAX:
            raise ValueError(f"allowance out of uint256 range: {value}")
        if value == 0:
            self._allowances.pop((owner, spender), None)
        else:
            self._allowances[(owner, spender)] = value
        self._emit("Approval", owner=owner, spender=spender, value=value)

    def _transfer(self, sender: Address, to: Address, value: Amount) -> None:
        self._balances.set(sender, safe_math.sub(self._balances.get(sender), value))
        self._balances.set(to, safe_math.add(self._balances.get(to), value))
        self._emit("Transfer", sender=sender, to=to, value=value)

    # -- public entry points -------------------------------------------------

    def approve(self, spender: Address, value: Amount) -> bool:
        self._approve(self.msg_sender, canonical_address(spender, name="spender"), value)
        return True

    def transfer(self, to: Address, value: Amount) -> bool:
        self._transfer(self.msg_sender, canonical_address(to, name="to"), value)
        return True

    def transfer_from(self, sender: Address, to: Address, value: Amount) -> bool:
        """
        Move `value` from `sender` to `to` using the caller's allowance.

        An allowance of 2**256 - 1 is infinite and is not decremented.
        """
        sender = canonical_address(sender, name="from")
        spender = self.msg_sender
        current = self.allowance(sender, spender)
        if current != UINT256_MAX:
            remaining = safe_math.sub(current, value)
            if remaining == 0:
                self._allowances.pop((sender, spender), None)
            else:
                self._allowances[(sender, spender)] = remaining
        self._transfer(sender, canonical_address(to, name="to"), value)
        return True

    def permit(
        self,
        owner: Address,
        spender: Address,
        value: Amount,
        deadline: int,
        v: int,
        r: int,
        s: int,
    ) -> None:
        """
        Approve `spender` for `value` on behalf of `owner` from a signature.

        The digest commits to the owner's current nonce, which is consumed here
        whether or not the signature then verifies; a failed verification
        aborts the call, so the host rolls the nonce back with it.

        Raises:
            ExpiredAuthorizationError: If the block timestamp is past `deadline`
            InvalidSignatureError: If the recovered signer is null or not `owner`
        """
        owner = canonical_address(owner, name="owner")
        spender = canonical_address(spender, name="spender")
        if deadline < self.block_timestamp:
            raise ExpiredAuthorizationError()
        nonce = self._nonces.use(owner)
        digest = eip712.typed_data_digest(
            self.DOMAIN_SEPARATOR,
            eip712.permit_struct_hash(
                owner=owner, spender=spender, value=value, nonce=nonce, deadline=deadline
            ),
        )
        recovered = eip712.recover_signer(digest, v, r, s)
        if recovered == ZERO_ADDRESS or recovered != owner:
            logger.debug("permit rejected: owner=%s recovered=%s nonce=%d", owner, recovered, nonce)
            raise InvalidSignatureError()
        self._approve(owner, spender, value)

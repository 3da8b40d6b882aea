"""
Owner-side permit signing.
"""
import logging

from eth_account import Account
from eth_account.messages import encode_typed_data
from eth_account.signers.local import LocalAccount

from .domain import DomainSeparator
from .encoding import build_typed_data
from .models import AuthorizationIntent, Signature
from .utils import AddressLike, short

logger = logging.getLogger(__name__)


class LocalSigner:
    """
    Signs permits with a private key held in memory.

    Keys are supplied by the caller; this class never generates or stores them.
    """

    def __init__(self, private_key: str):
        self.account: LocalAccount = Account.from_key(private_key)

    @property
    def address(self) -> str:
        return self.account.address

    def sign_intent(self, domain: DomainSeparator, intent: AuthorizationIntent) -> Signature:
        """
        Sign an intent as EIP-712 typed data.

        Args:
            domain: Domain of the verifying instance
            intent: Intent to sign; its owner should be this signer

        Returns:
            Signature with v in {27, 28}
        """
        if intent.owner != self.address:
            logger.warning(
                "Signing intent for owner %s with key of %s", short(intent.owner), short(self.address)
            )
        signable = encode_typed_data(full_message=build_typed_data(domain, intent))
        signed = self.account.sign_message(signable)
        return Signature(v=signed.v, r=signed.r, s=signed.s)

    def sign_permit(
        self,
        domain: DomainSeparator,
        spender: AddressLike,
        amount: int,
        nonce: int,
        deadline: int
    ) -> Signature:
        """
        Sign a permit granting spender an allowance of amount.

        Args:
            domain: Domain of the verifying instance
            spender: Address allowed to spend
            amount: Allowance to grant
            nonce: The owner's current nonce at the verifier
            deadline: Last timestamp (inclusive) at which the permit is valid

        Returns:
            Signature over the permit
        """
        intent = AuthorizationIntent(
            owner=self.address,
            spender=spender,
            amount=amount,
            nonce=nonce,
            deadline=deadline,
        )
        return self.sign_intent(domain, intent)

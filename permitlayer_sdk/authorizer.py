"""
PermitAuthorizer - entry point for applying signed permits.
"""
import logging
import threading
import time
from typing import Callable, List, Optional, Union

from ._rate_limited_log import rate_limited_log
from .domain import DomainSeparator
from .encoding import StructEncoder
from .exceptions import AuthorizationRejected, ExpiredError, SignerMismatchError
from .models import ApprovalEvent, AuthorizationIntent, Signature
from .nonces import NonceLedger
from .store import LedgerStore, MemoryLedgerStore
from .utils import AddressLike, check_uint256, is_zero_principal, short, to_principal
from .verifier import SignatureVerifier

ApprovalListener = Callable[[ApprovalEvent], None]
SignatureLike = Union[Signature, bytes, str, tuple]


class PermitAuthorizer:
    """
    Verifies signed permits and records the resulting allowances.

    Each call runs these gates in order and stops at the first failure:
    1. Deadline: the current time must not be past the signed deadline
    2. Nonce: the owner's current nonce is consumed (even if a later gate fails)
    3. Recovery: the signature must be well formed for the challenge hash
    4. Match: the recovered signer must be the owner
    5. Grant: the allowance (owner, spender) is overwritten with amount

    To use the authorizer you'll need:
    - A DomainSeparator for this verifying instance
    - Optionally a persistent LedgerStore (in-memory by default)
    """

    def __init__(
        self,
        domain: DomainSeparator,
        store: Optional[LedgerStore] = None,
        encoder: Optional[StructEncoder] = None,
        clock: Optional[Callable[[], int]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the PermitAuthorizer

        Args:
            domain: Domain separator binding signatures to this instance
            store: Ledger backend for nonces and allowances
            encoder: Struct encoder (defaults to the EIP-2612 permit type)
            clock: Callable returning the current unix time in seconds
            logger: Optional logger instance to use for debug/info logging
        """
        self._domain = domain
        self.store = store if store is not None else MemoryLedgerStore()
        self.nonces = NonceLedger(self.store)
        self.verifier = SignatureVerifier(domain, encoder)
        self.clock = clock or (lambda: int(time.time()))
        self.logger = logger or logging.getLogger(__name__)
        self._listeners: List[ApprovalListener] = []
        self._lock = threading.RLock()

    def domain_separator(self) -> DomainSeparator:
        return self._domain

    def current_nonce(self, owner: AddressLike) -> int:
        return self.nonces.current_nonce(owner)

    def allowance(self, owner: AddressLike, spender: AddressLike) -> int:
        return self.store.get_allowance(to_principal(owner), to_principal(spender))

    def add_listener(self, listener: ApprovalListener) -> None:
        """Register a callback invoked with every applied ApprovalEvent"""
        self._listeners.append(listener)

    def authorize(
        self,
        owner: AddressLike,
        spender: AddressLike,
        amount: int,
        deadline: int,
        signature: SignatureLike
    ) -> ApprovalEvent:
        """
        Apply a signed permit

        Args:
            owner: Address that signed the permit
            spender: Address receiving the allowance
            amount: Allowance to set
            deadline: Last unix timestamp (inclusive) at which the permit is valid
            signature: Signature, 65-byte signature, hex string or (v, r, s)

        Returns:
            The ApprovalEvent that was recorded

        Raises:
            ValueError: If an address, integer or signature is malformed
            ExpiredError: If the deadline has passed
            InvalidSignatureEncodingError: If the signature components are out of range
            SignerMismatchError: If the signer is not the owner (including stale nonces)
        """
        owner = to_principal(owner)
        spender = to_principal(spender)
        check_uint256(amount, "amount")
        check_uint256(deadline, "deadline")
        signature = Signature.coerce(signature)

        with self._lock, self.store.transaction():
            now = int(self.clock())
            expired = now > deadline
            # An expired permit still consumes the owner's nonce
            nonce = self.nonces.reserve_next(owner)

            try:
                if expired:
                    raise ExpiredError(deadline, now)

                intent = AuthorizationIntent(
                    owner=owner,
                    spender=spender,
                    amount=amount,
                    nonce=nonce,
                    deadline=deadline,
                )
                recovered = self.verifier.recover(intent, signature)
                if is_zero_principal(recovered) or recovered != owner:
                    raise SignerMismatchError(recovered, owner)
            except AuthorizationRejected as e:
                rate_limited_log(
                    f"Permit rejected ({e.reason.value}) for owner {short(owner)}: {e}",
                    logger_instance=self.logger
                )
                raise

            self.store.set_allowance(owner, spender, amount)

        event = ApprovalEvent(owner=owner, spender=spender, amount=amount)
        self.logger.info(
            "Approval: owner=%s spender=%s amount=%d nonce=%d",
            short(owner), short(spender), amount, nonce
        )
        self._notify(event)
        return event

    def _notify(self, event: ApprovalEvent) -> None:
        # Delivery is best effort; a listener cannot undo an applied grant
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                self.logger.error("Approval listener %r failed: %s", listener, e)

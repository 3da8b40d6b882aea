"""
Per-owner nonce ledger.
"""
import logging
from typing import Optional

from .store import LedgerStore, MemoryLedgerStore
from .utils import AddressLike, short, to_principal

logger = logging.getLogger(__name__)


class NonceLedger:
    """
    Strictly increasing counter per owner.

    A reserved nonce is consumed for good; there is no release.
    """

    def __init__(self, store: Optional[LedgerStore] = None):
        self.store = store if store is not None else MemoryLedgerStore()

    def current_nonce(self, owner: AddressLike) -> int:
        return self.store.get_nonce(to_principal(owner))

    def reserve_next(self, owner: AddressLike) -> int:
        """
        Consume the owner's current nonce.

        Args:
            owner: Owner address

        Returns:
            The nonce value that was current before the increment
        """
        owner = to_principal(owner)
        nonce = self.store.increment_nonce(owner)
        logger.debug("Reserved nonce %d for %s", nonce, short(owner))
        return nonce

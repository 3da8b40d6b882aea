"""
Exceptions for the PermitLayer SDK.
"""
from enum import Enum


class RejectReason(str, Enum):
    """
    Reason codes for a rejected authorization.

    Every ``AuthorizationRejected`` carries one of these in ``.reason``.
    """
    EXPIRED = "EXPIRED"
    INVALID_SIGNATURE_ENCODING = "INVALID_SIGNATURE_ENCODING"
    SIGNER_MISMATCH = "SIGNER_MISMATCH"


class PermitLayerError(Exception):
    """Base exception for PermitLayer errors."""
    pass


class AuthorizationRejected(PermitLayerError):
    """Raised when a permit fails one of the authorization gates."""

    def __init__(self, message: str, reason: RejectReason):
        self.reason = RejectReason(reason)
        super().__init__(message)


class ExpiredError(AuthorizationRejected):
    """Raised when the current time is past the signed deadline."""

    def __init__(self, deadline: int, now: int):
        self.deadline = deadline
        self.now = now
        super().__init__(
            f"Permit expired: deadline {deadline} < now {now}", RejectReason.EXPIRED
        )


class InvalidSignatureEncodingError(AuthorizationRejected):
    """Raised when v, r or s are outside their valid range."""

    def __init__(self, message: str):
        super().__init__(message, RejectReason.INVALID_SIGNATURE_ENCODING)


class SignerMismatchError(AuthorizationRejected):
    """Raised when the recovered signer is not the claimed owner."""

    def __init__(self, recovered: str, claimed: str):
        self.recovered = recovered
        self.claimed = claimed
        super().__init__(
            f"Signer mismatch: recovered {recovered}, expected {claimed}",
            RejectReason.SIGNER_MISMATCH
        )


class LedgerStoreError(PermitLayerError):
    """Raised when persisted ledger state cannot be read or written."""
    pass

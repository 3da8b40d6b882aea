"""
PermitLayer SDK - off-chain verification of EIP-2612 style permits.
"""
from .authorizer import PermitAuthorizer
from .config import PermitConfig
from .domain import DomainSeparator, compute_domain_separator
from .encoding import StructEncoder, build_typed_data, encode_intent
from .exceptions import (
    AuthorizationRejected,
    ExpiredError,
    InvalidSignatureEncodingError,
    LedgerStoreError,
    PermitLayerError,
    RejectReason,
    SignerMismatchError,
)
from .models import ApprovalEvent, AuthorizationIntent, Signature
from .nonces import NonceLedger
from .signer import LocalSigner
from .store import JsonFileLedgerStore, LedgerStore, MemoryLedgerStore
from .verifier import SignatureVerifier, challenge_hash, recover_signer
from .version import __version__

__all__ = [
    "PermitAuthorizer",
    "PermitConfig",
    "DomainSeparator",
    "compute_domain_separator",
    "StructEncoder",
    "build_typed_data",
    "encode_intent",
    "AuthorizationRejected",
    "ExpiredError",
    "InvalidSignatureEncodingError",
    "LedgerStoreError",
    "PermitLayerError",
    "RejectReason",
    "SignerMismatchError",
    "ApprovalEvent",
    "AuthorizationIntent",
    "Signature",
    "NonceLedger",
    "LocalSigner",
    "JsonFileLedgerStore",
    "LedgerStore",
    "MemoryLedgerStore",
    "SignatureVerifier",
    "challenge_hash",
    "recover_signer",
    "__version__",
]

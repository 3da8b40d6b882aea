"""
Struct encoding for permit intents.
"""
from typing import Any, Dict, List

from eth_abi import encode as abi_encode

from .constants import PERMIT_TYPE
from .domain import EIP712_DOMAIN_FIELDS, DomainSeparator
from .models import AuthorizationIntent
from .utils import keccak

PERMIT_TYPEHASH = keccak(PERMIT_TYPE.encode("utf-8"))

PERMIT_FIELDS: List[Dict[str, str]] = [
    {"name": "owner", "type": "address"},
    {"name": "spender", "type": "address"},
    {"name": "value", "type": "uint256"},
    {"name": "nonce", "type": "uint256"},
    {"name": "deadline", "type": "uint256"},
]


class StructEncoder:
    """
    Hashes permit intents under a fixed type descriptor.

    The descriptor string is part of every hash, so a change in field order
    or naming yields an unrelated hash.
    """

    primary_type = "Permit"

    def __init__(self, type_descriptor: str = PERMIT_TYPE):
        self.type_descriptor = type_descriptor
        self.type_hash = keccak(type_descriptor.encode("utf-8"))

    def encode(self, intent: AuthorizationIntent) -> bytes:
        """
        Hash an intent.

        Args:
            intent: Intent to encode

        Returns:
            32-byte struct hash
        """
        encoded = abi_encode(
            ["bytes32", "address", "address", "uint256", "uint256", "uint256"],
            [
                self.type_hash,
                intent.owner,
                intent.spender,
                intent.amount,
                intent.nonce,
                intent.deadline,
            ],
        )
        return keccak(encoded)


_default_encoder = StructEncoder()


def encode_intent(intent: AuthorizationIntent) -> bytes:
    return _default_encoder.encode(intent)


def build_typed_data(domain: DomainSeparator, intent: AuthorizationIntent) -> Dict[str, Any]:
    """
    Build the full EIP-712 typed-data document for an intent.

    The result can be passed to wallets or to
    ``eth_account.messages.encode_typed_data(full_message=...)``.
    """
    return {
        "types": {
            "EIP712Domain": EIP712_DOMAIN_FIELDS,
            "Permit": PERMIT_FIELDS,
        },
        "primaryType": StructEncoder.primary_type,
        "domain": domain.to_eip712_dict(),
        "message": intent.to_message(),
    }

"""
Challenge hashing and signer recovery.

Recovery is total: it returns whatever address the signature implies and
leaves the comparison with the claimed owner to the caller.
"""
import logging
from typing import Optional

from eth_keys import keys
from eth_keys.exceptions import BadSignature, ValidationError

from .constants import EIP712_PREFIX, SECP256K1_HALF_N, SECP256K1_N
from .domain import DomainSeparator
from .encoding import StructEncoder
from .exceptions import InvalidSignatureEncodingError
from .models import AuthorizationIntent, Signature
from .utils import keccak

logger = logging.getLogger(__name__)


def challenge_hash(domain_separator: bytes, struct_hash: bytes) -> bytes:
    """
    Combine a domain separator and struct hash into the signed digest.

    Args:
        domain_separator: 32-byte domain separator
        struct_hash: 32-byte struct hash

    Returns:
        keccak256(0x19 0x01 || domain_separator || struct_hash)

    Raises:
        ValueError: If either input is not 32 bytes
    """
    if len(domain_separator) != 32 or len(struct_hash) != 32:
        raise ValueError("domain_separator and struct_hash must be 32 bytes each")
    return keccak(EIP712_PREFIX + domain_separator + struct_hash)


def _normalize_v(v: int) -> int:
    if v in (27, 28):
        return v - 27
    if v in (0, 1):
        return v
    raise InvalidSignatureEncodingError(f"Invalid recovery id v={v}")


def recover_signer(challenge: bytes, signature: Signature) -> str:
    """
    Recover the address that produced signature over challenge.

    Args:
        challenge: 32-byte digest
        signature: Signature components

    Returns:
        Checksummed address implied by the signature

    Raises:
        InvalidSignatureEncodingError: If v, r or s are out of range or no
            public key can be recovered
    """
    if len(challenge) != 32:
        raise ValueError("challenge must be 32 bytes")

    v = _normalize_v(signature.v)
    if not 0 < signature.r < SECP256K1_N:
        raise InvalidSignatureEncodingError("Signature r out of range")
    # Only the low-s form is accepted; (r, n - s) would otherwise be a second
    # valid signature for the same digest
    if not 0 < signature.s <= SECP256K1_HALF_N:
        raise InvalidSignatureEncodingError("Signature s not in canonical low-s range")

    try:
        public_key = keys.Signature(vrs=(v, signature.r, signature.s)).recover_public_key_from_msg_hash(
            challenge
        )
    except (BadSignature, ValidationError) as e:
        raise InvalidSignatureEncodingError(f"Signature recovery failed: {e}") from e

    return public_key.to_checksum_address()


class SignatureVerifier:
    """Recovers permit signers for one domain"""

    def __init__(self, domain: DomainSeparator, encoder: Optional[StructEncoder] = None):
        self.domain = domain
        self.encoder = encoder or StructEncoder()

    def challenge_for(self, intent: AuthorizationIntent) -> bytes:
        struct_hash = self.encoder.encode(intent)
        return challenge_hash(self.domain.separator, struct_hash)

    def recover(self, intent: AuthorizationIntent, signature: Signature) -> str:
        """
        Recover the signer of intent.

        The result is not checked against ``intent.owner``.
        """
        challenge = self.challenge_for(intent)
        signer = recover_signer(challenge, signature)
        logger.debug("Recovered signer %s for challenge 0x%s", signer, challenge.hex()[:16])
        return signer

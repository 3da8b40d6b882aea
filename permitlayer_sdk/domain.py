"""
EIP-712 domain binding.

The domain separator ties every signature to one protocol name/version, one
chain and one verifying contract, so a permit signed for one deployment is
meaningless to another.
"""
import logging
from typing import Any, Dict

from eth_abi import encode as abi_encode
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator
from web3 import Web3

from .constants import EIP712_DOMAIN_TYPE, UINT256_MAX
from .utils import check_uint256, keccak, to_principal

logger = logging.getLogger(__name__)

EIP712_DOMAIN_TYPEHASH = keccak(EIP712_DOMAIN_TYPE.encode("utf-8"))

EIP712_DOMAIN_FIELDS = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]


def compute_domain_separator(
    name: str,
    version: str,
    chain_id: int,
    verifying_contract: str
) -> bytes:
    """
    Compute the EIP-712 domain separator.

    Args:
        name: Protocol (token) name
        version: Protocol version string
        chain_id: Chain/network identifier
        verifying_contract: Address of the verifying instance

    Returns:
        32-byte separator hash

    Raises:
        ValueError: If chain_id does not fit in uint256
    """
    check_uint256(chain_id, "chain_id")
    encoded = abi_encode(
        ["bytes32", "bytes32", "bytes32", "uint256", "address"],
        [
            EIP712_DOMAIN_TYPEHASH,
            keccak(name.encode("utf-8")),
            keccak(version.encode("utf-8")),
            chain_id,
            to_principal(verifying_contract),
        ],
    )
    return keccak(encoded)


class DomainSeparator(BaseModel):
    """
    Domain of one verifying instance.

    The separator hash is computed once at construction and cached.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    chain_id: int = Field(..., ge=0, le=UINT256_MAX)
    verifying_contract: str

    _separator: bytes = PrivateAttr(default=b"")

    @field_validator("verifying_contract", mode="before")
    @classmethod
    def _checksum(cls, value: Any) -> str:
        return to_principal(value)

    def model_post_init(self, __context: Any) -> None:
        self._separator = compute_domain_separator(
            self.name, self.version, self.chain_id, self.verifying_contract
        )
        logger.debug(
            "Domain %s v%s on chain %d bound to %s",
            self.name, self.version, self.chain_id, self.verifying_contract
        )

    @property
    def separator(self) -> bytes:
        return self._separator

    def hex(self) -> str:
        return "0x" + self._separator.hex()

    def to_eip712_dict(self) -> Dict[str, Any]:
        """Render the domain as used in EIP-712 typed data."""
        return {
            "name": self.name,
            "version": self.version,
            "chainId": self.chain_id,
            "verifyingContract": self.verifying_contract,
        }

    @classmethod
    def from_web3(
        cls,
        w3: Web3,
        name: str,
        version: str,
        verifying_contract: str
    ) -> "DomainSeparator":
        """
        Build a domain using the chain id reported by a web3 provider.

        Args:
            w3: Connected Web3 instance
            name: Protocol name
            version: Protocol version
            verifying_contract: Address of the verifying instance

        Returns:
            DomainSeparator bound to the provider's chain
        """
        chain_id = int(w3.eth.chain_id)
        logger.info("Using chain id %d from provider", chain_id)
        return cls(
            name=name,
            version=version,
            chain_id=chain_id,
            verifying_contract=verifying_contract,
        )

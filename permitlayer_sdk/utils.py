"""
Helpers for principals and fixed-width values.
"""
from typing import Union

from web3 import Web3

from .constants import UINT256_MAX, ZERO_ADDRESS

AddressLike = Union[str, bytes]


def to_principal(value: AddressLike) -> str:
    """
    Normalize an address to its EIP-55 checksum form.

    Args:
        value: Hex address string (lowercase, uppercase or EIP-55 mixed case,
            with or without 0x) or 20 raw bytes

    Returns:
        Checksummed address string

    Raises:
        ValueError: If the value is not a 20-byte address or a mixed-case
            address fails its checksum
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 20:
            raise ValueError(f"Address must be 20 bytes, got {len(value)}")
        value = "0x" + bytes(value).hex()
    if not isinstance(value, str):
        raise ValueError(f"Address must be str or bytes, got {type(value).__name__}")
    if value.startswith("0X"):
        value = "0x" + value[2:]
    elif not value.startswith("0x"):
        value = "0x" + value
    # Mixed-case input must carry a valid EIP-55 checksum
    if not Web3.is_address(value):
        raise ValueError(f"Invalid address or checksum: {value}")
    return Web3.to_checksum_address(value)


def is_zero_principal(address: str) -> bool:
    return address.lower() == ZERO_ADDRESS


def check_uint256(value: int, name: str = "value") -> int:
    """Validate that value fits an unsigned 256-bit integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0 or value > UINT256_MAX:
        raise ValueError(f"{name} out of uint256 range: {value}")
    return value


def short(address: str) -> str:
    """Truncate an address for log lines."""
    return f"{address[:10]}…"


def keccak(data: bytes) -> bytes:
    return bytes(Web3.keccak(primitive=data))

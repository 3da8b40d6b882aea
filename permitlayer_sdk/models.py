"""
Data models for the PermitLayer SDK.
"""
from typing import Annotated, Any, Dict, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import UINT256_MAX
from .utils import to_principal

Uint256 = Annotated[int, Field(ge=0, le=UINT256_MAX)]


class Signature(BaseModel):
    """
    ECDSA signature components.

    Range checks against the curve order are left to the verifier so that
    out-of-range values surface as ``InvalidSignatureEncodingError``.
    """
    model_config = ConfigDict(frozen=True)

    v: int = Field(..., ge=0, le=255)
    r: Uint256
    s: Uint256

    @field_validator("r", "s", mode="before")
    @classmethod
    def _parse_hex(cls, value: Any) -> Any:
        if isinstance(value, str):
            return int(value, 16)
        if isinstance(value, (bytes, bytearray)):
            return int.from_bytes(value, "big")
        return value

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Signature":
        """Parse the 65-byte ``r || s || v`` wire format."""
        if len(raw) != 65:
            raise ValueError(f"Signature must be 65 bytes, got {len(raw)}")
        return cls(
            r=int.from_bytes(raw[:32], "big"),
            s=int.from_bytes(raw[32:64], "big"),
            v=raw[64],
        )

    @classmethod
    def from_hex(cls, value: str) -> "Signature":
        if value.startswith(("0x", "0X")):
            value = value[2:]
        return cls.from_bytes(bytes.fromhex(value))

    @classmethod
    def coerce(cls, value: Union["Signature", bytes, str, tuple]) -> "Signature":
        """Accept a Signature, raw bytes, hex string or (v, r, s) tuple."""
        if isinstance(value, cls):
            return value
        if isinstance(value, (bytes, bytearray)):
            return cls.from_bytes(bytes(value))
        if isinstance(value, str):
            return cls.from_hex(value)
        if isinstance(value, tuple) and len(value) == 3:
            v, r, s = value
            return cls(v=v, r=r, s=s)
        raise ValueError(f"Unsupported signature type: {type(value).__name__}")

    def to_bytes(self) -> bytes:
        return self.r.to_bytes(32, "big") + self.s.to_bytes(32, "big") + bytes([self.v])

    def to_hex(self) -> str:
        return "0x" + self.to_bytes().hex()


class AuthorizationIntent(BaseModel):
    """A permit: owner lets spender use amount, bound to nonce and deadline."""
    model_config = ConfigDict(frozen=True)

    owner: str
    spender: str
    amount: Uint256
    nonce: Uint256
    deadline: Uint256

    @field_validator("owner", "spender", mode="before")
    @classmethod
    def _checksum(cls, value: Any) -> str:
        return to_principal(value)

    def to_message(self) -> Dict[str, Any]:
        """Render as the EIP-712 ``Permit`` message."""
        return {
            "owner": self.owner,
            "spender": self.spender,
            "value": self.amount,
            "nonce": self.nonce,
            "deadline": self.deadline,
        }


class ApprovalEvent(BaseModel):
    """Notification emitted when a permit is applied"""
    model_config = ConfigDict(frozen=True)

    owner: str
    spender: str
    amount: int

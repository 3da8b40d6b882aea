"""
Configuration for a PermitAuthorizer deployment.
"""
import logging
import os
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .authorizer import PermitAuthorizer
from .constants import UINT256_MAX
from .domain import DomainSeparator
from .store import open_store
from .utils import to_principal

logger = logging.getLogger(__name__)


class PermitConfig(BaseModel):
    """Domain parameters and ledger location"""
    domain_name: str
    domain_version: str = "1"
    chain_id: int = Field(..., ge=0, le=UINT256_MAX)
    verifying_contract: str
    ledger_path: Optional[str] = None

    @field_validator("verifying_contract", mode="before")
    @classmethod
    def _checksum(cls, value: Any) -> str:
        return to_principal(value)

    @classmethod
    def from_env(cls) -> "PermitConfig":
        """
        Read configuration from PERMIT_* environment variables.

        Raises:
            ValueError: If a required variable is missing or invalid
        """
        missing = [
            name for name in ("PERMIT_DOMAIN_NAME", "PERMIT_CHAIN_ID", "PERMIT_VERIFYING_CONTRACT")
            if not os.environ.get(name)
        ]
        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")

        chain_id = os.environ["PERMIT_CHAIN_ID"]
        try:
            chain_id_value = int(chain_id, 0)
        except ValueError:
            raise ValueError(f"PERMIT_CHAIN_ID must be an integer, got: {chain_id}")

        return cls(
            domain_name=os.environ["PERMIT_DOMAIN_NAME"],
            domain_version=os.environ.get("PERMIT_DOMAIN_VERSION", "1"),
            chain_id=chain_id_value,
            verifying_contract=os.environ["PERMIT_VERIFYING_CONTRACT"],
            ledger_path=os.environ.get("PERMIT_LEDGER_PATH") or None,
        )

    def domain(self) -> DomainSeparator:
        return DomainSeparator(
            name=self.domain_name,
            version=self.domain_version,
            chain_id=self.chain_id,
            verifying_contract=self.verifying_contract,
        )

    def build_authorizer(self, **kwargs: Any) -> PermitAuthorizer:
        """Create a PermitAuthorizer for this configuration"""
        if not self.ledger_path:
            logger.warning("No ledger_path configured; nonces and allowances will not persist")
        return PermitAuthorizer(self.domain(), store=open_store(self.ledger_path), **kwargs)

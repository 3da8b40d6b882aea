#!/usr/bin/env python
"""
Simple usage example for PermitLayer SDK.

An owner signs a permit off-chain; a relayer submits it to the authorizer.
"""
import logging
import os
import time

from permitlayer_sdk import (
    AuthorizationRejected, DomainSeparator, JsonFileLedgerStore, LocalSigner, PermitAuthorizer
)

logging.basicConfig(level=logging.INFO)

# Configuration
OWNER_KEY = os.environ.get("OWNER_PRIVATE_KEY", "0x" + "01" * 32)
SPENDER = os.environ.get("SPENDER_ADDRESS", "0x000000000000000000000000000000000000beef")
LEDGER_PATH = os.environ.get("PERMIT_LEDGER_PATH", "permit-ledger.json")


def main():
    domain = DomainSeparator(
        name="Example Token",
        version="1",
        chain_id=11155111,
        verifying_contract="0x1234567890123456789012345678901234567890",
    )
    authorizer = PermitAuthorizer(domain, store=JsonFileLedgerStore(LEDGER_PATH))
    authorizer.add_listener(lambda event: print(f"Approval recorded: {event.model_dump()}"))

    owner = LocalSigner(OWNER_KEY)
    nonce = authorizer.current_nonce(owner.address)
    deadline = int(time.time()) + 600

    signature = owner.sign_permit(domain, SPENDER, 1_000, nonce, deadline)
    print(f"Owner {owner.address} signed nonce {nonce}: {signature.to_hex()}")

    authorizer.authorize(owner.address, SPENDER, 1_000, deadline, signature)
    print(f"Allowance now {authorizer.allowance(owner.address, SPENDER)}")

    # Submitting the same permit again is a replay
    try:
        authorizer.authorize(owner.address, SPENDER, 1_000, deadline, signature)
    except AuthorizationRejected as e:
        print(f"Replay rejected: {e.reason.value}")


if __name__ == "__main__":
    main()

"""
Pytest fixtures for the PermitLayer SDK tests.
"""
import pytest
from eth_account import Account

from permitlayer_sdk import DomainSeparator, LocalSigner, MemoryLedgerStore, PermitAuthorizer
from permitlayer_sdk._rate_limited_log import reset_rate_limited_log

# Constants for testing
TEST_PRIV_KEY = "0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
TEST_OTHER_KEY = "0x" + "11" * 32
TEST_SPENDER_KEY = "0x" + "22" * 32
TEST_CONTRACT = "0x1234567890123456789012345678901234567890"
TEST_CHAIN_ID = 11155111  # Sepolia testnet ID
TEST_NAME = "Permit Token"
TEST_NOW = 1700000000
TEST_DEADLINE = TEST_NOW + 3600


class FakeClock:
    """Settable clock returning unix seconds"""

    def __init__(self, now: int = TEST_NOW):
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture(autouse=True)
def _reset_log_cache():
    reset_rate_limited_log()
    yield
    reset_rate_limited_log()


@pytest.fixture
def domain():
    return DomainSeparator(
        name=TEST_NAME,
        version="1",
        chain_id=TEST_CHAIN_ID,
        verifying_contract=TEST_CONTRACT,
    )


@pytest.fixture
def owner():
    """Signer for the permit owner"""
    return LocalSigner(TEST_PRIV_KEY)


@pytest.fixture
def other():
    """A second, unrelated key holder"""
    return LocalSigner(TEST_OTHER_KEY)


@pytest.fixture
def spender():
    return Account.from_key(TEST_SPENDER_KEY).address


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return MemoryLedgerStore()


@pytest.fixture
def authorizer(domain, store, clock):
    return PermitAuthorizer(domain, store=store, clock=clock)

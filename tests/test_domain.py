"""
Tests for domain separator computation.
"""
import pytest
from unittest.mock import MagicMock
from eth_account.messages import encode_typed_data
from pydantic import ValidationError
from web3 import Web3

from permitlayer_sdk.domain import (
    EIP712_DOMAIN_TYPEHASH, DomainSeparator, compute_domain_separator
)
from permitlayer_sdk.encoding import build_typed_data
from permitlayer_sdk.models import AuthorizationIntent
from tests.conftest import TEST_CHAIN_ID, TEST_CONTRACT, TEST_NAME


def test_domain_typehash_constant():
    # keccak256("EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)")
    assert EIP712_DOMAIN_TYPEHASH.hex() == (
        "8b73c3c69bb8fe3d512ecc4cf759cc79239f7b179b0ffacaa9a75d522b39400f"
    )


def test_separator_is_deterministic(domain):
    again = compute_domain_separator(TEST_NAME, "1", TEST_CHAIN_ID, TEST_CONTRACT)
    assert domain.separator == again
    assert len(domain.separator) == 32
    assert domain.hex() == "0x" + again.hex()


def test_separator_matches_eth_account_typed_data(domain, owner, spender):
    """The separator must equal the domain hash eth_account signs over"""
    intent = AuthorizationIntent(
        owner=owner.address, spender=spender, amount=1, nonce=0, deadline=1
    )
    signable = encode_typed_data(full_message=build_typed_data(domain, intent))
    assert signable.header == domain.separator


@pytest.mark.parametrize("field,value", [
    ("name", "Other Token"),
    ("version", "2"),
    ("chain_id", 1),
    ("verifying_contract", "0x0000000000000000000000000000000000000001"),
])
def test_any_field_change_changes_separator(domain, field, value):
    params = domain.model_dump()
    params[field] = value
    assert DomainSeparator(**params).separator != domain.separator


def test_contract_address_case_is_normalized():
    lower = DomainSeparator(
        name=TEST_NAME, version="1", chain_id=1, verifying_contract=TEST_CONTRACT.lower()
    )
    checksummed = DomainSeparator(
        name=TEST_NAME, version="1", chain_id=1,
        verifying_contract=Web3.to_checksum_address(TEST_CONTRACT)
    )
    assert lower.separator == checksummed.separator
    assert lower.verifying_contract == Web3.to_checksum_address(TEST_CONTRACT)


def test_domain_is_immutable(domain):
    with pytest.raises(ValidationError):
        domain.chain_id = 1


def test_invalid_contract_rejected():
    with pytest.raises(ValidationError):
        DomainSeparator(name=TEST_NAME, version="1", chain_id=1, verifying_contract="0x1234")


def test_to_eip712_dict(domain):
    assert domain.to_eip712_dict() == {
        "name": TEST_NAME,
        "version": "1",
        "chainId": TEST_CHAIN_ID,
        "verifyingContract": Web3.to_checksum_address(TEST_CONTRACT),
    }


def test_from_web3_uses_provider_chain_id():
    mock_w3 = MagicMock(spec=Web3)
    mock_w3.eth = MagicMock()
    mock_w3.eth.chain_id = 10

    domain = DomainSeparator.from_web3(mock_w3, TEST_NAME, "1", TEST_CONTRACT)

    assert domain.chain_id == 10
    assert domain.separator == compute_domain_separator(TEST_NAME, "1", 10, TEST_CONTRACT)


@pytest.mark.parametrize("chain_id", [-1, 2**256])
def test_chain_id_outside_uint256_rejected(chain_id):
    with pytest.raises(ValidationError):
        DomainSeparator(
            name=TEST_NAME, version="1", chain_id=chain_id, verifying_contract=TEST_CONTRACT
        )
    with pytest.raises(ValueError, match="chain_id"):
        compute_domain_separator(TEST_NAME, "1", chain_id, TEST_CONTRACT)


def test_chain_id_uint256_max_accepted():
    domain = DomainSeparator(
        name=TEST_NAME, version="1", chain_id=2**256 - 1, verifying_contract=TEST_CONTRACT
    )
    assert len(domain.separator) == 32

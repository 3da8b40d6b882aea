"""
Protocol constants for the PermitLayer SDK.
"""

# SECP256K1 constants
# Order of the SECP256K1 elliptic curve (N value)
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

# Upper bound for canonical (low-s) signatures
SECP256K1_HALF_N = SECP256K1_N // 2

UINT256_MAX = 2**256 - 1

# The null principal; never a valid owner
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# EIP-712 type descriptors
EIP712_DOMAIN_TYPE = (
    "EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
)
PERMIT_TYPE = (
    "Permit(address owner,address spender,uint256 value,uint256 nonce,uint256 deadline)"
)

# Prefix for the final signed digest: "\x19" version byte + EIP-712 version 0x01
EIP712_PREFIX = b"\x19\x01"

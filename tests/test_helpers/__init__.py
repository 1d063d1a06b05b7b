"""
Shared constants and helpers for the test suite.
"""
from typing import Any, Sequence

from eth_abi import encode

# Digits only, so lowercase and checksummed forms are identical
TEST_CONTRACT = "0x1234567890123456789012345678901234567890"
TEST_ACCOUNT = "0x0987654321098765432109876543210987654321"
TEST_RPC_URL = "https://rpc.example.com"
TEST_TX_HASH = "0x" + "ab" * 32

# USDC on mainnet, lowercase
USDC_LOWER = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"


def encode_result(types: Sequence[str], values: Sequence[Any]) -> str:
    """Hex-encode return values the way a node would answer eth_call."""
    return "0x" + encode(list(types), list(values)).hex()

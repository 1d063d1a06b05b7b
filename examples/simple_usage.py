#!/usr/bin/env python3
"""
Simple example of using the contractcall SDK.
"""
import logging
import os

from contractcall_sdk import AmbiguousSelector, Contract, DispatchConfig, Dispatcher, Typed

USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"


def main():
    """
    Demonstrate basic usage of the Dispatcher.

    This example shows how to:
    1. Build a configuration from the environment
    2. Bind the bundled ERC-20 ABI to a token address
    3. Read balances, and resolve an ambiguous overload with Typed
    """
    logging.basicConfig(level=logging.INFO)

    if not os.environ.get("CONTRACTCALL_RPC_URL"):
        print("ERROR: CONTRACTCALL_RPC_URL environment variable is required")
        return

    dispatcher = Dispatcher(DispatchConfig.from_env())
    token = Contract(abi="erc20", address=os.environ.get("TOKEN_ADDRESS", USDC))
    holder = os.environ.get("HOLDER_ADDRESS", "0x0000000000000000000000000000000000000000")

    print(token.functions.balanceOf.help())

    symbol, = dispatcher.call(token.functions.symbol())
    decimals, = dispatcher.call(token.functions.decimals())
    balance, = dispatcher.call(token.functions.balanceOf(holder))
    print(f"{holder} holds {balance / 10 ** decimals} {symbol}")

    # Overloads that accept the same literal need an explicit type
    vault = Contract(abi=[
        {"type": "function", "name": "setLimit", "stateMutability": "nonpayable",
         "inputs": [{"name": "limit", "type": "uint8"}], "outputs": []},
        {"type": "function", "name": "setLimit", "stateMutability": "nonpayable",
         "inputs": [{"name": "limit", "type": "uint256"}], "outputs": []},
    ])
    try:
        vault.functions.setLimit(5)
    except AmbiguousSelector as e:
        print(e)
    params = vault.functions.setLimit(Typed("uint8", 5))
    print(f"Call data for {params['selector'].signature}: {params['data']}")


if __name__ == "__main__":
    main()

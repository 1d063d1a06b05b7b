"""
Pytest fixtures for the contractcall SDK tests.
"""
import pytest
from eth_abi import encode

from contractcall_sdk.config import DispatchConfig
from contractcall_sdk.dispatcher import Dispatcher
from contractcall_sdk.models import FunctionSelector, StateMutability
from contractcall_sdk.transport._rate_limited_log import reset_rate_limited_log
from contractcall_sdk.transport.stub_transport import StubTransport

from tests.test_helpers import TEST_ACCOUNT, TEST_CONTRACT


@pytest.fixture(autouse=True)
def _reset_log_suppression():
    """Rate-limited log state must not leak between tests."""
    reset_rate_limited_log()
    yield
    reset_rate_limited_log()


@pytest.fixture
def stub_transport():
    """A recording transport with the default canned responses"""
    return StubTransport()


@pytest.fixture
def dispatcher(stub_transport):
    """Dispatcher whose default transport is the recording stub"""
    return Dispatcher(DispatchConfig(transport=stub_transport))


@pytest.fixture
def transfer_selectors():
    """The transfer overloads used by the end-to-end resolution scenarios"""
    return [
        FunctionSelector(
            function="transfer",
            types=("address", "uint256"),
            input_names=("to", "amount"),
            returns=("bool",),
            state_mutability=StateMutability.NON_PAYABLE,
        ),
        FunctionSelector(
            function="transfer",
            types=("address", "uint256", "bytes"),
            input_names=("to", "amount", "data"),
            returns=("bool",),
            state_mutability=StateMutability.NON_PAYABLE,
        ),
    ]


@pytest.fixture
def balance_of_params():
    """CallParams for balanceOf(address) -> uint256 addressed to the test contract"""
    selector = FunctionSelector(
        function="balanceOf",
        types=("address",),
        input_names=("account",),
        returns=("uint256",),
        state_mutability=StateMutability.VIEW,
    )
    return {
        "data": "0x70a08231" + encode(["address"], [TEST_ACCOUNT]).hex(),
        "selector": selector,
        "to": TEST_CONTRACT,
    }


@pytest.fixture
def overloaded_abi():
    """ABI with overloaded functions and a tuple parameter"""
    return [
        {
            "type": "function",
            "name": "transfer",
            "inputs": [{"name": "to", "type": "address"}, {"name": "amount", "type": "uint256"}],
            "outputs": [{"name": "", "type": "bool"}],
            "stateMutability": "nonpayable",
        },
        {
            "type": "function",
            "name": "transfer",
            "inputs": [
                {"name": "to", "type": "address"},
                {"name": "amount", "type": "uint256"},
                {"name": "data", "type": "bytes"},
            ],
            "outputs": [{"name": "", "type": "bool"}],
            "stateMutability": "payable",
        },
        {
            "type": "function",
            "name": "setLimit",
            "inputs": [{"name": "limit", "type": "uint8"}],
            "outputs": [],
            "stateMutability": "nonpayable",
        },
        {
            "type": "function",
            "name": "setLimit",
            "inputs": [{"name": "limit", "type": "uint256"}],
            "outputs": [],
            "stateMutability": "nonpayable",
        },
        {
            "type": "function",
            "name": "getPosition",
            "inputs": [{"name": "id", "type": "uint256"}],
            "outputs": [
                {
                    "name": "position",
                    "type": "tuple",
                    "components": [
                        {"name": "owner", "type": "address"},
                        {"name": "size", "type": "uint128"},
                    ],
                }
            ],
            "stateMutability": "view",
        },
        {
            "type": "event",
            "name": "Transfer",
            "inputs": [],
            "anonymous": False,
        },
    ]

"""
Tests for ABI loading, encoding and human readable rendering.
"""
import json

import pytest
from eth_abi import encode

from contractcall_sdk.abi import (
    decode_returns, encode_call, help_message, human_signature, maybe_read_contract_binary,
    read_abi, selectors_from_abi
)
from contractcall_sdk.exceptions import AbiError
from contractcall_sdk.models import FunctionSelector, StateMutability
from tests.test_helpers import TEST_ACCOUNT

TRANSFER = FunctionSelector(
    function="transfer",
    types=("address", "uint256"),
    input_names=("to", "amount"),
    returns=("bool",),
)


class TestReadAbi:
    """Tests for the ABI sources read_abi understands."""

    def test_list(self, overloaded_abi):
        assert read_abi(abi=overloaded_abi) == overloaded_abi

    def test_artifact_dict(self, overloaded_abi):
        assert read_abi(abi={"abi": overloaded_abi, "bin": "6080"}) == overloaded_abi

    def test_json_string(self, overloaded_abi):
        assert read_abi(abi=json.dumps(overloaded_abi)) == overloaded_abi

    def test_bundled_name(self):
        entries = read_abi(abi="erc20")
        names = {entry["name"] for entry in entries if entry["type"] == "function"}
        assert {"balanceOf", "transfer", "approve", "transferFrom"} <= names

    def test_unknown_bundled_name(self):
        with pytest.raises(AbiError, match="Unknown bundled ABI 'erc721'.*erc20"):
            read_abi(abi="erc721")

    def test_file(self, tmp_path, overloaded_abi):
        path = tmp_path / "Token.json"
        path.write_text(json.dumps({"abi": overloaded_abi}))

        assert read_abi(abi_file=path) == overloaded_abi
        assert read_abi(abi_file=str(path)) == overloaded_abi

    def test_missing_file(self, tmp_path):
        with pytest.raises(AbiError, match="Cannot read ABI file"):
            read_abi(abi_file=tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{")

        with pytest.raises(AbiError, match="Invalid ABI JSON"):
            read_abi(abi_file=path)

    def test_not_a_list(self):
        with pytest.raises(AbiError, match="must be a list"):
            read_abi(abi={"contractName": "Token"})

    @pytest.mark.parametrize("kwargs", [{}, {"abi": [], "abi_file": "x.json"}])
    def test_exactly_one_source(self, kwargs):
        with pytest.raises(AbiError, match="Exactly one") as exc_info:
            read_abi(**kwargs)
        assert exc_info.value.reason == "bad_argument"


class TestContractBinary:
    """Tests for reading deployment bytecode from artifacts."""

    def test_solc_bin(self):
        assert maybe_read_contract_binary(abi={"abi": [], "bin": "6080604052"}) == "6080604052"

    def test_foundry_bytecode(self):
        artifact = {"abi": [], "bytecode": {"object": "0x6080604052", "sourceMap": ""}}
        assert maybe_read_contract_binary(abi=artifact) == "0x6080604052"

    def test_plain_bytecode_string(self):
        assert maybe_read_contract_binary(abi={"abi": [], "bytecode": "0x60"}) == "0x60"

    def test_bare_abi_has_no_binary(self, overloaded_abi):
        assert maybe_read_contract_binary(abi=overloaded_abi) is None

    def test_empty_binary(self):
        assert maybe_read_contract_binary(abi={"abi": [], "bin": ""}) is None


class TestSelectorsFromAbi:
    """Tests for grouping ABI functions into selectors."""

    def test_groups_overloads_in_order(self, overloaded_abi):
        selectors = selectors_from_abi(overloaded_abi)

        assert list(selectors) == ["transfer", "setLimit", "getPosition"]
        assert [s.types for s in selectors["setLimit"]] == [("uint8",), ("uint256",)]
        assert selectors["transfer"][1].state_mutability is StateMutability.PAYABLE

    def test_skips_events_and_constructors(self):
        entries = [
            {"type": "constructor", "inputs": []},
            {"type": "event", "name": "Ping", "inputs": []},
            {"type": "fallback"},
            {"name": "legacy", "inputs": [], "outputs": [], "constant": True},
        ]

        selectors = selectors_from_abi(entries)

        assert list(selectors) == ["legacy"]
        assert selectors["legacy"][0].state_mutability is StateMutability.VIEW

    def test_tuple_returns(self, overloaded_abi):
        (selector,) = selectors_from_abi(overloaded_abi)["getPosition"]
        assert selector.returns == ("(address,uint128)",)


class TestEncoding:
    """Tests for calldata encoding and return decoding."""

    def test_encode_call(self):
        data = encode_call(TRANSFER, [TEST_ACCOUNT, 100])

        assert data.startswith("0xa9059cbb")
        assert data == "0xa9059cbb" + encode(["address", "uint256"], [TEST_ACCOUNT, 100]).hex()

    def test_encode_call_without_arguments(self):
        selector = FunctionSelector(function="totalSupply")
        assert encode_call(selector, []) == "0x18160ddd"

    def test_decode_returns(self):
        selector = FunctionSelector(function="info", returns=("uint256", "string", "bool"))
        data = encode(["uint256", "string", "bool"], [7, "hello", True])

        assert decode_returns(selector, data) == [7, "hello", True]

    def test_decode_without_returns(self):
        assert decode_returns(FunctionSelector(function="poke"), b"") == []


class TestHumanSignature:
    """Tests for Solidity-style signature rendering."""

    def test_named_arguments(self):
        assert human_signature(TRANSFER) == "transfer(address to, uint256 amount)"

    def test_unnamed_arguments(self):
        selector = FunctionSelector(function="setLimit", types=("uint8",), input_names=("",))
        assert human_signature(selector) == "setLimit(uint8)"

    def test_without_names(self):
        selector = FunctionSelector(function="f", types=("uint8", "bool"))
        assert human_signature(selector) == "f(uint8, bool)"

    def test_list_is_joined(self):
        other = FunctionSelector(function="transfer", types=("address", "uint256", "bytes"))
        assert human_signature([TRANSFER, other]) == (
            "transfer(address to, uint256 amount) OR transfer(address, uint256, bytes)"
        )


class TestHelpMessage:
    """Tests for mutability help text."""

    def test_view(self):
        selector = FunctionSelector(function="balanceOf", state_mutability=StateMutability.VIEW)
        message = help_message([selector])

        assert "Use Dispatcher.call" in message
        assert message.endswith("State mutability: view")

    def test_payable(self):
        selector = FunctionSelector(function="deposit", state_mutability=StateMutability.PAYABLE)
        message = help_message([selector])

        assert "Use Dispatcher.send" in message
        assert "receiving ether" in message

    def test_nonpayable(self):
        message = help_message([TRANSFER])
        assert "No amount of Ether" in message

    def test_mixed_mutabilities(self, overloaded_abi):
        message = help_message(selectors_from_abi(overloaded_abi)["transfer"])

        assert "multiple state mutabilities" in message
        assert message.endswith("State mutabilities: nonpayable,payable")

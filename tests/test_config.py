"""
Tests for dispatch configuration.
"""
import pytest

from contractcall_sdk.config import DispatchConfig
from contractcall_sdk.transport import HttpTransport, Web3Transport
from tests.test_helpers import TEST_RPC_URL


class TestDispatchConfig:
    """Tests for DispatchConfig."""

    def test_defaults(self):
        config = DispatchConfig()

        assert config.transport is None
        assert config.transport_opts == {}
        assert config.default_block == "latest"

    def test_options_are_not_shared(self):
        a, b = DispatchConfig(), DispatchConfig()
        a.transport_opts["timeout"] = 1
        assert b.transport_opts == {}

    def test_from_empty_env(self):
        config = DispatchConfig.from_env({})

        assert config.transport is None
        assert config.default_block == "latest"

    def test_from_env_http(self):
        config = DispatchConfig.from_env({
            "CONTRACTCALL_RPC_URL": TEST_RPC_URL,
            "CONTRACTCALL_RPC_TIMEOUT": "2.5",
            "CONTRACTCALL_DEFAULT_BLOCK": "finalized",
        })

        assert isinstance(config.transport, HttpTransport)
        assert config.transport.rpc_url == TEST_RPC_URL
        assert config.transport.timeout == 2.5
        assert config.default_block == "finalized"

    def test_from_env_web3(self):
        config = DispatchConfig.from_env({
            "CONTRACTCALL_RPC_URL": TEST_RPC_URL,
            "CONTRACTCALL_TRANSPORT": " Web3 ",
        })
        assert isinstance(config.transport, Web3Transport)

    def test_from_os_environ(self, monkeypatch):
        monkeypatch.setenv("CONTRACTCALL_RPC_URL", TEST_RPC_URL)
        monkeypatch.setenv("CONTRACTCALL_DEFAULT_BLOCK", "12345")

        config = DispatchConfig.from_env()

        assert isinstance(config.transport, HttpTransport)
        assert config.default_block == 12345

    def test_hex_block_passes_through(self):
        assert DispatchConfig.from_env({"CONTRACTCALL_DEFAULT_BLOCK": "0x10"}).default_block == "0x10"

    @pytest.mark.parametrize("env, message", [
        ({"CONTRACTCALL_TRANSPORT": "grpc"}, "CONTRACTCALL_TRANSPORT"),
        ({"CONTRACTCALL_RPC_TIMEOUT": "soon"}, "number of seconds"),
        ({"CONTRACTCALL_RPC_TIMEOUT": "0"}, "positive"),
        ({"CONTRACTCALL_DEFAULT_BLOCK": "  "}, "must not be empty"),
    ])
    def test_invalid_env(self, env, message):
        with pytest.raises(ValueError, match=message):
            DispatchConfig.from_env(env)

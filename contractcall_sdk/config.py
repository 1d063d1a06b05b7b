"""
Dispatch configuration.

A ``DispatchConfig`` is built once at application start and handed to the
``Dispatcher``; per-call options take precedence over it.
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .transport.base import TRANSPORT_KINDS, BlockIdentifier, RpcTransport, get_transport

logger = logging.getLogger(__name__)

ENV_RPC_URL = "CONTRACTCALL_RPC_URL"
ENV_TRANSPORT = "CONTRACTCALL_TRANSPORT"
ENV_RPC_TIMEOUT = "CONTRACTCALL_RPC_TIMEOUT"
ENV_DEFAULT_BLOCK = "CONTRACTCALL_DEFAULT_BLOCK"

DEFAULT_BLOCK = "latest"
DEFAULT_TIMEOUT = 30.0


@dataclass
class DispatchConfig:
    """
    Process-wide defaults for call dispatch.

    Attributes:
        transport: Transport used when a call does not name one
        transport_opts: Options passed to the default transport
        default_block: Block tag or number used by ``call`` when none is given
    """
    transport: Optional[RpcTransport] = None
    transport_opts: Dict[str, Any] = field(default_factory=dict)
    default_block: BlockIdentifier = DEFAULT_BLOCK

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DispatchConfig":
        """
        Build a configuration from environment variables.

        Without ``CONTRACTCALL_RPC_URL`` the configuration has no default
        transport and every call must pass one explicitly.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            DispatchConfig

        Raises:
            ValueError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ

        kind = env.get(ENV_TRANSPORT, "http").strip().lower()
        if kind not in TRANSPORT_KINDS:
            raise ValueError(
                f"{ENV_TRANSPORT} must be one of {', '.join(TRANSPORT_KINDS)} (got: {kind!r})"
            )

        raw_timeout = env.get(ENV_RPC_TIMEOUT, str(DEFAULT_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(f"{ENV_RPC_TIMEOUT} must be a number of seconds (got: {raw_timeout!r})")
        if timeout <= 0:
            raise ValueError(f"{ENV_RPC_TIMEOUT} must be positive (got: {raw_timeout!r})")

        default_block = _parse_block(env.get(ENV_DEFAULT_BLOCK, DEFAULT_BLOCK))

        transport = None
        rpc_url = env.get(ENV_RPC_URL, "").strip()
        if rpc_url:
            transport = get_transport(rpc_url, kind=kind, timeout=timeout)
        else:
            logger.debug(f"{ENV_RPC_URL} not set, no default transport configured")

        return cls(transport=transport, default_block=default_block)


def _parse_block(value: str) -> BlockIdentifier:
    """Decimal block numbers become ints; tags and 0x quantities pass through."""
    value = value.strip()
    if not value:
        raise ValueError(f"{ENV_DEFAULT_BLOCK} must not be empty")
    if value.isdigit():
        return int(value)
    return value

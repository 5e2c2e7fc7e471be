"""
Contract for blockchain node client adapters.

Defines the capability set every node adapter must implement so an
orchestrator can start, supervise and query any supported node the same way.
"""

import shlex
from dataclasses import dataclass, field
from typing import Any, Awaitable, List, Mapping, Optional, Tuple, Union

from chainclient.config import ClientConfig
from chainclient.client.version import (
    FALLBACK_VERSION,
    Compatibility,
    VersionCheck,
    check_compatibility,
    find_version,
    is_supported_version,
    negotiate_version,
)


DEVELOPMENT = "development"


@dataclass(frozen=True)
class AdapterDefaults:
    """Static defaults declared once per adapter type."""
    bin: str = ""                                  # Default binary, "" means unset
    versions_supported: str = ""                   # Range expression, e.g. ">=1.3.0"
    rpc_api: Tuple[str, ...] = ()                  # APIs enabled over HTTP RPC
    ws_api: Tuple[str, ...] = ()                   # APIs enabled over WebSocket
    dev_ws_api: Tuple[str, ...] = ()               # WebSocket APIs in development


@dataclass(frozen=True)
class NodeCommand:
    """A command line to run: the binary plus its arguments."""
    binary: str
    args: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def argv(self) -> List[str]:
        """Argument vector suitable for subprocess APIs."""
        return [self.binary, *self.args]

    def __str__(self) -> str:
        return shlex.join(self.argv)


class CapabilityNotImplementedError(NotImplementedError):
    """
    Raised when an adapter is asked for a capability it does not implement.

    This is a programming error in the adapter, not an environmental failure.
    """

    def __init__(self, capability: str, client_name: str):
        super().__init__(
            f"{client_name} does not implement the '{capability}' capability"
        )
        self.capability = capability
        self.client_name = client_name


class BlockchainClient:
    """
    Base contract for node client adapters.

    Concrete adapters declare ``NAME``, ``PRETTY_NAME`` and ``DEFAULTS`` once
    at class level and override the capability methods. Any capability left
    unoverridden raises ``CapabilityNotImplementedError`` when called.

    Capabilities:
    - is_ready: decide readiness from a chunk of process output
    - need_keep_alive: whether periodic keep-alive transactions are needed
    - get_miner: configured miner account
    - determine_version_command: command that prints the binary's version
    - init_chain: chain-specific setup before the main command
    - main_command: full launch command for a mining address
    """

    NAME: str = ""                  # Client name used in logs and lookups
    PRETTY_NAME: str = ""           # Display name
    DEFAULTS: AdapterDefaults = AdapterDefaults()

    def __init__(
        self,
        config: Optional[Union[ClientConfig, Mapping[str, Any]]] = None,
        env: Optional[str] = None,
        is_dev: Optional[bool] = None,
    ):
        """
        Initialize the adapter.

        Args:
            config: Client options, as a ClientConfig or a plain mapping
            env: Environment name, defaults to "development"
            is_dev: Development flag, derived from env when not given
        """
        if config is None:
            config = ClientConfig()
        elif not isinstance(config, ClientConfig):
            config = ClientConfig.model_validate(dict(config))
        self.config = config
        self.env = env if env is not None else DEVELOPMENT
        self.is_dev = is_dev if is_dev is not None else self.env == DEVELOPMENT

    # ------------------------------------------------------------------
    # Derived accessors
    # ------------------------------------------------------------------

    @property
    def bin(self) -> str:
        """Configured binary override, else the adapter's default binary."""
        return self.config.ethereum_client_bin or self.DEFAULTS.bin

    @property
    def name(self) -> str:
        return self.NAME

    @property
    def pretty_name(self) -> str:
        return self.PRETTY_NAME

    @property
    def defaults(self) -> AdapterDefaults:
        return self.DEFAULTS

    @property
    def versions_supported(self) -> str:
        return self.DEFAULTS.versions_supported

    def _not_implemented(self, capability: str) -> CapabilityNotImplementedError:
        return CapabilityNotImplementedError(
            capability, self.NAME or type(self).__name__
        )

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    def is_ready(self, data: str) -> bool:
        """
        Check whether the node process has reached a ready state.

        Args:
            data: A chunk or line of the node's output

        Returns:
            True if the output signals the node is ready
        """
        raise self._not_implemented("is_ready")

    def need_keep_alive(self) -> bool:
        """
        Check if the client needs keep-alive transactions to avoid freezing
        from inactivity.
        """
        raise self._not_implemented("need_keep_alive")

    def get_miner(self) -> Optional[str]:
        """Account currently configured as miner, if any."""
        raise self._not_implemented("get_miner")

    def get_binary_path(self) -> str:
        return self.bin

    def determine_version_command(self) -> NodeCommand:
        """Command that prints the binary's version banner."""
        raise self._not_implemented("determine_version_command")

    def init_chain(self) -> Awaitable[None]:
        """
        Chain-specific setup, awaited before the main command is run.

        Adapters implement this as a coroutine that completes once, either
        returning or raising. Unimplemented, it raises as soon as it is called.
        """
        raise self._not_implemented("init_chain")

    def main_command(self, address: str) -> Awaitable[NodeCommand]:
        """
        Build the command that launches the node.

        Adapters implement this as a coroutine.

        Args:
            address: Account the node mines or operates with

        Returns:
            Full command to launch the node
        """
        raise self._not_implemented("main_command")

    # ------------------------------------------------------------------
    # Version negotiation
    # ------------------------------------------------------------------

    def find_version(self, raw_output: str) -> Optional[str]:
        """
        Find the version in this binary's version banner.

        Adapters whose binary prints something other than a
        "Version: x.y.z" line override this.
        """
        return find_version(raw_output)

    def parse_version(self, raw_output: str) -> str:
        return self.find_version(raw_output) or FALLBACK_VERSION

    def is_supported_version(self, parsed_version: str) -> Optional[bool]:
        """Test a parsed version against this adapter's supported range."""
        return is_supported_version(parsed_version, self.versions_supported)

    def check_compatibility(self, parsed_version: str) -> Compatibility:
        return check_compatibility(parsed_version, self.versions_supported)

    def negotiate_version(
        self,
        raw_output: str,
        versions_supported: Optional[str] = None,
    ) -> VersionCheck:
        """
        Negotiate raw version-command output using this adapter's banner parser.

        Args:
            raw_output: Text printed by the version command
            versions_supported: Range overriding the adapter's own

        Returns:
            The parsed version and its compatibility
        """
        if versions_supported is None:
            versions_supported = self.versions_supported
        return negotiate_version(raw_output, versions_supported, find=self.find_version)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(env={self.env!r}, is_dev={self.is_dev!r}, bin={self.bin!r})"

"""
Parity adapter.

Builds command lines for parity-ethereum binaries.
"""

import re
from typing import List, Optional

import structlog

from chainclient.client.interface import AdapterDefaults, BlockchainClient, NodeCommand
from chainclient.client.registry import register_client

logger = structlog.get_logger(__name__)


PARITY_WS_API = (
    "web3", "eth", "pubsub", "net", "parity", "private",
    "parity_pubsub", "traces", "rpc", "shh", "shh_pubsub",
)

# Matches "Parity-Ethereum/v2.4.5-stable-..." and older "Parity/v1.11.0-..." banners
PARITY_VERSION_REGEX = re.compile(r"Parity(?:-Ethereum)?/v([0-9]+\.[0-9]+\.[0-9]+)")

# Parity chain names for generic network types; "custom" uses --network-id
CHAIN_NAMES = {
    "mainnet": "foundation",
    "testnet": "ropsten",
}

# Parity logging level per geth-style verbosity (0 = silent .. 5 = trace)
VERBOSITY_LEVELS = ("error", "error", "warn", "info", "debug", "trace")


@register_client
class ParityClient(BlockchainClient):
    """Adapter for parity-ethereum."""

    NAME = "parity"
    PRETTY_NAME = "Parity-Ethereum (https://github.com/paritytech/parity-ethereum)"
    DEFAULTS = AdapterDefaults(
        bin="parity",
        versions_supported=">=2.0.0",
        rpc_api=PARITY_WS_API,
        ws_api=PARITY_WS_API,
        dev_ws_api=PARITY_WS_API + ("personal",),
    )

    READY_MARKERS = ("Public node URL:", "Signer is disabled")

    def is_ready(self, data: str) -> bool:
        return any(marker in data for marker in self.READY_MARKERS)

    def need_keep_alive(self) -> bool:
        return False

    def get_miner(self) -> Optional[str]:
        return self.config.miner_address

    def determine_version_command(self) -> NodeCommand:
        return NodeCommand(self.get_binary_path(), ("--version",))

    def find_version(self, raw_output: str) -> Optional[str]:
        match = PARITY_VERSION_REGEX.search(raw_output)
        if match is None:
            return None
        return match.group(1)

    async def init_chain(self) -> None:
        # Parity creates its base path and chain on first start
        return None

    def _logging_level(self) -> Optional[str]:
        verbosity = self.config.verbosity
        if verbosity is None:
            return None
        verbosity = max(0, min(verbosity, len(VERBOSITY_LEVELS) - 1))
        return VERBOSITY_LEVELS[verbosity]

    async def main_command(self, address: str) -> NodeCommand:
        config = self.config
        args: List[str] = []

        if self.is_dev:
            args.extend(["--chain", "dev"])
        elif config.network_type != "custom":
            args.extend(["--chain", CHAIN_NAMES.get(config.network_type, config.network_type)])
        elif config.network_id is not None:
            args.extend(["--network-id", str(config.network_id)])

        if config.data_dir:
            args.extend(["--base-path", config.data_dir])

        args.extend([
            "--jsonrpc-port", str(config.rpc_port),
            "--jsonrpc-interface", config.rpc_host,
        ])
        if config.rpc_cors_domain:
            args.extend(["--jsonrpc-cors", config.rpc_cors_domain])
        args.extend(["--jsonrpc-apis", ",".join(self.DEFAULTS.rpc_api)])

        if config.ws_rpc:
            args.extend([
                "--ws-port", str(config.ws_port),
                "--ws-interface", config.ws_host,
            ])
            if config.origins:
                args.extend(["--ws-origins", ",".join(config.origins)])
            apis = self.DEFAULTS.dev_ws_api if self.is_dev else self.DEFAULTS.ws_api
            args.extend(["--ws-apis", ",".join(apis)])
        else:
            args.append("--no-ws")

        if address:
            args.extend(["--author", address, "--unlock", address])
            if config.password_file:
                args.extend(["--password", config.password_file])

        if config.nodiscover:
            args.append("--no-discovery")
        if config.max_peers is not None:
            args.extend(["--max-peers", str(config.max_peers)])
        if config.bootnodes:
            args.extend(["--bootnodes", config.bootnodes])

        level = self._logging_level()
        if level:
            args.extend(["--logging", level])

        command = NodeCommand(self.get_binary_path(), tuple(args))
        logger.debug("parity_main_command", command=str(command))
        return command

"""
Geth adapter.

Builds command lines for go-ethereum style binaries.
"""

import asyncio
from pathlib import Path
from typing import List, Optional

import structlog

from chainclient.client.interface import AdapterDefaults, BlockchainClient, NodeCommand
from chainclient.client.registry import register_client

logger = structlog.get_logger(__name__)


GETH_WS_API = ("eth", "web3", "net", "shh", "debug", "pubsub", "personal")


@register_client
class GethClient(BlockchainClient):
    """
    Adapter for geth.

    In development mode geth runs with ``--dev`` and needs keep-alive
    transactions, otherwise it stops producing blocks when idle.
    """

    NAME = "geth"
    PRETTY_NAME = "Geth (https://github.com/ethereum/go-ethereum)"
    DEFAULTS = AdapterDefaults(
        bin="geth",
        versions_supported=">=1.8.14",
        rpc_api=("eth", "web3", "net", "debug", "personal"),
        ws_api=GETH_WS_API,
        dev_ws_api=GETH_WS_API,
    )

    READY_MARKER = "IPC endpoint opened"

    def is_ready(self, data: str) -> bool:
        return self.READY_MARKER in data

    def need_keep_alive(self) -> bool:
        return self.is_dev

    def get_miner(self) -> Optional[str]:
        return self.config.miner_address

    def determine_version_command(self) -> NodeCommand:
        return NodeCommand(self.get_binary_path(), ("version",))

    def genesis_command(self) -> Optional[NodeCommand]:
        """Command initializing the data directory from the genesis block, if one is configured."""
        if not self.config.genesis_block:
            return None
        args: List[str] = []
        if self.config.data_dir:
            args.extend(["--datadir", self.config.data_dir])
        args.extend(["init", self.config.genesis_block])
        return NodeCommand(self.get_binary_path(), tuple(args))

    async def init_chain(self) -> None:
        """Create the data directory so geth can initialize it."""
        if not self.config.data_dir:
            return
        data_dir = Path(self.config.data_dir)
        await asyncio.to_thread(data_dir.mkdir, parents=True, exist_ok=True)
        logger.info(
            "geth_chain_prepared",
            data_dir=str(data_dir),
            genesis=self.config.genesis_block,
        )

    def _common_options(self) -> List[str]:
        config = self.config
        options: List[str] = []

        if config.network_id is not None:
            options.extend(["--networkid", str(config.network_id)])
        if config.data_dir:
            options.extend(["--datadir", config.data_dir])
        if config.sync_mode:
            options.extend(["--syncmode", config.sync_mode])
        if config.verbosity is not None:
            options.extend(["--verbosity", str(config.verbosity)])
        if config.nodiscover:
            options.append("--nodiscover")
        if config.max_peers is not None:
            options.extend(["--maxpeers", str(config.max_peers)])
        if config.bootnodes:
            options.extend(["--bootnodes", config.bootnodes])

        return options

    def _rpc_options(self) -> List[str]:
        config = self.config
        options = [
            "--rpc",
            "--rpcport", str(config.rpc_port),
            "--rpcaddr", config.rpc_host,
        ]
        if config.rpc_cors_domain:
            options.extend(["--rpccorsdomain", config.rpc_cors_domain])
        options.extend(["--rpcapi", ",".join(self.DEFAULTS.rpc_api)])
        return options

    def _ws_options(self) -> List[str]:
        config = self.config
        if not config.ws_rpc:
            return []
        options = [
            "--ws",
            "--wsport", str(config.ws_port),
            "--wsaddr", config.ws_host,
        ]
        if config.origins:
            options.extend(["--wsorigins", ",".join(config.origins)])
        apis = self.DEFAULTS.dev_ws_api if self.is_dev else self.DEFAULTS.ws_api
        options.extend(["--wsapi", ",".join(apis)])
        return options

    async def main_command(self, address: str) -> NodeCommand:
        config = self.config
        args = self._common_options()
        args.extend(self._rpc_options())
        args.extend(self._ws_options())

        if self.is_dev:
            args.append("--dev")

        if address:
            args.extend(["--unlock", address])
            if config.password_file:
                args.extend(["--password", config.password_file])

        if not config.mine_when_needed:
            args.append("--mine")
            if address:
                args.extend(["--miner.etherbase", address])

        if config.target_gas_limit is not None:
            args.extend(["--targetgaslimit", str(config.target_gas_limit)])
        if config.gas_price is not None:
            args.extend(["--gasprice", str(config.gas_price)])

        command = NodeCommand(self.get_binary_path(), tuple(args))
        logger.debug("geth_main_command", command=str(command))
        return command

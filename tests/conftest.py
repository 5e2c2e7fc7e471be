"""
Pytest configuration and shared fixtures for the test suite.
"""

from typing import Iterator, Type

import pytest

from chainclient.client import (
    AdapterDefaults,
    BlockchainClient,
    GethClient,
    ParityClient,
    register_client,
)
from chainclient.client.registry import unregister_client
from chainclient.config import ClientConfig


# ============================================================================
# Raw Version Output
# ============================================================================

GETH_VERSION_OUTPUT = """Geth
Version: 1.8.27-stable
Git Commit: 4bcc0a37ab70cb79b16893556cffdaad6974e7d8
Architecture: amd64
Protocol Versions: [63 62]
Network Id: 1
Go Version: go1.11.5
Operating System: linux
GOPATH=
GOROOT=/usr/local/go
"""

OLD_GETH_VERSION_OUTPUT = """Geth
Version: 1.7.3-stable
Git Commit: 4bb3c89d44e372e6a9ab85a8be0c9345265c763a
"""

PARITY_VERSION_OUTPUT = """Parity Ethereum
  version Parity-Ethereum/v2.4.5-stable-76d4064-20190408/x86_64-linux-gnu/rustc1.33.0
Copyright 2015-2019 Parity Technologies (UK) Ltd.
"""


@pytest.fixture
def geth_version_output() -> str:
    return GETH_VERSION_OUTPUT


@pytest.fixture
def old_geth_version_output() -> str:
    return OLD_GETH_VERSION_OUTPUT


@pytest.fixture
def parity_version_output() -> str:
    return PARITY_VERSION_OUTPUT


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def node_config() -> ClientConfig:
    """Create a non-development node configuration."""
    return ClientConfig(
        data_dir="/tmp/chainclient-test/chain",
        network_id=1337,
        rpc_host="0.0.0.0",
        rpc_port=8545,
        rpc_cors_domain="http://localhost:8000",
        ws_port=8546,
        ws_origins="http://localhost:8000, http://localhost:8080",
        verbosity=3,
        max_peers=0,
        nodiscover=True,
        miner_address="0x00a329c0648769a73afac7f9381e08fb43dbea72",
        account={"password": "/tmp/chainclient-test/password"},
    )


# ============================================================================
# Client Fixtures
# ============================================================================

MINER_ADDRESS = "0x00a329c0648769a73afac7f9381e08fb43dbea72"


@pytest.fixture
def miner_address() -> str:
    return MINER_ADDRESS


@pytest.fixture
def base_client() -> BlockchainClient:
    """The bare contract, with no capabilities implemented."""
    return BlockchainClient()


@pytest.fixture
def geth_dev() -> GethClient:
    return GethClient()


@pytest.fixture
def geth_prod(node_config) -> GethClient:
    return GethClient(config=node_config, env="production")


@pytest.fixture
def parity_dev() -> ParityClient:
    return ParityClient()


@pytest.fixture
def parity_prod(node_config) -> ParityClient:
    return ParityClient(config=node_config, env="production")


class PartialClient(BlockchainClient):
    """Adapter implementing only readiness, for contract tests."""

    NAME = "partial"
    PRETTY_NAME = "Partial Test Client"
    DEFAULTS = AdapterDefaults(bin="partial-node", versions_supported="^2.0.0")

    def is_ready(self, data: str) -> bool:
        return "ready" in data


@pytest.fixture
def partial_client_class() -> Iterator[Type[PartialClient]]:
    """Register PartialClient for the duration of a test."""
    register_client(PartialClient)
    yield PartialClient
    unregister_client(PartialClient.NAME)

"""
Blockchain Client Adapters

A uniform contract for driving different Ethereum node implementations.
Adapters describe how to query a node binary's version, how to build its
launch command and how to tell when it is ready, so an orchestrator can
start and supervise any supported node the same way.
"""

__version__ = "0.1.0"

from chainclient.client.interface import (
    AdapterDefaults,
    BlockchainClient,
    CapabilityNotImplementedError,
    NodeCommand,
)
from chainclient.client.version import (
    Compatibility,
    VersionCheck,
    check_compatibility,
    find_version,
    is_supported_version,
    negotiate_version,
    parse_version,
)
from chainclient.client.registry import available_clients, create_client
from chainclient.config import ClientConfig

__all__ = [
    "AdapterDefaults",
    "BlockchainClient",
    "CapabilityNotImplementedError",
    "NodeCommand",
    "Compatibility",
    "VersionCheck",
    "check_compatibility",
    "find_version",
    "is_supported_version",
    "negotiate_version",
    "parse_version",
    "available_clients",
    "create_client",
    "ClientConfig",
]

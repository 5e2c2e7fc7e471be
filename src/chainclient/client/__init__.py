"""
Client Adapter Layer.

Contract, version negotiation and registry for blockchain node adapters.
Supports multiple node implementations (geth, parity).
"""

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
from chainclient.client.registry import (
    UnknownClientError,
    available_clients,
    create_client,
    get_client_class,
    register_client,
)
from chainclient.client.geth import GethClient
from chainclient.client.parity import ParityClient

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
    "UnknownClientError",
    "available_clients",
    "create_client",
    "get_client_class",
    "register_client",
    "GethClient",
    "ParityClient",
]

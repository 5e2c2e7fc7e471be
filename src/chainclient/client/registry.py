"""
Registry of client adapter types.

Adapters register themselves by name so an orchestrator can pick one from
configuration without importing it directly.
"""

from typing import Any, Dict, List, Mapping, Optional, Type, Union

import structlog

from chainclient.config import ClientConfig
from chainclient.client.interface import BlockchainClient

logger = structlog.get_logger(__name__)


_registry: Dict[str, Type[BlockchainClient]] = {}


class UnknownClientError(KeyError):
    """Raised when no adapter is registered under a name."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        known = ", ".join(available_clients()) or "none"
        return f"Unknown client '{self.name}' (registered: {known})"


def register_client(cls: Type[BlockchainClient]) -> Type[BlockchainClient]:
    """
    Class decorator registering an adapter under its NAME.

    Raises:
        ValueError: If the adapter has no NAME or the name is taken
    """
    name = cls.NAME
    if not name:
        raise ValueError(f"{cls.__name__} must declare a NAME to be registered")
    if name in _registry and _registry[name] is not cls:
        raise ValueError(
            f"Client name '{name}' already registered by {_registry[name].__name__}"
        )
    _registry[name] = cls
    logger.debug("client_registered", client=name, adapter=cls.__name__)
    return cls


def unregister_client(name: str) -> None:
    _registry.pop(name, None)


def get_client_class(name: str) -> Type[BlockchainClient]:
    try:
        return _registry[name]
    except KeyError:
        raise UnknownClientError(name) from None


def available_clients() -> List[str]:
    return sorted(_registry)


def create_client(
    name: str,
    config: Optional[Union[ClientConfig, Mapping[str, Any]]] = None,
    env: Optional[str] = None,
    is_dev: Optional[bool] = None,
) -> BlockchainClient:
    """
    Construct a registered adapter.

    Args:
        name: Registered client name, e.g. "geth"
        config: Client options
        env: Environment name
        is_dev: Development flag, derived from env when not given

    Returns:
        A new adapter instance
    """
    cls = get_client_class(name)
    return cls(config=config, env=env, is_dev=is_dev)

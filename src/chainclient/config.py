"""
Configuration management for the blockchain client adapters.

Two layers live here:

- ``ClientConfig``: the per-adapter options record handed to a client
  (binary override, network, RPC/WS endpoints, mining settings).
- ``Settings``: process-wide settings for the CLI, read from environment
  variables and ``.env`` files.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientConfig(BaseModel):
    """
    Options supplied by the caller when constructing a client adapter.

    Keys may be given in snake_case or in the camelCase form used by
    blockchain configuration files (``ethereumClientBin``, ``rpcPort``...).
    Unknown keys are kept so adapters for other node implementations can
    read their own options.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )

    # Binary override
    ethereum_client_bin: Optional[str] = Field(
        default=None,
        description="Path or name of the node binary, overrides the adapter default",
    )

    # Chain settings
    data_dir: Optional[str] = None
    network_type: str = "custom"
    network_id: Optional[int] = None
    genesis_block: Optional[str] = None
    sync_mode: Optional[str] = None
    verbosity: Optional[int] = None

    # Peer settings
    nodiscover: bool = False
    max_peers: Optional[int] = None
    bootnodes: Optional[str] = None

    # RPC settings
    rpc_host: str = "localhost"
    rpc_port: int = 8545
    rpc_cors_domain: Optional[str] = None

    # WebSocket settings
    ws_rpc: bool = True
    ws_host: str = "localhost"
    ws_port: int = 8546
    ws_origins: Optional[str] = None

    # Mining and account settings
    miner_address: Optional[str] = None
    mine_when_needed: bool = False
    target_gas_limit: Optional[int] = None
    gas_price: Optional[int] = None
    account: Dict[str, Any] = Field(default_factory=dict)

    @property
    def password_file(self) -> Optional[str]:
        """Password file used to unlock the mining account, if configured."""
        return self.account.get("password")

    @property
    def origins(self) -> List[str]:
        """WebSocket origins as a list."""
        if not self.ws_origins:
            return []
        return [origin.strip() for origin in self.ws_origins.split(",") if origin.strip()]


class Settings(BaseSettings):
    """
    Process-wide settings.

    All settings can be configured via environment variables with the
    CHAINCLIENT_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHAINCLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    env: str = Field(
        default="development",
        description="Environment the node runs in (development, production...)"
    )
    client: str = Field(
        default="geth",
        description="Name of the client adapter to use"
    )
    ethereum_client_bin: Optional[str] = Field(
        default=None,
        description="Override for the client binary"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format"
    )

    def client_config(self) -> ClientConfig:
        """Build the adapter options record from these settings."""
        return ClientConfig(ethereum_client_bin=self.ethereum_client_bin)


# Global config instance
_config: Optional[Settings] = None


def get_config() -> Settings:
    """Get or create the global settings instance."""
    global _config
    if _config is None:
        _config = Settings()
    return _config


def set_config(config: Settings) -> None:
    """Set the global settings instance."""
    global _config
    _config = config

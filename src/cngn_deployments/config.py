"""Startup configuration for cngn-deployments."""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .constants import DEFAULT_NETWORK, NETWORK_ALIASES, NETWORK_CONFIG
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class DeployConfig:
    """Process-wide deployment settings, read once at startup."""

    network: str
    rpc_url: str
    private_key: str = field(repr=False)
    account_address: str
    owner_address: str

    @property
    def high_stakes(self) -> bool:
        return bool(NETWORK_CONFIG[self.network]["high_stakes"])

    @property
    def chain_id(self) -> str:
        return NETWORK_CONFIG[self.network]["chain_id"]

    @property
    def explorer_url(self) -> str:
        return NETWORK_CONFIG[self.network]["block_explorer_url"]


def normalize_network(name: str) -> str:
    """
    Convert a network selector to its canonical name.

    Args:
        name: Network selector (canonical or alias, any case)

    Returns:
        "testnet" or "mainnet"

    Raises:
        ConfigurationError: If the selector is not recognized
    """
    key = name.strip().lower()
    key = NETWORK_ALIASES.get(key, key)
    if key not in NETWORK_CONFIG:
        raise ConfigurationError(
            f"Invalid network '{name}'. Use one of: {', '.join(NETWORK_CONFIG)}"
        )
    return key


def _require_felt(value: str, variable: str) -> str:
    try:
        int(value, 0)
    except ValueError:
        raise ConfigurationError(f"{variable} is not a valid felt: {value!r}") from None
    return value


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    network: Optional[str] = None,
    owner: Optional[str] = None,
) -> DeployConfig:
    """
    Build the deployment configuration from environment variables.

    Args:
        environ: Variables to read (defaults to os.environ)
        network: Network selector overriding $STARKNET_NETWORK / $NETWORK
        owner: Owner address overriding $CONTRACT_OWNER_ADDRESS

    Returns:
        DeployConfig

    Raises:
        ConfigurationError: If the credential or account address is missing,
            an address is malformed, or the network is unknown
    """
    if environ is None:
        environ = os.environ

    if network is None:
        network = environ.get("STARKNET_NETWORK") or environ.get("NETWORK") or DEFAULT_NETWORK
    network = normalize_network(network)

    private_key = environ.get("STARKNET_PRIVATE_KEY")
    account_address = environ.get("STARKNET_ACCOUNT_ADDRESS")
    if not private_key or not account_address:
        raise ConfigurationError(
            "Missing STARKNET_PRIVATE_KEY or STARKNET_ACCOUNT_ADDRESS. "
            "Set them in your environment or .env file."
        )

    if owner is None:
        owner = environ.get("CONTRACT_OWNER_ADDRESS") or account_address

    network_config = NETWORK_CONFIG[network]
    rpc_url = (
        environ.get("STARKNET_RPC_URL")
        or environ.get(network_config["default_rpc_env"])
        or network_config["rpc_url"]
    )

    return DeployConfig(
        network=network,
        rpc_url=rpc_url,
        private_key=_require_felt(private_key, "STARKNET_PRIVATE_KEY"),
        account_address=_require_felt(account_address, "STARKNET_ACCOUNT_ADDRESS"),
        owner_address=_require_felt(owner, "CONTRACT_OWNER_ADDRESS"),
    )

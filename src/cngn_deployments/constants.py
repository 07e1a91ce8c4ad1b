"""Configuration constants for cngn-deployments."""

# Network configuration for Starknet
# chain_id is the short string the node returns from starknet_chainId
NETWORK_CONFIG = {
    "testnet": {
        "chain_id": "SN_SEPOLIA",
        "chain_name": "Starknet Sepolia",
        "rpc_url": "https://starknet-sepolia.public.blastapi.io/rpc/v0_8",
        "default_rpc_env": "STARKNET_SEPOLIA_RPC_URL",
        "block_explorer_url": "https://sepolia.starkscan.co",
        "high_stakes": False,
    },
    "mainnet": {
        "chain_id": "SN_MAIN",
        "chain_name": "Starknet Mainnet",
        "rpc_url": "https://starknet-mainnet.public.blastapi.io/rpc/v0_8",
        "default_rpc_env": "STARKNET_MAINNET_RPC_URL",
        "block_explorer_url": "https://starkscan.co",
        "high_stakes": True,
    },
}

# Alternative network selectors accepted from the environment
NETWORK_ALIASES = {
    "sepolia": "testnet",
}

DEFAULT_NETWORK = "testnet"

# Scarb package name, used as the artifact file prefix
CONTRACT_PACKAGE = "cngn"

SIERRA_SUFFIX = ".contract_class.json"
CASM_SUFFIX = ".compiled_contract_class.json"

BUILD_COMMAND = ("scarb", "build")

# Starknet JSON-RPC error code for CLASS_ALREADY_DECLARED
CLASS_ALREADY_DECLARED_CODE = 51

# Lower-cased fragments of node errors meaning the class is already known
ALREADY_DECLARED_PATTERNS = (
    "already declared",
    "class_already_declared",
)

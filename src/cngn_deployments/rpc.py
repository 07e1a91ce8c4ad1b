"""Raw Starknet JSON-RPC reads for cngn-deployments."""

from typing import Any, Dict, List, Union

import requests

from .exceptions import NetworkError


def rpc_call(
    rpc_url: str,
    method: str,
    params: Union[Dict[str, Any], List[Any], None] = None,
    timeout: float = 30,
) -> Any:
    """
    Perform a single JSON-RPC request.

    Args:
        rpc_url: RPC endpoint URL
        method: JSON-RPC method name
        params: Positional or named parameters
        timeout: Request timeout in seconds

    Returns:
        The "result" member of the response

    Raises:
        NetworkError: If the request fails, the node returns an HTTP error,
            or the response carries a JSON-RPC error
    """
    try:
        response = requests.post(
            rpc_url,
            json={
                "jsonrpc": "2.0",
                "method": method,
                "params": params if params is not None else [],
                "id": 1,
            },
            timeout=timeout,
        )
    except requests.RequestException as e:
        raise NetworkError(f"Network error during {method}: {e}") from e

    # Check for HTTP errors
    if response.status_code != 200:
        raise NetworkError(f"{method} failed with status {response.status_code}")

    try:
        result = response.json()
    except ValueError as e:
        raise NetworkError(f"{method} returned a non-JSON response") from e

    # Check for RPC errors
    if "error" in result:
        raise NetworkError(f"RPC error from {method}: {result['error']}")

    if "result" not in result:
        raise NetworkError(f"{method} response is missing 'result'")

    return result["result"]


def get_chain_id(rpc_url: str) -> int:
    """
    Get the chain id reported by the node.

    Args:
        rpc_url: RPC endpoint URL

    Returns:
        Chain id as an integer (short string encoding, e.g. SN_SEPOLIA)
    """
    return int(rpc_call(rpc_url, "starknet_chainId"), 16)


def get_nonce(rpc_url: str, account_address: str, block_id: str = "latest") -> int:
    """
    Get the current nonce of an account.

    Args:
        rpc_url: RPC endpoint URL
        account_address: Account contract address (hex)
        block_id: Block tag to read at

    Returns:
        Account nonce

    Raises:
        NetworkError: If the account cannot be read
    """
    result = rpc_call(
        rpc_url,
        "starknet_getNonce",
        {"block_id": block_id, "contract_address": hex(int(account_address, 0))},
    )
    return int(result, 16)


def encode_short_string(value: str) -> int:
    """Encode an ASCII short string as a felt (e.g. "SN_MAIN")."""
    return int.from_bytes(value.encode("ascii"), "big")

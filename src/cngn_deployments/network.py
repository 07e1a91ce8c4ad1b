"""Starknet network client for cngn-deployments."""

import asyncio
import logging
from typing import Any, Awaitable, Optional, Sequence, Union

import aiohttp

from starknet_py.common import create_casm_class, create_sierra_compiled_contract
from starknet_py.hash.casm_class_hash import compute_casm_class_hash
from starknet_py.hash.sierra_class_hash import compute_sierra_class_hash
from starknet_py.net.account.account import Account
from starknet_py.net.client_errors import ClientError
from starknet_py.net.full_node_client import FullNodeClient
from starknet_py.net.models import StarknetChainId
from starknet_py.net.signer.stark_curve_signer import KeyPair
from starknet_py.net.udc_deployer.deployer import Deployer
from starknet_py.transaction_errors import TransactionFailedError

from . import rpc
from .config import DeployConfig
from .constants import ALREADY_DECLARED_PATTERNS, CLASS_ALREADY_DECLARED_CODE
from .exceptions import NetworkError
from .types import (
    CompiledArtifact,
    Confirmation,
    DeclareSubmission,
    DeploySubmission,
    SubmissionStatus,
)

logger = logging.getLogger(__name__)

# Node rejections plus transport failures (dropped connection, timeout)
NODE_ERRORS = (
    ClientError,
    TransactionFailedError,
    aiohttp.ClientError,
    asyncio.TimeoutError,
)


def is_already_declared(error: BaseException) -> bool:
    """
    Check whether a node error means the class is already declared.

    Args:
        error: Error raised by a declare submission or its confirmation

    Returns:
        True for error code 51 or a message matching a known pattern
    """
    code = getattr(error, "code", None)
    if code is not None and str(code) == str(CLASS_ALREADY_DECLARED_CODE):
        return True

    text = str(error).lower()
    return any(pattern in text for pattern in ALREADY_DECLARED_PATTERNS)


def classify_error(error: BaseException) -> SubmissionStatus:
    """Map a node error to a submission status."""
    if is_already_declared(error):
        return SubmissionStatus.ALREADY_DECLARED
    return SubmissionStatus.FAILED


def to_felt(value: Union[str, int]) -> int:
    """Convert a hex/decimal string or int to a felt."""
    if isinstance(value, str):
        return int(value, 0)
    return int(value)


class StarknetClient:
    """
    NetworkClient backed by starknet-py.

    starknet-py is asynchronous; every call is driven to completion on a
    private event loop so the orchestrator stays strictly sequential.
    """

    def __init__(
        self,
        rpc_url: str,
        account_address: str,
        private_key: str,
        chain_id: str,
    ):
        self.rpc_url = rpc_url
        self.account_address = account_address
        self.chain_id = chain_id
        self._loop = asyncio.new_event_loop()
        self._client = FullNodeClient(node_url=rpc_url)
        self._account = Account(
            client=self._client,
            address=to_felt(account_address),
            key_pair=KeyPair.from_private_key(to_felt(private_key)),
            chain=StarknetChainId(rpc.encode_short_string(chain_id)),
        )
        self._deployer = Deployer()

    @classmethod
    def from_config(cls, config: DeployConfig) -> "StarknetClient":
        return cls(
            rpc_url=config.rpc_url,
            account_address=config.account_address,
            private_key=config.private_key,
            chain_id=config.chain_id,
        )

    def _run(self, coroutine: Awaitable[Any]) -> Any:
        return self._loop.run_until_complete(coroutine)

    def close(self) -> None:
        self._loop.close()

    def __enter__(self) -> "StarknetClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def check_chain(self) -> None:
        """
        Verify that the RPC endpoint serves the configured chain.

        Raises:
            NetworkError: If the node is unreachable or reports another chain
        """
        reported = rpc.get_chain_id(self.rpc_url)
        expected = rpc.encode_short_string(self.chain_id)
        if reported != expected:
            raise NetworkError(
                f"RPC endpoint {self.rpc_url} serves chain {hex(reported)}, "
                f"expected {self.chain_id}"
            )

    def get_nonce(self) -> int:
        return rpc.get_nonce(self.rpc_url, self.account_address)

    def compute_class_hash(self, artifact: CompiledArtifact) -> str:
        sierra = create_sierra_compiled_contract(compiled_contract=artifact.sierra)
        return hex(compute_sierra_class_hash(sierra))

    def declare(self, artifact: CompiledArtifact) -> DeclareSubmission:
        """
        Submit a v3 declare transaction for an artifact.

        Args:
            artifact: Compiled contract to declare

        Returns:
            DeclareSubmission with ACCEPTED, ALREADY_DECLARED or FAILED status
        """
        compiled_class_hash = compute_casm_class_hash(create_casm_class(artifact.casm))
        try:
            transaction = self._run(
                self._account.sign_declare_v3(
                    compiled_contract=artifact.sierra,
                    compiled_class_hash=compiled_class_hash,
                    auto_estimate=True,
                )
            )
            response = self._run(self._client.declare(transaction=transaction))
        except NODE_ERRORS as e:
            logger.debug("Declare of %s rejected: %s", artifact.name, e)
            return DeclareSubmission(status=classify_error(e), reason=str(e))

        return DeclareSubmission(
            status=SubmissionStatus.ACCEPTED,
            transaction_hash=hex(response.transaction_hash),
            class_hash=hex(response.class_hash),
        )

    def instantiate(
        self, class_hash: str, calldata: Sequence[Union[str, int]]
    ) -> DeploySubmission:
        """
        Deploy a declared class through the Universal Deployer Contract.

        Args:
            class_hash: Declared class hash (hex)
            calldata: Raw constructor calldata

        Returns:
            DeploySubmission with the precomputed contract address
        """
        deploy_call, address = self._deployer.create_contract_deployment(
            class_hash=to_felt(class_hash),
            calldata=[to_felt(value) for value in calldata],
        )
        try:
            response = self._run(
                self._account.execute_v3(calls=deploy_call, auto_estimate=True)
            )
        except NODE_ERRORS as e:
            return DeploySubmission(status=SubmissionStatus.FAILED, reason=str(e))

        return DeploySubmission(
            status=SubmissionStatus.ACCEPTED,
            transaction_hash=hex(response.transaction_hash),
            address=hex(address),
        )

    def await_confirmation(self, transaction_hash: str) -> Confirmation:
        try:
            self._run(self._client.wait_for_tx(tx_hash=to_felt(transaction_hash)))
        except NODE_ERRORS as e:
            return Confirmation(status=classify_error(e), reason=str(e))
        return Confirmation(status=SubmissionStatus.ACCEPTED)


def connect(config: DeployConfig, client: Optional[StarknetClient] = None) -> StarknetClient:
    """
    Create the network client and verify the account is reachable.

    Args:
        config: Deployment configuration
        client: Pre-built client (defaults to StarknetClient.from_config)

    Returns:
        Connected client

    Raises:
        NetworkError: If the chain does not match or the account cannot be read
    """
    if client is None:
        client = StarknetClient.from_config(config)

    client.check_chain()
    try:
        nonce = client.get_nonce()
    except NetworkError as e:
        raise NetworkError(
            f"Could not read account {config.account_address}. Check your credentials. ({e})"
        ) from e
    logger.info("Account nonce: %s", nonce)
    return client

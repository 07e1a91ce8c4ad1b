"""Declare and deploy steps for a single contract."""

import logging
from typing import Sequence, Union

from .exceptions import NetworkError
from .types import CompiledArtifact, NetworkClient, SubmissionStatus

logger = logging.getLogger(__name__)


def _recover_class_hash(client: NetworkClient, artifact: CompiledArtifact) -> str:
    class_hash = client.compute_class_hash(artifact)
    logger.info("  Already declared. Class hash: %s", class_hash)
    return class_hash


def declare_contract(client: NetworkClient, artifact: CompiledArtifact) -> str:
    """
    Declare a contract class and wait for finality.

    A class the network already knows is not an error: its hash is
    recomputed from the Sierra artifact, so repeated runs resume without
    uploading unchanged code.

    Args:
        client: Network client
        artifact: Compiled contract to declare

    Returns:
        Class hash (hex)

    Raises:
        NetworkError: If the submission or its confirmation fails for any
            other reason
    """
    logger.info("\nDeclaring %s...", artifact.name)

    submission = client.declare(artifact)
    if submission.status is SubmissionStatus.ALREADY_DECLARED:
        return _recover_class_hash(client, artifact)
    if submission.status is not SubmissionStatus.ACCEPTED:
        raise NetworkError(f"Declare of {artifact.name} failed: {submission.reason}")

    logger.info("  Transaction hash: %s", submission.transaction_hash)
    logger.info("  Waiting for confirmation...")

    confirmation = client.await_confirmation(submission.transaction_hash)
    if confirmation.status is SubmissionStatus.ALREADY_DECLARED:
        return _recover_class_hash(client, artifact)
    if not confirmation.ok:
        raise NetworkError(
            f"Declare of {artifact.name} was not accepted "
            f"(tx {submission.transaction_hash}): {confirmation.reason}"
        )

    logger.info("  Class hash: %s", submission.class_hash)
    return submission.class_hash


def deploy_contract(
    client: NetworkClient,
    contract_name: str,
    class_hash: str,
    constructor_args: Sequence[Union[str, int]],
) -> str:
    """
    Instantiate a declared class and wait for finality.

    There is no recovery path: every instantiation is a new state change.

    Args:
        client: Network client
        contract_name: Logical contract name, for the console narrative
        class_hash: Class hash returned by declare_contract
        constructor_args: Resolved constructor calldata

    Returns:
        Contract address (hex)

    Raises:
        NetworkError: If the submission or its confirmation fails
    """
    logger.info("\nDeploying %s...", contract_name)

    submission = client.instantiate(class_hash, list(constructor_args))
    if submission.status is not SubmissionStatus.ACCEPTED:
        raise NetworkError(f"Deploy of {contract_name} failed: {submission.reason}")

    logger.info("  Transaction hash: %s", submission.transaction_hash)
    logger.info("  Waiting for confirmation...")

    confirmation = client.await_confirmation(submission.transaction_hash)
    if not confirmation.ok:
        raise NetworkError(
            f"Deploy of {contract_name} was not accepted "
            f"(tx {submission.transaction_hash}): {confirmation.reason}"
        )

    logger.info("  Contract address: %s", submission.address)
    return submission.address

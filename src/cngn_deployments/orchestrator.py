"""Declare/deploy orchestration for a contract set."""

import logging
from typing import Callable, Dict, Mapping, Sequence

from .artifacts import load_artifact, load_artifacts
from .graph import deploy_order, resolve_constructor_args
from .steps import declare_contract, deploy_contract
from .types import CompiledArtifact, ContractSpec, DeployedContract, NetworkClient

logger = logging.getLogger(__name__)

ArtifactLoader = Callable[[str], CompiledArtifact]


def _banner(title: str) -> None:
    logger.info("\n========================================")
    logger.info("   %s", title)
    logger.info("========================================")


class DeploymentOrchestrator:
    """
    Drives a contract set through declaration and deployment.

    Runs are strictly sequential. The first failure aborts the remaining
    sequence; nothing already submitted is retried or rolled back.
    """

    def __init__(self, client: NetworkClient, loader: ArtifactLoader = load_artifact):
        """
        Initialize the orchestrator.

        Args:
            client: Network client used for every submission
            loader: Function returning the compiled artifact of a contract name
        """
        self.client = client
        self.loader = loader

    def load_all(self, specs: Sequence[ContractSpec]) -> Dict[str, CompiledArtifact]:
        """Load every artifact before the first network mutation."""
        return load_artifacts((spec.name for spec in specs), loader=self.loader)

    def declare_all(
        self,
        specs: Sequence[ContractSpec],
        artifacts: Mapping[str, CompiledArtifact],
    ) -> Dict[str, str]:
        """
        Declare every contract in declaration order.

        Args:
            specs: ContractSpecs in declaration order
            artifacts: Loaded artifacts by contract name

        Returns:
            Mapping of contract name -> class hash
        """
        _banner("Declaring Contracts")
        class_hashes: Dict[str, str] = {}
        for spec in specs:
            class_hashes[spec.name] = declare_contract(self.client, artifacts[spec.name])
        return class_hashes

    def deploy_all(
        self,
        specs: Sequence[ContractSpec],
        class_hashes: Mapping[str, str],
    ) -> Dict[str, str]:
        """
        Deploy every contract after the contracts whose addresses it needs.

        Args:
            specs: ContractSpecs in declaration order
            class_hashes: Class hashes from declare_all

        Returns:
            Mapping of contract name -> address, in deploy order
        """
        _banner("Deploying Contracts")
        addresses: Dict[str, str] = {}
        for spec in deploy_order(specs):
            calldata = resolve_constructor_args(spec, addresses)
            addresses[spec.name] = deploy_contract(
                self.client, spec.name, class_hashes[spec.name], calldata
            )
        return addresses

    def run(self, specs: Sequence[ContractSpec]) -> Dict[str, DeployedContract]:
        """
        Declare then deploy a whole contract set.

        The graph is validated and every artifact loaded before the first
        submission, so configuration and build problems never leave the
        network half-populated.

        Args:
            specs: ContractSpecs in declaration order

        Returns:
            Mapping of contract name -> DeployedContract, in declaration order

        Raises:
            DependencyGraphError: If the contract graph is malformed
            ArtifactMissingError: If a build output is absent
            NetworkError: If any step fails
        """
        deploy_order(specs)
        artifacts = self.load_all(specs)

        class_hashes = self.declare_all(specs, artifacts)
        addresses = self.deploy_all(specs, class_hashes)

        return {
            spec.name: DeployedContract(
                class_hash=class_hashes[spec.name], address=addresses[spec.name]
            )
            for spec in specs
        }

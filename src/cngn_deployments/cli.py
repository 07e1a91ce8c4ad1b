"""Command-line entry point: deploy the cNGN contract suite."""

import argparse
import logging
from functools import partial
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from dotenv import find_dotenv, load_dotenv

from .artifacts import load_artifact
from .build import run_build
from .config import DeployConfig, load_config
from .constants import NETWORK_CONFIG
from .contracts import cngn_contract_specs
from .exceptions import DeploymentError, PersistenceError
from .network import StarknetClient, connect
from .orchestrator import DeploymentOrchestrator
from .recorder import build_manifest, save_manifest
from .safety import confirm_deployment
from .types import ContractSpec, DeploymentManifest

logger = logging.getLogger(__name__)

ClientFactory = Callable[[DeployConfig], StarknetClient]


def configure_logging(verbose: bool = False) -> None:
    """Send the console narrative to stderr as plain lines."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
    )


def _log_summary(manifest: DeploymentManifest, explorer_url: str) -> None:
    width = max((len(name) for name in manifest.contracts), default=0) + 1
    logger.info("\nContract Addresses:")
    for name, deployed in manifest.contracts.items():
        logger.info("  %s %s", f"{name}:".ljust(width), deployed.address)

    logger.info("\nView on explorer:")
    for name, deployed in manifest.contracts.items():
        logger.info("  %s: %s/contract/%s", name, explorer_url, deployed.address)


def deploy(
    config: DeployConfig,
    specs: Optional[Sequence[ContractSpec]] = None,
    client_factory: Optional[ClientFactory] = None,
    prompt: Optional[Callable[[str], str]] = None,
    target_dir: Optional[Union[Path, str]] = None,
    deployments_dir: Optional[Union[Path, str]] = None,
    build: bool = True,
    project_dir: Optional[Union[Path, str]] = None,
) -> Optional[DeploymentManifest]:
    """
    Run a full deployment: confirm, connect, build, declare, deploy, record.

    Args:
        config: Deployment configuration
        specs: Contract set (defaults to the cNGN suite for the configured owner)
        client_factory: Builds the network client (defaults to StarknetClient.from_config)
        prompt: Operator prompt used by the safety gate (defaults to input)
        target_dir: Build output directory (defaults to ./target/dev)
        deployments_dir: Manifest directory (defaults to ./deployments)
        build: Run the external contract build before declaring
        project_dir: Directory the build runs in

    Returns:
        The saved DeploymentManifest, or None if the operator declined

    Raises:
        DeploymentError: On any configuration, build, network or persistence failure
    """
    if specs is None:
        specs = cngn_contract_specs(config.owner_address)
    if client_factory is None:
        client_factory = StarknetClient.from_config
    if prompt is None:
        prompt = input

    logger.info("========================================")
    logger.info("   cNGN Contracts Deployment")
    logger.info("========================================")
    logger.info("Network: %s (%s)", config.network, NETWORK_CONFIG[config.network]["chain_name"])
    logger.info("Owner: %s", config.owner_address)
    logger.info("RPC: %s", config.rpc_url)

    if not confirm_deployment(config.network, prompt):
        return None

    logger.info("\nChecking account...")
    client = client_factory(config)
    try:
        connect(config, client)

        if build:
            run_build(cwd=project_dir)

        orchestrator = DeploymentOrchestrator(client, partial(load_artifact, target_dir=target_dir))
        deployed = orchestrator.run(specs)
    finally:
        client.close()

    manifest = build_manifest(config.network, config.owner_address, specs, deployed)
    try:
        snapshot_path, _ = save_manifest(manifest, deployments_dir)
    except PersistenceError:
        logger.error("\nContracts are deployed but the manifest was not saved.")
        logger.error("Record these identifiers manually:")
        for name, deployed_contract in manifest.contracts.items():
            logger.error(
                "  %s: class hash %s, address %s",
                name,
                deployed_contract.class_hash,
                deployed_contract.address,
            )
        raise

    logger.info("\n========================================")
    logger.info("   Deployment Complete!")
    logger.info("========================================")
    logger.info("\nDeployment saved to: %s", snapshot_path)
    _log_summary(manifest, config.explorer_url)
    return manifest


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cngn-deploy",
        description="Declare and deploy the cNGN Starknet contracts.",
    )
    parser.add_argument(
        "--network",
        help="Target network: testnet (alias sepolia) or mainnet. "
        "Defaults to $STARKNET_NETWORK, $NETWORK, then testnet.",
    )
    parser.add_argument("--owner", help="Owner address (defaults to $CONTRACT_OWNER_ADDRESS or the account)")
    parser.add_argument("--target-dir", type=Path, help="Build output directory (default: ./target/dev)")
    parser.add_argument(
        "--deployments-dir", type=Path, help="Manifest directory (default: ./deployments)"
    )
    parser.add_argument("--skip-build", action="store_true", help="Do not run 'scarb build' first")
    parser.add_argument("--env-file", type=Path, help="Load variables from this .env file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for cngn-deploy.

    Returns:
        0 on success or operator decline, 1 on any failure
    """
    args = parse_args(argv)
    configure_logging(args.verbose)
    load_dotenv(dotenv_path=args.env_file or find_dotenv(usecwd=True))

    try:
        config = load_config(network=args.network, owner=args.owner)
        deploy(
            config,
            target_dir=args.target_dir,
            deployments_dir=args.deployments_dir,
            build=not args.skip_build,
        )
    except PersistenceError as e:
        logger.error("\nError saving deployment: %s", e)
        return 1
    except DeploymentError as e:
        logger.error("\nError: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

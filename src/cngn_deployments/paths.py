"""Path management utilities for cngn-deployments."""

from pathlib import Path
from typing import Optional, Union

from .constants import CASM_SUFFIX, CONTRACT_PACKAGE, SIERRA_SUFFIX


def get_default_target_dir() -> Path:
    """
    Get default build output directory.

    Returns:
        Path to ./target/dev
    """
    return Path.cwd() / "target" / "dev"


def get_default_deployments_dir() -> Path:
    """
    Get default manifest directory.

    Returns:
        Path to ./deployments
    """
    return Path.cwd() / "deployments"


def get_artifact_paths(
    contract_name: str,
    target_dir: Optional[Union[Path, str]] = None,
    package: str = CONTRACT_PACKAGE,
) -> tuple[Path, Path]:
    """
    Get build output paths for a contract.

    Args:
        contract_name: Logical contract name (e.g. "Forwarder")
        target_dir: Custom build directory (defaults to ./target/dev)
        package: Scarb package name used as file prefix

    Returns:
        Tuple of (sierra_path, casm_path)
    """
    if target_dir is None:
        target_dir = get_default_target_dir()
    else:
        target_dir = Path(target_dir).absolute()

    stem = f"{package}_{contract_name}"
    return (target_dir / f"{stem}{SIERRA_SUFFIX}", target_dir / f"{stem}{CASM_SUFFIX}")


def get_manifest_paths(
    network: str,
    stamp: str,
    deployments_dir: Optional[Union[Path, str]] = None,
) -> tuple[Path, Path]:
    """
    Get manifest file paths for a run.

    Args:
        network: Network name ("mainnet" or "testnet")
        stamp: Filename-safe timestamp of the run
        deployments_dir: Custom manifest directory (defaults to ./deployments)

    Returns:
        Tuple of (snapshot_path, latest_path)
    """
    if deployments_dir is None:
        deployments_dir = get_default_deployments_dir()
    else:
        deployments_dir = Path(deployments_dir).absolute()

    return (
        deployments_dir / f"{network}_{stamp}.json",
        deployments_dir / f"{network}_latest.json",
    )

"""Deployment manifest recording for cngn-deployments."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

from .exceptions import (
    IncompleteDeploymentError,
    ManifestNotFoundError,
    PersistenceError,
)
from .paths import get_manifest_paths
from .types import ContractSpec, DeployedContract, DeploymentManifest

logger = logging.getLogger(__name__)


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """
    Format a moment as an ISO-8601 UTC timestamp with millisecond precision.

    Args:
        moment: Time to format (defaults to now)

    Returns:
        Timestamp such as "2026-10-19T10:46:00.123Z"
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def file_stamp(timestamp: str) -> str:
    """Make a manifest timestamp safe for use in a file name."""
    return timestamp.replace(":", "-").replace(".", "-")


def build_manifest(
    network: str,
    owner: str,
    specs: Sequence[ContractSpec],
    deployed: Mapping[str, DeployedContract],
    timestamp: Optional[str] = None,
) -> DeploymentManifest:
    """
    Assemble the manifest of a finished run.

    Args:
        network: Network name ("mainnet" or "testnet")
        owner: Owner address passed to the constructors
        specs: Configured contract set, in declaration order
        deployed: Class hash and address per contract name
        timestamp: ISO-8601 timestamp (defaults to now)

    Returns:
        DeploymentManifest with contracts in declaration order

    Raises:
        IncompleteDeploymentError: If any configured contract lacks a
            class hash or an address
    """
    missing = [
        spec.name
        for spec in specs
        if spec.name not in deployed
        or not deployed[spec.name].class_hash
        or not deployed[spec.name].address
    ]
    if missing:
        raise IncompleteDeploymentError(
            f"Cannot record deployment, missing class hash or address for: {', '.join(missing)}"
        )

    return DeploymentManifest(
        network=network,
        timestamp=timestamp or utc_timestamp(),
        owner=owner,
        contracts={spec.name: deployed[spec.name] for spec in specs},
    )


def save_manifest(
    manifest: DeploymentManifest,
    deployments_dir: Optional[Union[Path, str]] = None,
) -> tuple[Path, Path]:
    """
    Persist a manifest as a timestamped snapshot and as the network's latest.

    The snapshot is created exclusively and never overwritten; the latest
    file is always overwritten. Both hold the same serialized text.

    Args:
        manifest: Complete deployment manifest
        deployments_dir: Manifest directory (defaults to ./deployments)

    Returns:
        Tuple of (snapshot_path, latest_path)

    Raises:
        PersistenceError: If the directory cannot be created or a write fails
    """
    snapshot_path, latest_path = get_manifest_paths(
        manifest.network, file_stamp(manifest.timestamp), deployments_dir
    )
    serialized = json.dumps(manifest.to_dict(), indent=2)

    try:
        snapshot_path.parent.mkdir(parents=True, exist_ok=True)
        with open(snapshot_path, "x") as f:
            f.write(serialized)
        with open(latest_path, "w") as f:
            f.write(serialized)
    except OSError as e:
        raise PersistenceError(
            f"Failed to save deployment manifest to {snapshot_path.parent}: {e}"
        ) from e

    logger.debug("Wrote %s and %s", snapshot_path, latest_path)
    return (snapshot_path, latest_path)


def load_manifest(manifest_path: Union[Path, str]) -> DeploymentManifest:
    """
    Read a persisted manifest.

    Args:
        manifest_path: Path to a manifest JSON file

    Returns:
        DeploymentManifest

    Raises:
        ManifestNotFoundError: If the file does not exist
    """
    manifest_path = Path(manifest_path)
    if not manifest_path.exists():
        raise ManifestNotFoundError(f"Deployment manifest not found at {manifest_path}")

    with open(manifest_path) as f:
        return DeploymentManifest.from_dict(json.load(f))


def latest_manifest(
    network: str, deployments_dir: Optional[Union[Path, str]] = None
) -> DeploymentManifest:
    """
    Read the most recent complete manifest of a network.

    Args:
        network: Network name ("mainnet" or "testnet")
        deployments_dir: Manifest directory (defaults to ./deployments)

    Returns:
        DeploymentManifest

    Raises:
        ManifestNotFoundError: If no run has been recorded for the network
    """
    _, latest_path = get_manifest_paths(network, "latest", deployments_dir)
    return load_manifest(latest_path)

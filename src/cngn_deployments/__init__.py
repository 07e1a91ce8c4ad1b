"""
cngn-deployments: declare and deploy the cNGN Starknet contracts and record where they live
"""

from importlib.metadata import PackageNotFoundError, version

from .artifacts import load_artifact, load_artifacts
from .config import DeployConfig, load_config
from .contracts import CONTRACT_NAMES, cngn_contract_specs
from .exceptions import (
    ArtifactMissingError,
    BuildError,
    ConfigurationError,
    DependencyGraphError,
    DeploymentError,
    IncompleteDeploymentError,
    InvalidArtifactError,
    ManifestNotFoundError,
    NetworkError,
    PersistenceError,
)
from .graph import deploy_order, resolve_constructor_args
from .orchestrator import DeploymentOrchestrator
from .recorder import build_manifest, latest_manifest, load_manifest, save_manifest
from .safety import confirm_deployment, is_high_stakes
from .steps import declare_contract, deploy_contract
from .types import (
    ArgKind,
    CompiledArtifact,
    ConstructorArg,
    ContractSpec,
    DeployedContract,
    DeploymentManifest,
    NetworkClient,
    SubmissionStatus,
)

try:
    __version__ = version("cngn-deployments")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "DeploymentOrchestrator",
    "declare_contract",
    "deploy_contract",
    "deploy_order",
    "resolve_constructor_args",
    "load_artifact",
    "load_artifacts",
    "build_manifest",
    "save_manifest",
    "load_manifest",
    "latest_manifest",
    "confirm_deployment",
    "is_high_stakes",
    "DeployConfig",
    "load_config",
    "CONTRACT_NAMES",
    "cngn_contract_specs",
    "ArgKind",
    "CompiledArtifact",
    "ConstructorArg",
    "ContractSpec",
    "DeployedContract",
    "DeploymentManifest",
    "NetworkClient",
    "SubmissionStatus",
    "DeploymentError",
    "ConfigurationError",
    "DependencyGraphError",
    "ArtifactMissingError",
    "InvalidArtifactError",
    "BuildError",
    "NetworkError",
    "IncompleteDeploymentError",
    "PersistenceError",
    "ManifestNotFoundError",
]

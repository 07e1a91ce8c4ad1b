"""Custom exception classes for cngn-deployments."""

from pathlib import Path
from typing import Optional, Union


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class ConfigurationError(DeploymentError, ValueError):
    """Raised when startup configuration is missing or invalid."""

    pass


class DependencyGraphError(ConfigurationError):
    """Raised when the contract set has unknown, duplicate or cyclic dependencies."""

    pass


class ArtifactMissingError(DeploymentError, FileNotFoundError):
    """Raised when a compiled contract artifact is not on disk."""

    def __init__(self, message: str, path: Optional[Union[Path, str]] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class InvalidArtifactError(DeploymentError, ValueError):
    """Raised when a compiled contract artifact cannot be parsed."""

    pass


class BuildError(DeploymentError, RuntimeError):
    """Raised when the external contract build fails."""

    pass


class NetworkError(DeploymentError, RuntimeError):
    """Raised when a network submission, confirmation or account read fails."""

    pass


class IncompleteDeploymentError(DeploymentError, ValueError):
    """Raised when a manifest would be missing a class hash or address."""

    pass


class PersistenceError(DeploymentError, OSError):
    """Raised when a deployment manifest cannot be written."""

    pass


class ManifestNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when a requested deployment manifest does not exist."""

    pass

"""Compiled contract artifact loading for cngn-deployments."""

import json
from functools import partial
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Union

from .constants import CONTRACT_PACKAGE
from .exceptions import ArtifactMissingError, InvalidArtifactError
from .paths import get_artifact_paths
from .types import CompiledArtifact


def _read_json_text(file_path: Path, kind: str) -> str:
    """
    Read a build output and check that it parses as JSON.

    Args:
        file_path: Path to the artifact file
        kind: Human-readable artifact kind for error messages

    Returns:
        The file contents

    Raises:
        ArtifactMissingError: If the file does not exist
        InvalidArtifactError: If the file is not valid JSON
    """
    if not file_path.exists():
        raise ArtifactMissingError(
            f"{kind} file not found: {file_path}\nRun 'scarb build' first.",
            path=file_path,
        )

    text = file_path.read_text(encoding="utf-8")
    try:
        json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidArtifactError(f"{kind} file is not valid JSON: {file_path} ({e})") from e
    return text


def load_artifact(
    contract_name: str,
    target_dir: Optional[Union[Path, str]] = None,
    package: str = CONTRACT_PACKAGE,
) -> CompiledArtifact:
    """
    Load the Sierra and CASM build outputs of a contract.

    Args:
        contract_name: Logical contract name (e.g. "Cngn")
        target_dir: Build directory (defaults to ./target/dev)
        package: Scarb package name used as file prefix

    Returns:
        CompiledArtifact holding both files as JSON text

    Raises:
        ArtifactMissingError: If either file is absent
        InvalidArtifactError: If either file is not valid JSON
    """
    sierra_path, casm_path = get_artifact_paths(contract_name, target_dir, package)

    return CompiledArtifact(
        name=contract_name,
        sierra=_read_json_text(sierra_path, "Sierra"),
        casm=_read_json_text(casm_path, "CASM"),
        sierra_path=sierra_path,
        casm_path=casm_path,
    )


def load_artifacts(
    contract_names: Iterable[str],
    target_dir: Optional[Union[Path, str]] = None,
    package: str = CONTRACT_PACKAGE,
    loader: Optional[Callable[[str], CompiledArtifact]] = None,
) -> Dict[str, CompiledArtifact]:
    """
    Load artifacts for several contracts, failing on the first missing one.

    Args:
        contract_names: Logical contract names, in the order to load them
        target_dir: Build directory (defaults to ./target/dev)
        package: Scarb package name used as file prefix
        loader: Function loading a single contract (defaults to load_artifact)

    Returns:
        Mapping of contract name -> CompiledArtifact, in input order
    """
    if loader is None:
        loader = partial(load_artifact, target_dir=target_dir, package=package)
    return {name: loader(name) for name in contract_names}

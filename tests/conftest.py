"""Shared pytest fixtures for cngn-deployments tests."""

import hashlib
import json
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Sequence, Set, Tuple, Union

import pytest

from cngn_deployments.config import DeployConfig
from cngn_deployments.contracts import CONTRACT_NAMES
from cngn_deployments.paths import get_artifact_paths
from cngn_deployments.types import (
    CompiledArtifact,
    Confirmation,
    DeclareSubmission,
    DeploySubmission,
    SubmissionStatus,
)

OWNER = "0xOWNER"
ACCOUNT = "0x1234"


class FakeNetworkClient:
    """In-memory NetworkClient that records every call in order."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.known_classes: Set[str] = set()
        self.addresses: Dict[str, str] = {}
        self.fail_declare: Set[str] = set()
        self.fail_deploy: Set[str] = set()
        self.fail_confirm: Set[str] = set()
        self.already_declared_on_confirm: Set[str] = set()
        self.nonce = 7
        self.chain_checked = False
        self.closed = False
        self._transactions: Dict[str, Tuple[str, str, str]] = {}
        self._class_names: Dict[str, str] = {}
        self._counter = 0

    @staticmethod
    def hash_of(artifact: CompiledArtifact) -> str:
        return "0x" + hashlib.sha256(artifact.sierra.encode()).hexdigest()[:62]

    def _next_tx(self) -> str:
        self._counter += 1
        return hex(0x7000 + self._counter)

    @property
    def mutations(self) -> List[tuple]:
        return [call for call in self.calls if call[0] in ("declare", "instantiate")]

    def check_chain(self) -> None:
        self.chain_checked = True

    def get_nonce(self) -> int:
        self.calls.append(("nonce",))
        return self.nonce

    def close(self) -> None:
        self.closed = True

    def compute_class_hash(self, artifact: CompiledArtifact) -> str:
        return self.hash_of(artifact)

    def declare(self, artifact: CompiledArtifact) -> DeclareSubmission:
        self.calls.append(("declare", artifact.name))
        class_hash = self.hash_of(artifact)
        self._class_names[class_hash] = artifact.name

        if artifact.name in self.fail_declare:
            return DeclareSubmission(SubmissionStatus.FAILED, reason="insufficient balance")
        if class_hash in self.known_classes:
            return DeclareSubmission(
                SubmissionStatus.ALREADY_DECLARED,
                reason=f"Class with hash {class_hash} is already declared.",
            )

        tx = self._next_tx()
        self._transactions[tx] = ("declare", artifact.name, class_hash)
        return DeclareSubmission(SubmissionStatus.ACCEPTED, tx, class_hash)

    def instantiate(self, class_hash: str, calldata: Sequence[Union[str, int]]) -> DeploySubmission:
        name = self._class_names[class_hash]
        self.calls.append(("instantiate", name, list(calldata)))

        if name in self.fail_deploy:
            return DeploySubmission(SubmissionStatus.FAILED, reason="execution reverted")

        tx = self._next_tx()
        address = "0x" + hashlib.sha256(f"{name}:{tx}".encode()).hexdigest()[:40]
        self._transactions[tx] = ("instantiate", name, address)
        return DeploySubmission(SubmissionStatus.ACCEPTED, tx, address)

    def await_confirmation(self, transaction_hash: str) -> Confirmation:
        kind, name, value = self._transactions[transaction_hash]
        self.calls.append(("confirm", kind, name))

        if name in self.fail_confirm:
            return Confirmation(SubmissionStatus.FAILED, reason="REVERTED")
        if kind == "declare":
            if name in self.already_declared_on_confirm:
                self.known_classes.add(value)
                return Confirmation(
                    SubmissionStatus.ALREADY_DECLARED,
                    reason="StarknetErrorCode.CLASS_ALREADY_DECLARED",
                )
            self.known_classes.add(value)
        else:
            self.addresses[name] = value
        return Confirmation(SubmissionStatus.ACCEPTED)


def write_artifact_pair(target_dir: Path, name: str) -> Tuple[Path, Path]:
    """Write a minimal Sierra/CASM pair for a contract."""
    sierra_path, casm_path = get_artifact_paths(name, target_dir)
    sierra_path.parent.mkdir(parents=True, exist_ok=True)
    sierra_path.write_text(
        json.dumps({"sierra_program": [hex(len(name)), name], "contract_class_version": "0.1.0"})
    )
    casm_path.write_text(json.dumps({"prime": hex(2**251 + 17 * 2**192 + 1), "bytecode": []}))
    return sierra_path, casm_path


@pytest.fixture
def fake_client() -> FakeNetworkClient:
    """Return a fresh in-memory network client."""
    return FakeNetworkClient()


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """Return a build directory populated with artifacts for the cNGN suite."""
    build_dir = tmp_path / "target" / "dev"
    for name in CONTRACT_NAMES:
        write_artifact_pair(build_dir, name)
    return build_dir


@pytest.fixture
def make_artifacts(tmp_path: Path) -> Callable[[Iterable[str]], Path]:
    """Return a function that writes artifacts for arbitrary contract names."""

    def _make(names: Iterable[str]) -> Path:
        build_dir = tmp_path / "custom-target"
        for name in names:
            write_artifact_pair(build_dir, name)
        return build_dir

    return _make


@pytest.fixture
def deployments_dir(tmp_path: Path) -> Path:
    """Return a (not yet created) manifest directory."""
    return tmp_path / "deployments"


@pytest.fixture
def testnet_config() -> DeployConfig:
    return DeployConfig(
        network="testnet",
        rpc_url="http://testnet-rpc.example.com",
        private_key="0xabc",
        account_address=ACCOUNT,
        owner_address=OWNER,
    )


@pytest.fixture
def mainnet_config() -> DeployConfig:
    return DeployConfig(
        network="mainnet",
        rpc_url="http://mainnet-rpc.example.com",
        private_key="0xabc",
        account_address=ACCOUNT,
        owner_address=OWNER,
    )

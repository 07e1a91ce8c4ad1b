"""Data types and dataclasses for cngn-deployments."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Sequence, Tuple, Union


class ArgKind(Enum):
    """
    Kinds of constructor argument.

    Value strings define de/serialization law.

    - LITERAL: value is passed to the constructor as-is
    - CONTRACT_ADDRESS: value names another contract whose deployed address is passed
    """

    LITERAL = "literal"
    CONTRACT_ADDRESS = "contract-address"


@dataclass(frozen=True)
class ConstructorArg:
    """One positional constructor argument."""

    kind: ArgKind
    value: Union[str, int]

    @classmethod
    def literal(cls, value: Union[str, int]) -> "ConstructorArg":
        return cls(ArgKind.LITERAL, value)

    @classmethod
    def address_of(cls, contract_name: str) -> "ConstructorArg":
        return cls(ArgKind.CONTRACT_ADDRESS, contract_name)


@dataclass(frozen=True)
class ContractSpec:
    """A deployable contract and the wiring of its constructor."""

    name: str  # Logical name, e.g. "Forwarder"
    constructor_args: Tuple[ConstructorArg, ...] = ()

    @property
    def dependencies(self) -> Tuple[str, ...]:
        """Names of contracts whose addresses this constructor needs, in argument order."""
        return tuple(
            str(arg.value)
            for arg in self.constructor_args
            if arg.kind is ArgKind.CONTRACT_ADDRESS
        )


@dataclass(frozen=True)
class CompiledArtifact:
    """Build outputs for one contract, kept as JSON text."""

    name: str
    sierra: str  # Class representation (*.contract_class.json)
    casm: str  # Byte-code representation (*.compiled_contract_class.json)
    sierra_path: Optional[Path] = None
    casm_path: Optional[Path] = None


class SubmissionStatus(Enum):
    """Outcome of a network submission or confirmation, as decided by the network client."""

    ACCEPTED = "accepted"
    ALREADY_DECLARED = "already-declared"
    FAILED = "failed"


@dataclass(frozen=True)
class DeclareSubmission:
    """Result of submitting a class declaration."""

    status: SubmissionStatus
    transaction_hash: Optional[str] = None
    class_hash: Optional[str] = None
    reason: Optional[str] = None


@dataclass(frozen=True)
class DeploySubmission:
    """Result of submitting a contract instantiation."""

    status: SubmissionStatus
    transaction_hash: Optional[str] = None
    address: Optional[str] = None
    reason: Optional[str] = None


@dataclass(frozen=True)
class Confirmation:
    """Finality of a submitted transaction."""

    status: SubmissionStatus
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is SubmissionStatus.ACCEPTED


class NetworkClient(Protocol):
    """Primitives the orchestrator needs from a ledger network."""

    def declare(self, artifact: CompiledArtifact) -> DeclareSubmission: ...

    def instantiate(
        self, class_hash: str, calldata: Sequence[Union[str, int]]
    ) -> DeploySubmission: ...

    def await_confirmation(self, transaction_hash: str) -> Confirmation: ...

    def compute_class_hash(self, artifact: CompiledArtifact) -> str: ...

    def get_nonce(self) -> int: ...


@dataclass(frozen=True)
class DeployedContract:
    """Class hash and address of one deployed contract."""

    class_hash: str
    address: str


@dataclass(frozen=True)
class DeploymentManifest:
    """Record of a complete deployment run."""

    network: str  # "mainnet" or "testnet"
    timestamp: str  # ISO-8601, UTC
    owner: str
    contracts: Dict[str, DeployedContract] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the persisted JSON schema (insertion order preserved)."""
        return {
            "network": self.network,
            "timestamp": self.timestamp,
            "owner": self.owner,
            "contracts": {
                name: {"classHash": deployed.class_hash, "address": deployed.address}
                for name, deployed in self.contracts.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeploymentManifest":
        """Parse the persisted JSON schema."""
        return cls(
            network=data["network"],
            timestamp=data["timestamp"],
            owner=data["owner"],
            contracts={
                name: DeployedContract(
                    class_hash=entry["classHash"], address=entry["address"]
                )
                for name, entry in data["contracts"].items()
            },
        )

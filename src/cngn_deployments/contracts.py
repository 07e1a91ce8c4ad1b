"""The cNGN contract suite and its constructor wiring."""

from typing import List, Tuple

from .types import ConstructorArg, ContractSpec

# Declaration order; also the key order of the deployment manifest
CONTRACT_NAMES: Tuple[str, ...] = (
    "Operations",
    "Operations2",
    "Cngn",
    "Cngn2",
    "Forwarder",
)


def cngn_contract_specs(owner: str) -> List[ContractSpec]:
    """
    Build the cNGN contract set for a given owner.

    Every constructor takes the owner as its last argument. Forwarder needs
    Operations2; each token needs the Forwarder and its own Operations
    contract.

    Args:
        owner: Owner address passed to every constructor

    Returns:
        ContractSpecs in declaration order
    """
    owner_arg = ConstructorArg.literal(owner)
    address_of = ConstructorArg.address_of

    return [
        ContractSpec("Operations", (owner_arg,)),
        ContractSpec("Operations2", (owner_arg,)),
        ContractSpec("Cngn", (address_of("Forwarder"), address_of("Operations"), owner_arg)),
        ContractSpec("Cngn2", (address_of("Forwarder"), address_of("Operations2"), owner_arg)),
        ContractSpec("Forwarder", (address_of("Operations2"), owner_arg)),
    ]

"""Contract dependency graph for cngn-deployments."""

from typing import Dict, List, Mapping, Sequence, Union

from .exceptions import DependencyGraphError
from .types import ArgKind, ContractSpec


def validate_specs(specs: Sequence[ContractSpec]) -> Dict[str, ContractSpec]:
    """
    Check that a contract set forms a well-formed graph.

    Args:
        specs: ContractSpecs in declaration order

    Returns:
        Mapping of name -> ContractSpec, in declaration order

    Raises:
        DependencyGraphError: On duplicate names, self references or
            references to contracts outside the set
    """
    by_name: Dict[str, ContractSpec] = {}
    for spec in specs:
        if spec.name in by_name:
            raise DependencyGraphError(f"Contract '{spec.name}' is defined twice")
        by_name[spec.name] = spec

    for spec in specs:
        for dependency in spec.dependencies:
            if dependency == spec.name:
                raise DependencyGraphError(f"Contract '{spec.name}' depends on itself")
            if dependency not in by_name:
                raise DependencyGraphError(
                    f"Contract '{spec.name}' depends on unknown contract '{dependency}'"
                )

    return by_name


def deploy_order(specs: Sequence[ContractSpec]) -> List[ContractSpec]:
    """
    Compute a deploy order in which dependencies always come first.

    Kahn's algorithm; among contracts that are ready, the earliest declared
    goes first, so the order only departs from declaration order where a
    dependency forces it.

    Args:
        specs: ContractSpecs in declaration order

    Returns:
        ContractSpecs in deploy order

    Raises:
        DependencyGraphError: If the graph is malformed or has a cycle
    """
    by_name = validate_specs(specs)

    # Count distinct unmet dependencies per contract
    pending = {name: set(spec.dependencies) for name, spec in by_name.items()}
    dependents: Dict[str, List[str]] = {name: [] for name in by_name}
    for name, deps in pending.items():
        for dependency in deps:
            dependents[dependency].append(name)

    position = {name: index for index, name in enumerate(by_name)}
    ready = [name for name, deps in pending.items() if not deps]
    order: List[ContractSpec] = []

    while ready:
        ready.sort(key=position.__getitem__)
        name = ready.pop(0)
        order.append(by_name[name])
        for dependent in dependents[name]:
            pending[dependent].discard(name)
            if not pending[dependent]:
                ready.append(dependent)

    if len(order) != len(by_name):
        stuck = [name for name in by_name if pending[name]]
        raise DependencyGraphError(
            f"Dependency cycle between contracts: {', '.join(stuck)}"
        )

    return order


def resolve_constructor_args(
    spec: ContractSpec, addresses: Mapping[str, str]
) -> List[Union[str, int]]:
    """
    Substitute deployed addresses into a contract's constructor arguments.

    Args:
        spec: Contract being deployed
        addresses: Addresses of contracts deployed so far

    Returns:
        Constructor calldata

    Raises:
        DependencyGraphError: If a referenced contract has not been deployed
    """
    calldata: List[Union[str, int]] = []
    for arg in spec.constructor_args:
        if arg.kind is ArgKind.CONTRACT_ADDRESS:
            if arg.value not in addresses:
                raise DependencyGraphError(
                    f"Contract '{spec.name}' needs the address of '{arg.value}', "
                    "which has not been deployed"
                )
            calldata.append(addresses[str(arg.value)])
        else:
            calldata.append(arg.value)
    return calldata

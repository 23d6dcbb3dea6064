"""Expand reference edges into root-reaching dependency chains.

Answers "why is this version pulled in?" by walking ``references`` edges from
a package up to every ancestor that has no references of its own (normally
the project root).
"""

from __future__ import annotations

from .errors import DependencyCycleError, UnknownPackageError
from .models import PackageGraph


def _chain_entry(graph: PackageGraph, key: str) -> str:
    if key == graph.root_id:
        return key
    return f"{key}/{graph[key].version}"


def compute_dependency_chains(graph: PackageGraph, package_id: str) -> list[list[str]]:
    """Return every reference path from ``package_id`` up to a root-reaching ancestor.

    ``package_id`` is ``"name/version"`` or a bare ``"name"``. Each chain lists
    the referencing nodes in order, excluding the queried package itself.
    Chains follow the insertion order of the ``references`` edges.

    Raises:
        UnknownPackageError: if the package (or that version of it) is absent.
        DependencyCycleError: if a reference path revisits a node.
    """
    name, _, version = package_id.partition("/")
    key = name.lower()
    if key not in graph:
        raise UnknownPackageError(f"Package '{package_id}' is not in the graph")
    if version and version.lower() != graph[key].version.lower():
        raise UnknownPackageError(
            f"Package '{name}' resolves to {graph[key].version}, not {version}"
        )

    chains: list[list[str]] = []
    # Work-list of (node key, chain so far, keys on this path)
    stack: list[tuple[str, list[str], frozenset[str]]] = [(key, [], frozenset({key}))]

    while stack:
        current, chain, on_path = stack.pop()
        references = graph[current].references
        if not references:
            chains.append(chain)
            continue

        # reversed so the first reference is expanded first
        for ref in reversed(references):
            if ref.id in on_path:
                raise DependencyCycleError(
                    [_chain_entry(graph, key), *chain, _chain_entry(graph, ref.id)]
                )
            if ref.id not in graph:
                raise UnknownPackageError(f"Reference to unknown package '{ref.id}'")
            stack.append((ref.id, [*chain, _chain_entry(graph, ref.id)], on_path | {ref.id}))

    return chains


def format_chain(chain: list[str], package_id: str) -> str:
    """Render a chain as ``"pkg/1.0 <- parent/2.0 <- .root"``."""
    return " <- ".join([package_id, *chain])

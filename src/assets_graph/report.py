"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from typing import Any

from .chains import format_chain
from .models import PLACEHOLDER_VERSION, PackageGraph
from .parsers.semver import satisfies


def graph_to_dict(graph: PackageGraph, unresolved_label: str = PLACEHOLDER_VERSION) -> dict[str, Any]:
    """Flatten ``graph`` into a JSON-friendly dict for rendering collaborators.

    Nodes whose version never resolved are shown with ``unresolved_label``.
    ``unsatisfied`` lists referencing ids whose declared range the resolved
    version falls outside of.
    """
    nodes: list[dict[str, Any]] = []
    edges = 0
    for key, node in graph.items():
        entry = node.to_dict(unresolved_label)
        entry["id"] = key
        entry["unsatisfied"] = [
            ref.id
            for ref in node.references
            if node.resolved and not satisfies(node.version, ref.version_range)
        ]
        nodes.append(entry)
        edges += len(node.dependencies)

    return {
        "version": "1",
        "root": graph.root_id,
        "nodes": nodes,
        "totals": {
            "packages": len(graph) - 1,
            "unresolved": len(graph.unresolved()),
            "edges": edges,
        },
    }


def chains_to_dict(package: str, chains: list[list[str]]) -> dict[str, Any]:
    return {
        "package": package,
        "chains": [list(chain) for chain in chains],
        "paths": [format_chain(chain, package) for chain in chains],
    }

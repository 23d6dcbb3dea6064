"""Arena-style mapping from canonical package id to node."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from .package_node import PLACEHOLDER_VERSION, PackageNode
from .package_reference import PackageId


class PackageGraph(Mapping[str, PackageNode]):
    """Nodes keyed strictly by lower-cased package id.

    Nodes are created lazily on first reference via ``get_or_add`` and may be
    enriched in place afterwards. Lookups fold the requested key to lower case.
    """

    def __init__(self, root_id: str) -> None:
        self.root_id = root_id.lower()
        self._nodes: dict[str, PackageNode] = {}

    def get_or_add(self, package_id: PackageId) -> PackageNode:
        node = self._nodes.get(package_id.key)
        if node is None:
            node = PackageNode(name=package_id.name)
            self._nodes[package_id.key] = node
        return node

    def unresolved(self) -> list[str]:
        """Return ids of nodes only ever seen as dependency targets."""
        return [key for key, node in self._nodes.items() if not node.resolved]

    def __getitem__(self, key: str) -> PackageNode:
        return self._nodes[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._nodes

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def to_dict(self, unresolved_label: str = PLACEHOLDER_VERSION) -> dict[str, dict[str, object]]:
        return {key: node.to_dict(unresolved_label) for key, node in self._nodes.items()}

"""Graph node model."""

from __future__ import annotations

from dataclasses import dataclass, field

from .package_reference import PackageReference

PLACEHOLDER_VERSION = "0.0.0"


@dataclass
class PackageNode:
    """One node per distinct package id.

    ``version`` starts as a placeholder and is overridden in place once the
    package's resolved target entry is processed; ``resolved`` records that
    this has happened.
    """

    name: str
    version: str = PLACEHOLDER_VERSION
    dependencies: list[PackageReference] = field(default_factory=list)
    references: list[PackageReference] = field(default_factory=list)
    resolved: bool = False

    def resolve(self, version: str) -> None:
        self.version = version
        self.resolved = True

    def find_dependency(self, package_id: str) -> PackageReference | None:
        for ref in self.dependencies:
            if ref.id == package_id:
                return ref
        return None

    def to_dict(self, unresolved_label: str = PLACEHOLDER_VERSION) -> dict[str, object]:
        return {
            "name": self.name,
            "version": self.version if self.resolved else unresolved_label,
            "resolved": self.resolved,
            "dependencies": [ref.to_dict() for ref in self.dependencies],
            "references": [ref.to_dict() for ref in self.references],
        }

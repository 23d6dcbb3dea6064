"""Package identity and edge models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PackageId:
    """Case-insensitive package identity with the display casing retained."""

    key: str
    name: str

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("Package id must be non-empty")
        if self.key != self.key.lower():
            raise ValueError(f"Package id must be lower-case: {self.key}")

    @classmethod
    def from_name(cls, name: str) -> PackageId:
        return cls(key=name.lower(), name=name)


@dataclass(frozen=True)
class PackageReference:
    """Edge descriptor: the other end's id and the normalised declared range."""

    id: str
    version_range: str

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "versionRange": self.version_range,
        }

"""Error hierarchy shared by the loader, graph builder and chain traversal."""

from __future__ import annotations


class AssetsGraphError(RuntimeError):
    """Base error for failures while loading assets or querying the graph."""


class AssetsFormatError(AssetsGraphError):
    """Raised when the assets document is missing required structure."""


class AssetsFetchError(AssetsGraphError):
    """Raised when the assets document cannot be read or downloaded."""


class ConfigError(AssetsGraphError):
    """Raised when the settings file cannot be loaded or is invalid."""


class UnknownPackageError(AssetsGraphError, KeyError):
    """Raised when a queried package id (or id/version) is not in the graph."""

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0]) if self.args else ""


class DependencyCycleError(AssetsGraphError):
    """Raised when reference edges form a cycle during chain traversal."""

    def __init__(self, path: list[str]) -> None:
        self.path = list(path)
        super().__init__("Dependency cycle detected: " + " <- ".join(self.path))

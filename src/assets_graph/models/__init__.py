"""Data models for the package graph and the assets snapshot."""

from __future__ import annotations

from .package_graph import PackageGraph
from .package_node import PLACEHOLDER_VERSION, PackageNode
from .package_reference import PackageId, PackageReference
from .project_assets import FrameworkInfo, ProjectAssets, ProjectInfo, ResolvedPackage

__all__ = [
    "FrameworkInfo",
    "PLACEHOLDER_VERSION",
    "PackageGraph",
    "PackageId",
    "PackageNode",
    "PackageReference",
    "ProjectAssets",
    "ProjectInfo",
    "ResolvedPackage",
]

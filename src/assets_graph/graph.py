"""Build a bidirectional package graph from a resolved assets snapshot.

The builder walks the root project's declared dependencies and then every
resolved entry of the selected target framework, linking a forward
``dependencies`` edge and a reverse ``references`` edge for each declaration.
Version ranges on both edges are always the normalised form.
"""

from __future__ import annotations

import logging
import re

from .errors import AssetsFormatError
from .models import (
    PLACEHOLDER_VERSION,
    FrameworkInfo,
    PackageGraph,
    PackageId,
    PackageReference,
    ProjectAssets,
)
from .parsers.version_range import parse_version_range

logger = logging.getLogger(__name__)

ROOT_PACKAGE_ID = ".root"

_GROUP_CLAUSE = re.compile(r"(>=|<=|>|<|=)\s*([^\s<>=,]+)")


def get_root_package_id() -> str:
    return ROOT_PACKAGE_ID


def _normalize(raw: str, where: str) -> str:
    parsed = parse_version_range(raw)
    if not parsed.well_formed:
        logger.debug("Malformed version range %r on %s; using %r", raw, where, str(parsed))
    return str(parsed)


def _select_target(assets: ProjectAssets, target_framework: str | None) -> str:
    # TODO: parse target framework monikers so "net6.0" also matches ".NETCoreApp,Version=v6.0"
    names = list(assets.targets)
    if target_framework is None:
        return names[0]

    wanted = target_framework.lower()
    for name in names:
        if name.lower() == wanted:
            return name

    for framework in assets.project.frameworks.values():
        if not framework.matches(target_framework):
            continue
        for name in names:
            if framework.matches(name):
                return name

    known = ", ".join(names)
    raise AssetsFormatError(
        f"Target framework '{target_framework}' not found. Available targets: {known}"
    )


def _select_framework(assets: ProjectAssets, target: str) -> FrameworkInfo:
    frameworks = list(assets.project.frameworks.values())
    for framework in frameworks:
        if framework.matches(target):
            return framework
    logger.warning(
        "No framework block matches target %s; using declared dependencies of %s",
        target,
        frameworks[0].name,
    )
    return frameworks[0]


def _group_range(comparators: list[str]) -> str:
    """Join ``>= 1.0.0 < 2.0.0`` style tokens into ``>= 1.0.0, < 2.0.0``."""
    text = " ".join(comparators)
    clauses = [f"{op} {version}" for op, version in _GROUP_CLAUSE.findall(text)]
    return ", ".join(clauses) if clauses else text


def create_package_graph(
    root_id: str,
    root_name: str,
    assets: ProjectAssets,
    target_framework: str | None = None,
) -> PackageGraph:
    """Build a ``PackageGraph`` for one target framework of ``assets``.

    Params:
        root_id: sentinel id for the synthetic project node
        root_name: display name for the project node
        assets: the parsed snapshot; it is only read, never mutated
        target_framework: target key or alias; when None the first target is used

    Raises: AssetsFormatError when the requested target framework is absent or
    an entry is malformed.
    """
    target = _select_target(assets, target_framework)
    framework = _select_framework(assets, target)
    logger.debug("Building package graph for target %s (framework %s)", target, framework.name)

    graph = PackageGraph(root_id)
    root = graph.get_or_add(PackageId(key=graph.root_id, name=root_name))
    # The project itself is never a referenced-but-unresolved package, so it
    # counts as resolved even when the project block carries no version.
    root.resolve(assets.project.version or PLACEHOLDER_VERSION)

    def add_root_dependency(name: str, version_range: str) -> PackageReference:
        dep_id = PackageId.from_name(name)
        ref = PackageReference(dep_id.key, version_range)
        root.dependencies.append(ref)
        graph.get_or_add(dep_id)
        return ref

    for name, raw in framework.dependencies.items():
        add_root_dependency(name, _normalize(raw, f"{root_name} -> {name}"))

    # Project references appear in the groups too; they are promoted below with
    # an exact range instead.
    projects = {package.name.lower() for package in assets.targets[target] if package.is_project}

    # Dependency groups use "Name >= 1.2.3" comparators instead of interval notation
    for entry in assets.dependency_groups.get(target, ()):
        parts = entry.split()
        if not parts or parts[0].lower() in projects:
            continue
        if root.find_dependency(parts[0].lower()) is not None:
            continue
        add_root_dependency(parts[0], _group_range(parts[1:]))

    for package in assets.targets[target]:
        package_id = PackageId.from_name(package.name)
        node = graph.get_or_add(package_id)
        node.resolve(package.version)

        root_ref = root.find_dependency(package_id.key)
        if package.is_project and root_ref is None:
            root_ref = add_root_dependency(
                package.name, _normalize(f"[{package.version}]", package.name)
            )

        if root_ref is not None:
            node.references.append(PackageReference(graph.root_id, root_ref.version_range))

        for dep_name, raw in package.dependencies.items():
            dep_id = PackageId.from_name(dep_name)
            version_range = _normalize(raw, f"{package.name} -> {dep_name}")
            graph.get_or_add(dep_id).references.append(
                PackageReference(package_id.key, version_range)
            )
            node.dependencies.append(PackageReference(dep_id.key, version_range))

    unresolved = graph.unresolved()
    logger.debug(
        "Package graph for %s has %d nodes (%d unresolved)", target, len(graph), len(unresolved)
    )
    return graph

"""Typed view over a parsed ``project.assets.json`` document."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..errors import AssetsFormatError

_VALID_TYPES = {"package", "project"}


def _require_mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise AssetsFormatError(f"Expected an object at '{where}'")
    return value


def _require_names(value: Mapping[str, Any], where: str) -> Mapping[str, Any]:
    if any(not str(name).strip() for name in value):
        raise AssetsFormatError(f"Empty dependency name at '{where}'")
    return value


@dataclass(frozen=True)
class ResolvedPackage:
    """A resolved ``"<name>/<version>"`` entry from a target listing."""

    name: str
    version: str
    type: str = "package"
    dependencies: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            raise AssetsFormatError("Resolved package name must be non-empty")
        if self.type not in _VALID_TYPES:
            raise AssetsFormatError(f"Invalid package type for {self.name}: {self.type}")

    @property
    def is_project(self) -> bool:
        return self.type == "project"

    @classmethod
    def from_entry(cls, key: str, data: Any) -> ResolvedPackage:
        name, sep, version = key.partition("/")
        if not sep or not version:
            raise AssetsFormatError(f"Resolved entry key must be '<name>/<version>': {key!r}")

        entry = _require_mapping(data, key)
        where = f"{key}.dependencies"
        deps = _require_names(_require_mapping(entry.get("dependencies") or {}, where), where)
        return cls(
            name=name,
            version=version,
            type=str(entry.get("type", "package")),
            dependencies={str(dep): str(rng) for dep, rng in deps.items()},
        )


@dataclass(frozen=True)
class FrameworkInfo:
    """Direct dependency declarations for one target framework."""

    name: str
    target_alias: str
    dependencies: dict[str, str] = field(default_factory=dict)

    def matches(self, framework: str) -> bool:
        wanted = framework.lower()
        return wanted in (self.name.lower(), self.target_alias.lower())

    @classmethod
    def from_dict(cls, name: str, data: Any) -> FrameworkInfo:
        block = _require_mapping(data, f"project.frameworks.{name}")
        where = f"project.frameworks.{name}.dependencies"
        deps = _require_names(_require_mapping(block.get("dependencies") or {}, where), where)

        declared: dict[str, str] = {}
        for dep_name, ref in deps.items():
            ref = _require_mapping(ref, f"project.frameworks.{name}.dependencies.{dep_name}")
            declared[str(dep_name)] = str(ref.get("version", ""))

        return cls(
            name=name,
            target_alias=str(block.get("targetAlias") or name),
            dependencies=declared,
        )


@dataclass(frozen=True)
class ProjectInfo:
    """The consuming project's own block."""

    version: str | None
    project_name: str | None
    frameworks: dict[str, FrameworkInfo]

    @classmethod
    def from_dict(cls, data: Any) -> ProjectInfo:
        block = _require_mapping(data, "project")
        frameworks_data = block.get("frameworks")
        if frameworks_data is None:
            raise AssetsFormatError("Assets document is missing 'project.frameworks'")
        frameworks_data = _require_mapping(frameworks_data, "project.frameworks")
        if not frameworks_data:
            raise AssetsFormatError("'project.frameworks' must contain at least one framework")

        restore = _require_mapping(block.get("restore") or {}, "project.restore")
        version = block.get("version")
        project_name = restore.get("projectName")

        return cls(
            version=str(version) if version else None,
            project_name=str(project_name) if project_name else None,
            frameworks={
                str(name): FrameworkInfo.from_dict(str(name), fw)
                for name, fw in frameworks_data.items()
            },
        )


@dataclass(frozen=True)
class ProjectAssets:
    """Immutable, typed representation of a resolved dependency snapshot."""

    targets: dict[str, tuple[ResolvedPackage, ...]]
    project: ProjectInfo
    dependency_groups: dict[str, tuple[str, ...]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> ProjectAssets:
        document = _require_mapping(data, "<root>")

        targets_data = document.get("targets")
        if targets_data is None:
            raise AssetsFormatError("Assets document is missing 'targets'")
        targets_data = _require_mapping(targets_data, "targets")
        if not targets_data:
            raise AssetsFormatError("'targets' must contain at least one target framework")

        if document.get("project") is None:
            raise AssetsFormatError("Assets document is missing 'project'")

        targets: dict[str, tuple[ResolvedPackage, ...]] = {}
        for framework, entries in targets_data.items():
            entries = _require_mapping(entries, f"targets.{framework}")
            targets[str(framework)] = tuple(
                ResolvedPackage.from_entry(str(key), entry) for key, entry in entries.items()
            )

        groups_data = _require_mapping(
            document.get("projectFileDependencyGroups") or {}, "projectFileDependencyGroups"
        )
        groups: dict[str, tuple[str, ...]] = {}
        for framework, entries in groups_data.items():
            if not isinstance(entries, list):
                raise AssetsFormatError(
                    f"Expected an array at 'projectFileDependencyGroups.{framework}'"
                )
            groups[str(framework)] = tuple(str(entry) for entry in entries)

        return cls(
            targets=targets,
            project=ProjectInfo.from_dict(document["project"]),
            dependency_groups=groups,
        )

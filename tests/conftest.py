"""Shared fixtures: assets documents shaped like NuGet restore output."""

from __future__ import annotations

import copy
import json

import pytest


def make_document(
    declared: dict[str, str],
    entries: dict[str, dict],
    framework: str = "net8.0",
    groups: list[str] | None = None,
    project_version: str | None = "1.0.0",
    project_name: str | None = "App",
) -> dict:
    project: dict = {
        "restore": {"projectName": project_name} if project_name else {},
        "frameworks": {
            framework: {
                "targetAlias": framework,
                "dependencies": {
                    name: {"target": "Package", "version": rng} for name, rng in declared.items()
                },
            }
        },
    }
    if project_version:
        project["version"] = project_version

    return {
        "version": 3,
        "targets": {framework: copy.deepcopy(entries)},
        "projectFileDependencyGroups": {framework: list(groups or [])},
        "project": project,
    }


@pytest.fixture
def simple_document() -> dict:
    """Root -> A [1.0,2.0); A/1.5 -> B [1.0]; B/1.0."""
    return make_document(
        declared={"A": "[1.0, 2.0)"},
        entries={
            "A/1.5": {"type": "package", "dependencies": {"B": "[1.0]"}},
            "B/1.0": {"type": "package"},
        },
        groups=["A >= 1.0"],
    )


@pytest.fixture
def assets_file(tmp_path, simple_document):
    path = tmp_path / "obj" / "project.assets.json"
    path.parent.mkdir()
    path.write_text(json.dumps(simple_document, indent=2), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in (
        "ASSETS_GRAPH_CONFIG",
        "ASSETS_GRAPH_UNRESOLVED_LABEL",
        "ASSETS_GRAPH_TARGET_FRAMEWORK",
    ):
        monkeypatch.delenv(var, raising=False)

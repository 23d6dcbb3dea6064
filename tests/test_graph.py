"""Tests for building the package graph from an assets snapshot."""

import logging

import pytest

from assets_graph.errors import AssetsFormatError
from assets_graph.graph import create_package_graph, get_root_package_id
from assets_graph.models import PackageReference, ProjectAssets

from conftest import make_document

ROOT = get_root_package_id()


def build(document, target_framework=None):
    assets = ProjectAssets.from_dict(document)
    return create_package_graph(ROOT, "App", assets, target_framework)


class TestEndToEnd:
    """Root -> A; A -> B, both resolved."""

    def test_root_dependencies(self, simple_document):
        graph = build(simple_document)
        assert graph[ROOT].dependencies == [PackageReference("a", ">= 1.0, < 2.0")]
        assert graph[ROOT].references == []
        assert graph[ROOT].name == "App"
        assert graph[ROOT].version == "1.0.0"

    def test_package_nodes(self, simple_document):
        graph = build(simple_document)

        a = graph["a"]
        assert a.version == "1.5"
        assert a.references == [PackageReference(ROOT, ">= 1.0, < 2.0")]
        assert a.dependencies == [PackageReference("b", "= 1.0")]

        b = graph["b"]
        assert b.version == "1.0"
        assert b.references == [PackageReference("a", "= 1.0")]
        assert b.dependencies == []

    def test_display_name_keeps_case(self, simple_document):
        graph = build(simple_document)
        assert graph["a"].name == "A"
        assert "A" in graph
        assert set(graph) == {ROOT, "a", "b"}


class TestVersions:
    def test_canonical_version_overrides_placeholder(self):
        # C is referenced by A before its own entry appears
        document = make_document(
            declared={"A": "[1.0,)"},
            entries={
                "A/1.0": {"type": "package", "dependencies": {"C": "[2.0, )"}},
                "C/2.3.1": {"type": "package"},
            },
        )
        graph = build(document)
        assert graph["c"].version == "2.3.1"
        assert graph["c"].resolved

    def test_unresolved_dependency_keeps_placeholder(self):
        document = make_document(
            declared={"A": "[1.0,)"},
            entries={"A/1.0": {"type": "package", "dependencies": {"Ghost": "[0.1,)"}}},
        )
        graph = build(document)
        assert graph["ghost"].version == "0.0.0"
        assert not graph["ghost"].resolved
        assert graph.unresolved() == ["ghost"]

    def test_every_resolved_entry_has_its_key_version(self):
        document = make_document(
            declared={"A": "[1.0,)", "B": "[1.0,)"},
            entries={
                "A/1.0": {"type": "package", "dependencies": {"C": "[1.0,)", "B": "[1.0,)"}},
                "B/1.1": {"type": "package", "dependencies": {"C": "[1.2,)"}},
                "C/1.4": {"type": "package"},
            },
        )
        graph = build(document)
        assert (graph["a"].version, graph["b"].version, graph["c"].version) == ("1.0", "1.1", "1.4")

    def test_missing_project_version_gives_placeholder_root(self, simple_document):
        del simple_document["project"]["version"]
        graph = build(simple_document)
        assert graph[ROOT].version == "0.0.0"
        # the project itself is never reported as an unresolved package
        assert graph[ROOT].resolved
        assert ROOT not in graph.unresolved()


class TestEdges:
    def test_every_dependency_has_matching_reference(self):
        document = make_document(
            declared={"A": "[1.0,)"},
            entries={
                "A/1.0": {"type": "package", "dependencies": {"B": "[1.0,2.0)", "C": "3.0"}},
                "B/1.5": {"type": "package", "dependencies": {"C": "(2.0,]"}},
                "C/3.0": {"type": "package"},
            },
        )
        graph = build(document)
        for source, node in graph.items():
            for dep in node.dependencies:
                assert PackageReference(source, dep.version_range) in graph[dep.id].references

    def test_reference_order_follows_snapshot_order(self):
        document = make_document(
            declared={},
            entries={
                "Z/1.0": {"type": "package", "dependencies": {"Shared": "[1.0,)"}},
                "A/1.0": {"type": "package", "dependencies": {"Shared": "[1.1,)"}},
                "Shared/1.2": {"type": "package"},
            },
        )
        graph = build(document)
        assert [ref.id for ref in graph["shared"].references] == ["z", "a"]

    def test_edges_use_normalized_ranges(self):
        document = make_document(
            declared={"A": "[1.0,)"},
            entries={
                "A/1.0": {"type": "package", "dependencies": {"B": "[ 1.0 , 2.0 )"}},
                "B/1.0": {"type": "package"},
            },
        )
        graph = build(document)
        assert graph["a"].dependencies[0].version_range == ">= 1.0, < 2.0"
        assert graph["b"].references[0].version_range == ">= 1.0, < 2.0"

    def test_root_declared_but_unlisted_package_still_has_node(self):
        document = make_document(declared={"Missing": "[1.0,)"}, entries={})
        graph = build(document)
        assert "missing" in graph
        assert not graph["missing"].resolved

    def test_build_is_deterministic(self, simple_document):
        first = build(simple_document).to_dict()
        second = build(simple_document).to_dict()
        assert first == second


class TestProjectPromotion:
    def test_project_entry_becomes_root_dependency(self):
        document = make_document(
            declared={},
            entries={"Shared.Lib/2.1.0": {"type": "project"}},
        )
        graph = build(document)
        assert graph[ROOT].dependencies == [PackageReference("shared.lib", "= 2.1.0")]
        assert graph["shared.lib"].references == [PackageReference(ROOT, "= 2.1.0")]

    def test_declared_project_keeps_declared_range(self):
        document = make_document(
            declared={"Shared.Lib": "[2.0,)"},
            entries={"Shared.Lib/2.1.0": {"type": "project"}},
        )
        graph = build(document)
        assert graph[ROOT].dependencies == [PackageReference("shared.lib", ">= 2.0")]
        assert graph["shared.lib"].references == [PackageReference(ROOT, ">= 2.0")]

    def test_project_listed_in_dependency_groups_is_promoted_exactly(self):
        # restore lists project references in the groups, never in the framework block
        document = make_document(
            declared={},
            entries={"ProjB/1.0.0": {"type": "project"}},
            groups=["ProjB >= 1.0.0"],
        )
        graph = build(document)
        assert graph[ROOT].dependencies == [PackageReference("projb", "= 1.0.0")]
        assert graph["projb"].references == [PackageReference(ROOT, "= 1.0.0")]

    def test_package_type_is_not_promoted(self):
        document = make_document(declared={}, entries={"Lib/1.0": {"type": "package"}})
        graph = build(document)
        assert graph[ROOT].dependencies == []
        assert graph["lib"].references == []


class TestDependencyGroups:
    def test_group_entries_add_missing_root_dependencies(self):
        document = make_document(
            declared={"A": "[1.0,)"},
            entries={"A/1.0": {"type": "package"}, "Tool/3.2": {"type": "package"}},
            groups=["A >= 1.0", "Tool >= 3.0"],
        )
        graph = build(document)
        assert graph[ROOT].dependencies == [
            PackageReference("a", ">= 1.0"),
            PackageReference("tool", ">= 3.0"),
        ]
        assert graph["tool"].references == [PackageReference(ROOT, ">= 3.0")]

    def test_multi_clause_group_range_is_comma_joined(self):
        document = make_document(
            declared={},
            entries={"Foo/1.5.0": {"type": "package"}},
            groups=["Foo >= 1.0.0 < 2.0.0"],
        )
        graph = build(document)
        assert graph[ROOT].dependencies == [PackageReference("foo", ">= 1.0.0, < 2.0.0")]
        assert graph["foo"].references == [PackageReference(ROOT, ">= 1.0.0, < 2.0.0")]

    def test_group_entry_without_version(self):
        document = make_document(declared={}, entries={}, groups=["Bare"])
        graph = build(document)
        assert graph[ROOT].dependencies == [PackageReference("bare", "")]


class TestTargetSelection:
    def two_targets(self):
        document = make_document(
            declared={"A": "[1.0,)"},
            entries={"A/1.0": {"type": "package"}},
            framework="net6.0",
        )
        document["targets"]["net8.0"] = {"A/2.0": {"type": "package"}}
        document["project"]["frameworks"]["net8.0"] = {
            "targetAlias": "net8.0",
            "dependencies": {"A": {"version": "[2.0,)"}},
        }
        return document

    def test_first_target_by_default(self):
        graph = build(self.two_targets())
        assert graph["a"].version == "1.0"

    def test_matching_target(self):
        graph = build(self.two_targets(), target_framework="NET8.0")
        assert graph["a"].version == "2.0"
        assert graph[ROOT].dependencies == [PackageReference("a", ">= 2.0")]

    def test_unknown_target_fails_fast(self):
        with pytest.raises(AssetsFormatError, match="net472"):
            build(self.two_targets(), target_framework="net472")


class TestLogging:
    def test_malformed_range_is_logged(self, caplog):
        document = make_document(
            declared={"A": "1.0,2.0"},
            entries={"A/1.0": {"type": "package"}},
        )
        with caplog.at_level(logging.DEBUG, logger="assets_graph.graph"):
            build(document)
        assert "Malformed version range" in caplog.text

    def test_unmatched_framework_block_is_logged(self, caplog):
        document = make_document(
            declared={"A": "[1.0,)"},
            entries={"A/1.0": {"type": "package"}},
            framework="netcoreapp3.1",
        )
        document["targets"] = {".NETCoreApp,Version=v3.1": document["targets"]["netcoreapp3.1"]}
        with caplog.at_level(logging.WARNING, logger="assets_graph.graph"):
            graph = build(document)
        assert "No framework block matches target .NETCoreApp,Version=v3.1" in caplog.text
        assert graph[ROOT].dependencies == [PackageReference("a", ">= 1.0")]

"""Human-readable Markdown summary of a graph report."""

from __future__ import annotations

from typing import Any


def render_summary(report: dict[str, Any]) -> str:
    """Return a Markdown string with totals, a package table and dependency paths."""
    graph = report.get("graph", {})
    totals = graph.get("totals", {})
    root = graph.get("root", "")
    nodes = graph.get("nodes", [])

    lines = []
    lines.append("# Package Graph Summary")
    lines.append("")
    lines.append(
        f"Packages: {totals.get('packages', 0)} | Unresolved: {totals.get('unresolved', 0)}"
        f" | Edges: {totals.get('edges', 0)}"
    )
    lines.append("")
    lines.append("| Package | Version | Depends on | Referenced by |")
    lines.append("| --- | --- | --- | --- |")

    has_rows = False
    for node in nodes:
        if node.get("id") == root:
            continue
        deps = ", ".join(f"{d['id']} ({d['versionRange']})" for d in node.get("dependencies", []))
        refs = ", ".join(r["id"] for r in node.get("references", []))
        lines.append(f"| {node.get('name', '')} | {node.get('version', '')} | {deps} | {refs} |")
        has_rows = True

    if not has_rows:
        lines.append("| (no packages) | n/a | n/a | n/a |")

    why = report.get("why")
    if why:
        lines.append("")
        lines.append(f"## Dependency paths for {why.get('package', '')}")
        lines.append("")
        for path in why.get("paths", []):
            lines.append(f"- `{path}`")

    return "\n".join(lines) + "\n"

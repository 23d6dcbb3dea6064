"""nuget-assets-graph core package.

Builds a bidirectional dependency graph from a resolved NuGet
``project.assets.json`` snapshot and answers "why is this version pulled in?"
queries. The CLI wrapper in ``scripts/`` and library callers share ``core``.
"""

from .chains import compute_dependency_chains, format_chain
from .graph import create_package_graph, get_root_package_id
from .parsers.version_range import normalize_version_range, parse_version_range

__all__ = [
    "compute_dependency_chains",
    "create_package_graph",
    "format_chain",
    "get_root_package_id",
    "normalize_version_range",
    "parse_version_range",
]

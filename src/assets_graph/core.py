"""Core graph-building entrypoints.

This module wires the assets loader, the graph builder and chain traversal
together so the CLI wrapper and other callers share one code path. It MUST NOT
contain rendering concerns beyond the plain report dict.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import requests
from requests import Response
from tenacity import retry, stop_after_attempt, wait_fixed

from .chains import compute_dependency_chains
from .config import Settings, load_settings
from .errors import AssetsFetchError
from .graph import create_package_graph
from .models import PackageGraph, ProjectAssets
from .parsers.project_assets import parse as parse_assets_file
from .parsers.project_assets import parse_text as parse_assets_text
from .report import chains_to_dict, graph_to_dict

logger = logging.getLogger(__name__)


@retry(reraise=True, stop=stop_after_attempt(3), wait=wait_fixed(2))
def _http_get(url: str) -> Response:
    return requests.get(url, headers={"Accept": "application/json"}, timeout=30)


def _fetch_text(url: str) -> str:
    try:
        response = _http_get(url)
    except requests.RequestException as exc:
        raise AssetsFetchError(f"Failed to fetch assets from {url}: {exc}") from exc

    if response.status_code != 200:
        raise AssetsFetchError(
            f"Unexpected status code {response.status_code} fetching assets from {url}"
        )
    return response.text


def load_assets(source: str | Path, validate: bool = True) -> ProjectAssets:
    """Load a snapshot from a filesystem path or an http(s) URL."""
    text_source = str(source)
    if text_source.startswith("http://") or text_source.startswith("https://"):
        logger.debug("Fetching assets from %s", text_source)
        return parse_assets_text(_fetch_text(text_source), validate=validate)

    logger.debug("Reading assets from %s", text_source)
    return parse_assets_file(Path(source), validate=validate)


def build_graph(
    source: str | Path | ProjectAssets,
    settings: Settings | None = None,
    target_framework: str | None = None,
) -> PackageGraph:
    """Build the package graph for ``source``.

    ``target_framework`` takes precedence over ``settings.target_framework``.
    """
    settings = settings or load_settings()
    if isinstance(source, ProjectAssets):
        assets = source
    else:
        assets = load_assets(source, validate=settings.validate_schema)

    root_name = assets.project.project_name or settings.root_id
    return create_package_graph(
        settings.root_id,
        root_name,
        assets,
        target_framework or settings.target_framework,
    )


def build_report(
    source: str | Path | ProjectAssets,
    package: str | None = None,
    settings: Settings | None = None,
    target_framework: str | None = None,
) -> dict[str, Any]:
    """Build the graph and return a report dict.

    Params:
        source: path, URL or already-parsed snapshot
        package: optional ``name/version`` whose dependency chains to include
        settings: optional settings; loaded from the environment when None
        target_framework: optional target key or alias

    Returns: {"graph": ..., "why": ...} where "why" is present only when a
    package was requested.
    """
    settings = settings or load_settings()
    graph = build_graph(source, settings=settings, target_framework=target_framework)

    report: dict[str, Any] = {"graph": graph_to_dict(graph, settings.unresolved_label)}
    if package:
        chains = compute_dependency_chains(graph, package)
        report["why"] = chains_to_dict(package, chains)
    return report

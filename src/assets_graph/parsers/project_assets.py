"""Parse NuGet project.assets.json into the typed snapshot model."""

from __future__ import annotations

import json
from pathlib import Path

from ..errors import AssetsFetchError, AssetsFormatError
from ..models import ProjectAssets
from ..validators.project_assets import validate_assets


def parse_text(text: str, validate: bool = True) -> ProjectAssets:
    """Return the typed snapshot for an in-memory assets document.

    Raises AssetsFormatError for malformed JSON or missing structure.
    """
    try:
        data = json.loads(text.lstrip("\ufeff"))
    except json.JSONDecodeError as exc:
        raise AssetsFormatError(f"Invalid JSON in assets document: {exc}") from exc

    if validate:
        validate_assets(data)
    return ProjectAssets.from_dict(data)


def parse(path: Path, validate: bool = True) -> ProjectAssets:
    """Read ``path`` (restore output, usually obj/project.assets.json)."""
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise AssetsFetchError(f"Failed to read assets file {path}: {exc}") from exc
    return parse_text(text, validate=validate)

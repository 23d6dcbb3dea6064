"""Repository and assets file discovery utilities."""

from __future__ import annotations

from pathlib import Path

ASSETS_FILE_NAME = "project.assets.json"
EXCLUDES = {"node_modules", ".git", ".venv", "bin"}


def discover_assets(root: Path) -> list[Path]:
    """Find restore outputs (project.assets.json) recursively under root.

    Restore writes them to each project's ``obj/`` directory; build output and
    vendor directories are skipped. Results are sorted.
    """
    root = root.resolve()
    found: list[Path] = []

    def should_skip(p: Path) -> bool:
        parts = set(p.parts)
        return any(ex in parts for ex in EXCLUDES)

    for path in root.rglob(ASSETS_FILE_NAME):
        if not path.is_file():
            continue
        if should_skip(path.relative_to(root)):
            continue
        found.append(path)

    return sorted(found)

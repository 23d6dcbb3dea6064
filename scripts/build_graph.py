#!/usr/bin/env python3
"""Local CLI entrypoint to build a package graph from a project.assets.json.

Usage:
  python scripts/build_graph.py --assets obj/project.assets.json [--why Name/1.2.3]
      [--framework net8.0] [--format json|markdown] [--config settings.yaml] [--verbose]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from assets_graph.config import load_settings
from assets_graph.core import build_report
from assets_graph.errors import AssetsGraphError, DependencyCycleError
from assets_graph.summary import render_summary


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--assets", required=True, help="Path or URL of project.assets.json")
    parser.add_argument("--framework", default=None)
    parser.add_argument("--why", dest="package", default=None, help="Package as Name/version")
    parser.add_argument("--format", choices=("json", "markdown"), default="json")
    parser.add_argument("--config", default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.config)
        report = build_report(
            args.assets,
            package=args.package,
            settings=settings,
            target_framework=args.framework,
        )
    except DependencyCycleError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 3
    except AssetsGraphError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    if args.format == "markdown":
        print(render_summary(report), end="")
    else:
        print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

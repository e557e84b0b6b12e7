"""Build a documentation site from a YAML symbol file.

Loads the symbols, builds every page, resolves cross-references through the
local / memory / disk / remote chain and writes one Markdown file per page.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import shutil
import sys
from pathlib import Path
from typing import Any

import httpx

from docbuilder.documentation import Documentation, build_documentation
from docbuilder.errors import DocBuilderError
from docbuilder.load_config import load_config
from docbuilder.markdown_renderer import render_page
from docbuilder.reference_resolver import create_resolver, resolve_all_references
from docbuilder.resolution_report import ResolutionReport
from docbuilder.symbol_source import load_symbol_file

logger = logging.getLogger(__name__)


async def resolve_documentation(
    documentation: Documentation,
    config: dict[str, Any],
    *,
    cache_dir: Path | None,
    offline: bool,
    report: ResolutionReport,
) -> Documentation:
    """Run the resolution pass, with the remote tier unless ``offline``."""
    remote = config["remote"]
    if offline or not remote.get("enabled", True):
        resolver = create_resolver(documentation, cache_dir=cache_dir, report=report)
        return await resolve_all_references(documentation, resolver)

    timeout = httpx.Timeout(remote["timeout"], connect=remote["connect_timeout"])
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
        resolver = create_resolver(
            documentation,
            client=client,
            cache_dir=cache_dir,
            service_url=config["xref_service"],
            report=report,
        )
        return await resolve_all_references(documentation, resolver)


def write_pages(documentation: Documentation, out_root: Path, title_suffix: str) -> int:
    """Write every page under ``out_root``; returns the number written."""
    written = 0
    for page in documentation.pages:
        out_file = out_root / page.url
        out_file.parent.mkdir(parents=True, exist_ok=True)
        out_file.write_text(render_page(page, title_suffix), encoding="utf-8")
        written += 1
    return written


def run_build(args: argparse.Namespace) -> int:
    """Execute the full build."""
    if not args.symbol_file.is_file():
        msg = f"Symbol file not found: {args.symbol_file}"
        raise SystemExit(msg)

    config = load_config(args.config)
    symbol_sets = load_symbol_file(args.symbol_file)
    documentation = build_documentation(symbol_sets, page_extension=config["page_extension"])
    print(f"Built {len(documentation.pages)} pages ({len(documentation.xrefs)} xrefs)")

    cache_dir = None if args.no_cache else Path(args.cache_dir or config["cache_dir"])
    report = ResolutionReport()
    documentation = asyncio.run(
        resolve_documentation(
            documentation, config, cache_dir=cache_dir, offline=args.offline, report=report
        )
    )

    out_root = args.out_dir.resolve()
    if args.clean and out_root.exists():
        shutil.rmtree(out_root)
    out_root.mkdir(parents=True, exist_ok=True)
    written = write_pages(documentation, out_root, config["site"]["title_suffix"])

    summary = report.summary()
    hits = ", ".join(f"{tier}={count}" for tier, count in summary["hits"].items())
    print(f"Resolved links: {hits}")
    if report.unresolved or report.failed:
        print(f"Unresolved: {len(report.unresolved)}, failed: {len(report.failed)}")
    if args.report:
        report.generate_report(args.report)
        print(f"Resolution report written to {args.report}")

    print(f"Generated {written} pages into: {out_root}")
    return 0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    ap = argparse.ArgumentParser(description="Build linked API documentation from symbols.")
    ap.add_argument("symbol_file", type=Path, help="YAML symbol file describing the API")
    ap.add_argument("out_dir", type=Path, help="Output directory for the generated pages")
    ap.add_argument("--config", help="Path to configuration file")
    ap.add_argument("--cache-dir", help="Persistent xref cache directory (overrides config)")
    ap.add_argument("--no-cache", action="store_true", help="Do not use the persistent cache")
    ap.add_argument("--offline", action="store_true", help="Skip the remote xref service")
    ap.add_argument("--clean", action="store_true", help="Delete the output directory first")
    ap.add_argument("--report", type=Path, help="Write a JSON resolution report to this path")
    ap.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return ap.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the documentation build."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return run_build(args)
    except DocBuilderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

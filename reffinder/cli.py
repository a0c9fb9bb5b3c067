#!/usr/bin/env python3
"""
Reference Finder CLI

Finds every asset in a project that references a target asset, either through
the dependency graph or by matching its serialized (fileID, guid) pair.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from reffinder.core.config.settings import settings
from reffinder.core.database.base import Base
from reffinder.core.database.connection import engine
from reffinder.core.enums import SearchMode, SortDirection, SortKey
from reffinder.core.errors import ReferenceFinderError
from reffinder.features.asset_index.domain.models import AssetHandle
from reffinder.features.reference_detection.domain.models import ReferenceRecord
from reffinder.features.reference_finder.service.api import ReferenceFinder
from reffinder.features.result_aggregation.domain.models import ResultFilter
from reffinder.features.result_aggregation.service.api import describe_results, filter_records, sort_records
from reffinder.features.scan_scheduler.domain.models import ProgressUpdate
from reffinder.features.scan_scheduler.service.scheduler import ScanScheduler


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="reffinder",
        description="Find every asset that references a target asset.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  reffinder Assets/Materials/Floor.mat                  # Dependency search from the current project
  reffinder -p ./Game --guid 57d31b7d2a71b42858f8d031d9c6219b
  reffinder Assets/Prefabs/Door.prefab -m pattern --file-id 100100000
  reffinder Assets/Materials/Floor.mat --sort ref_count --desc --no-scenes
  reffinder Assets/Materials/Floor.mat -f json           # JSON output
        """,
    )

    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="Target asset path, relative to the project root (e.g. Assets/A.mat)",
    )

    parser.add_argument(
        "-p", "--project",
        default=".",
        help="Project root directory, the parent of the assets folder (default: current directory)",
    )

    parser.add_argument(
        "--guid",
        default=None,
        help="Target asset guid (instead of a path)",
    )

    parser.add_argument(
        "-m", "--mode",
        choices=["dependency", "pattern"],
        default="dependency",
        help="Search mode (default: dependency). Built-in assets always use pattern",
    )

    parser.add_argument(
        "--file-id",
        type=int,
        default=None,
        help="Local fileID of the target sub-object (pattern mode)",
    )

    # Scanning options
    parser.add_argument(
        "--include-ext",
        nargs="+",
        default=None,
        help="Asset extensions to scan (default: the built-in list of text-serialized types)",
    )

    parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help=f"Candidates per tick (default: {settings.SCAN_BATCH_SIZE})",
    )

    parser.add_argument(
        "--skip-index",
        action="store_true",
        help="Reuse the stored guid index instead of rebuilding it from .meta files",
    )

    # Output options
    parser.add_argument(
        "-f", "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    parser.add_argument(
        "--sort",
        choices=[key.value for key in SortKey],
        default=SortKey.PATH.value,
        help="Sort column (default: path)",
    )

    parser.add_argument(
        "--desc",
        action="store_true",
        help="Sort in descending order",
    )

    parser.add_argument("--no-scenes", action="store_true", help="Hide scenes (.unity)")
    parser.add_argument("--no-prefabs", action="store_true", help="Hide prefabs (.prefab)")
    parser.add_argument("--no-materials", action="store_true", help="Hide materials (.mat)")
    parser.add_argument("--no-others", action="store_true", help="Hide every other asset type")

    parser.add_argument(
        "--search",
        default="",
        help="Only show results whose path contains this text (case-insensitive)",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Do not print progress",
    )

    return parser.parse_args(args)


def render_progress(update: ProgressUpdate) -> bool:
    sys.stderr.write(f"\r{update.title} {update.fraction:6.1%} {update.current_path[-60:]:<60}")
    sys.stderr.flush()
    return False


def format_records(records: List[ReferenceRecord], output_format: str) -> str:
    if output_format == "json":
        return json.dumps(
            [{"path": r.path, "guid": r.guid, "ref_count": r.ref_count} for r in records],
            indent=2
        )
    lines = []
    for record in records:
        count = str(record.ref_count) if record.is_counted else "-"
        lines.append(f"{count:>5}  {record.path}")
    return "\n".join(lines)


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(levelname)s %(name)s: %(message)s"
    )

    if not parsed.target and not parsed.guid:
        print("Error: a target path or --guid is required", file=sys.stderr)
        return 1

    project = Path(parsed.project).resolve()
    if not project.is_dir():
        print(f"Error: '{parsed.project}' is not a directory", file=sys.stderr)
        return 1

    include_ext = None
    if parsed.include_ext:
        include_ext = [ext if ext.startswith(".") else "." + ext for ext in parsed.include_ext]

    Base.metadata.create_all(bind=engine)

    finder = ReferenceFinder(
        project,
        scheduler=ScanScheduler(batch_size=parsed.batch_size),
        extensions=include_ext,
    )

    outcome = {}

    def on_complete(records: Optional[List[ReferenceRecord]]):
        outcome["records"] = records

    try:
        if not parsed.skip_index:
            finder.index.rebuild()

        if parsed.guid:
            target = finder.index.guid_to_path(parsed.guid) or ""
        else:
            target = parsed.target

        handle = AssetHandle(path=target, file_id=parsed.file_id)
        mode = SearchMode.TEXT_PATTERN if parsed.mode == "pattern" else SearchMode.DEPENDENCY_API
        finder.find_references(
            handle,
            mode,
            on_complete=on_complete,
            on_progress=None if parsed.quiet else render_progress
        )

        # Host loop: one batch per tick; Ctrl+C cancels at the next batch boundary
        while finder.is_searching:
            try:
                finder.tick()
            except KeyboardInterrupt:
                finder.cancel()
    except ReferenceFinderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not parsed.quiet:
        sys.stderr.write("\n")

    records = outcome.get("records")
    if records is None:
        print("No results (target not found or search cancelled)", file=sys.stderr)
        return 2

    result_filter = ResultFilter(
        include_scenes=not parsed.no_scenes,
        include_prefabs=not parsed.no_prefabs,
        include_materials=not parsed.no_materials,
        include_others=not parsed.no_others,
        search=parsed.search
    )
    direction = SortDirection.DESCENDING if parsed.desc else SortDirection.ASCENDING
    shown = filter_records(sort_records(records, SortKey(parsed.sort), direction), result_filter)

    output = format_records(shown, parsed.format)
    if output:
        print(output)
    print(describe_results(len(records), len(shown), result_filter), file=sys.stderr)

    summary = finder.scheduler.last_summary
    if summary is not None and summary.errors:
        for error in summary.errors:
            print(f"Warning: {error}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())

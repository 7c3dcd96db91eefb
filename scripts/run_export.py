#!/usr/bin/env python3
"""
Flatten workflow definitions into a CSV and/or XLSX spreadsheet.

The source is a single .json file (one definition or a list of them) or a
.zip archive of .json files. Each definition becomes one row per
(stage, task, parameter); creation-form rows come first.

Usage:
    python3 scripts/run_export.py <file> [options]

Examples:
    # CSV next to the current directory
    python3 scripts/run_export.py workflow.json

    # Both formats into ./out, abort on the first malformed definition
    python3 scripts/run_export.py workflows.zip -o out --format both --abort-on-error

    # Custom placeholder / delimiter from a YAML fragment, print summary counts
    python3 scripts/run_export.py workflow.json --config export.yaml --stats

Exit codes:
    0  records written
    1  source missing or unsupported, bad config, or batch aborted
    2  no records produced
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

# Project root on sys.path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NO_RECORDS = 2

_FORMATS = {
    "csv": ("csv",),
    "xlsx": ("xlsx",),
    "both": ("csv", "xlsx"),
}


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Export workflow definitions to flat spreadsheet records.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "file",
        type=Path,
        help="Path to a workflow definition (.json) or an archive of them (.zip).",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory for the output files (default: current directory).",
    )
    parser.add_argument(
        "--format",
        choices=sorted(_FORMATS),
        default="csv",
        help="Output format (default: csv).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML export configuration (default: built-in settings).",
    )
    parser.add_argument(
        "--abort-on-error",
        action="store_true",
        help="Stop at the first malformed definition instead of skipping it.",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print row/stage/mandatory/automation/dependency/validation counts.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log warnings and errors.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    import yaml

    from workflow_config import ErrorPolicy, get_export_config
    from workflow_export.services import ExportService
    from workflow_kernel.exceptions import (
        BatchAbortedError,
        ConfigError,
        MalformedDefinitionError,
        SourceError,
    )
    from workflow_kernel.logging_config import configure_logging

    configure_logging(level=logging.WARNING if args.quiet else logging.INFO)

    try:
        config = get_export_config(args.config)
    except (ConfigError, OSError, yaml.YAMLError) as e:
        print(f"ERROR: Failed to load config: {e}", file=sys.stderr)
        return EXIT_FAILED
    if args.abort_on_error:
        config = dataclasses.replace(config, on_error=ErrorPolicy.ABORT)

    service = ExportService(config)
    try:
        result = service.run(args.file, args.output_dir, _FORMATS[args.format])
    except (SourceError, BatchAbortedError, MalformedDefinitionError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILED

    for failure in result.failures:
        print(f"  Skipped {failure.source_name}: {failure.reason}", file=sys.stderr)

    if not result.records:
        print("No records produced.", file=sys.stderr)
        return EXIT_NO_RECORDS

    for path in result.written:
        print(f"Wrote {len(result.records)} records to {path}")

    if args.stats:
        for name, value in result.stats.as_dict().items():
            print(f"  {name.replace('_', ' ').title()}: {value}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

"""Command-line entry point: ``docextract FILE [--output DIR]``.

Startup sequence:
    1. Parse arguments
    2. Load configuration
    3. Setup logging (JSON file in the configured log_dir plus console)
    4. Extract, then print the text or the failure and its suggestion
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from docextract.config import load_all_settings
from docextract.extractor.service import DocumentExtractor
from docextract.extractor.writer import output_path_for, write_extraction
from docextract.logging import setup_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docextract",
        description="Recover text from a PDF or image (.pdf, .png, .jpg, .jpeg).",
    )
    parser.add_argument("file", type=Path, help="Document to extract")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        metavar="DIR",
        help="Write <name>.md with YAML frontmatter to DIR",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Write <name>.md to the configured pipeline output_dir",
    )
    parser.add_argument(
        "--no-preprocess",
        action="store_true",
        help="Run OCR on the original image without preprocessing",
    )
    parser.add_argument(
        "--log-dir", default=None, help="Write JSON logs here instead of the configured log_dir"
    )
    parser.add_argument(
        "--no-log-file", action="store_true", help="Log to the console only"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug console logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run a single extraction; returns the process exit code."""
    args = _build_parser().parse_args(argv)

    settings, pipeline = load_all_settings()
    if args.no_preprocess:
        settings = settings.model_copy(update={"preprocess_enabled": False})

    log_dir = None if args.no_log_file else (args.log_dir or pipeline.log_dir)
    setup_logging(
        log_dir=log_dir,
        log_level_console=logging.DEBUG if args.verbose else logging.WARNING,
        max_bytes=pipeline.log_max_bytes,
        backup_count=pipeline.log_backup_count,
    )

    if not args.file.is_file():
        print(f"error: no such file: {args.file}", file=sys.stderr)
        return 2

    result = DocumentExtractor(settings).extract_file(args.file)

    if not result.success:
        print(f"error: {result.failure.message}", file=sys.stderr)
        if result.failure.suggestion:
            print(f"suggestion: {result.failure.suggestion}", file=sys.stderr)
        return 1

    output_dir = args.output
    if output_dir is None and args.save:
        output_dir = Path(pipeline.output_dir)

    if output_dir is not None:
        md_path = output_path_for(output_dir, args.file.name)
        write_extraction(md_path, result, args.file.name)
        print(f"wrote {md_path}", file=sys.stderr)

    print(result.text)
    return 0

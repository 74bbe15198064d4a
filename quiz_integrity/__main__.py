"""CLI entry point: python -m quiz_integrity [paths...]"""

from __future__ import annotations

import argparse
import dataclasses
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

from quiz_integrity.checker import Observer, run_check
from quiz_integrity.config import Settings, get_settings
from quiz_integrity.corpus.loader import discover_source_files, load_prefixes, load_snapshot
from quiz_integrity.errors import ConfigurationLoadError
from quiz_integrity.event_log.writer import EventLog
from quiz_integrity.reporting.renderer import FORMATS, render
from quiz_integrity.reporting.summary import exit_code
from quiz_integrity.streaming import CheckDisplay


def _generate_run_id() -> str:
    """Generate a unique run ID: check-YYYYMMDD-HHMMSS-XXXX."""
    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    suffix = os.urandom(2).hex()
    return f"check-{ts}-{suffix}"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="quiz-integrity",
        description="Find duplicate and near-duplicate questions in a quiz bank",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Source files to check (default: every *-data.json/yaml in --data-dir)",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Directory holding the source files (default: from config)",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        default=False,
        help="Check every source, ignoring the recognized-prefix filter",
    )
    parser.add_argument(
        "--prefix-config",
        type=str,
        default=None,
        help="File with 'quizPrefixInfo' (default: sub-category-data.json in --data-dir)",
    )
    parser.add_argument(
        "--quick",
        action="store_true",
        default=False,
        help="Only check exact duplicates; skip the pairwise similarity scan",
    )
    parser.add_argument(
        "--question-threshold",
        type=float,
        default=None,
        help="Minimum prompt similarity for a similar pair (default: 0.85)",
    )
    parser.add_argument(
        "--options-threshold",
        type=float,
        default=None,
        help="Minimum option-set similarity for a similar pair (default: 0.75)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker processes for the similarity scan (default: 1)",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=FORMATS,
        default="text",
        help="Report format (default: text)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Also write the report to this file",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Write a JSONL event log under this directory (default: RUN_LOG_DIR)",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        default=False,
        help="Show a progress bar during the similarity scan",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Print per-source progress and findings as they are found",
    )
    return parser.parse_args(argv)


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    overrides: dict = {}
    if args.data_dir is not None:
        overrides["data_dir"] = args.data_dir
    if args.prefix_config is not None:
        overrides["prefix_config"] = args.prefix_config
    if args.all:
        overrides["check_all_sources"] = True
    if args.question_threshold is not None:
        overrides["question_threshold"] = args.question_threshold
    if args.options_threshold is not None:
        overrides["options_threshold"] = args.options_threshold
    if args.workers is not None:
        overrides["similarity_workers"] = args.workers
    if args.log_dir is not None:
        overrides["run_log_dir"] = args.log_dir
    return dataclasses.replace(settings, **overrides)


def _broadcast(observers: list[Observer], event: dict) -> None:
    for observer in observers:
        observer(event)


def _load_prefixes(settings: Settings, observers: list[Observer]) -> frozenset[str] | None:
    """Recognized prefixes, or None to check everything. Falls back open on errors."""
    if settings.check_all_sources:
        _broadcast(observers, {"kind": "prefix_filter_bypassed"})
        return None
    try:
        return load_prefixes(settings.prefix_config_path())
    except ConfigurationLoadError as e:
        _broadcast(
            observers,
            {"kind": "config_warning", "message": f"{e}. Checking all sources.", "path": e.path},
        )
        return None


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        settings = _apply_overrides(get_settings(), args)
    except ValueError as e:
        print(f"ERROR: invalid configuration value ({e})", file=sys.stderr)
        return 2

    errors = settings.validate()
    if errors:
        for err in errors:
            print(f"ERROR: {err}", file=sys.stderr)
        return 2

    observers: list[Observer] = [CheckDisplay(verbose=args.verbose)]
    if settings.run_log_dir:
        log = EventLog(settings.run_log_dir, _generate_run_id())
        observers.append(log)
        print(f"Event log: {log.path}", file=sys.stderr)

    for warn in settings.warnings():
        _broadcast(observers, {"kind": "config_warning", "message": warn})

    paths = [Path(p) for p in args.paths] or discover_source_files(settings.data_dir)
    snapshot = load_snapshot(paths, prefixes=_load_prefixes(settings, observers))

    report = run_check(
        snapshot,
        settings,
        exact_only=args.quick,
        progress=args.progress,
        observers=observers,
    )

    rendered = render(report, args.format)
    sys.stdout.buffer.write(rendered.encode("utf-8"))
    sys.stdout.buffer.write(b"\n")
    sys.stdout.buffer.flush()

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(rendered, encoding="utf-8")
        print(f"\nReport saved to: {output_path}", file=sys.stderr)

    return exit_code(report)


if __name__ == "__main__":
    sys.exit(main())

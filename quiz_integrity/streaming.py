"""Progress and warning display on stderr during a check run."""

from __future__ import annotations

import sys
from typing import Any

from quiz_integrity.reporting.renderer import format_identifier

PASS_LABELS: dict[str, str] = {
    "exact": "PASS 1: Checking for EXACT DUPLICATES",
    "similarity": "PASS 2: Checking for SIMILAR questions",
}


class CheckDisplay:
    """Handles pipeline events and prints progress to stderr.

    Findings are only echoed in verbose mode; the final report carries them.
    """

    def __init__(self, *, verbose: bool = False) -> None:
        self._verbose = verbose

    def _print(self, msg: str) -> None:
        print(msg, file=sys.stderr, flush=True)

    def __call__(self, event: dict[str, Any]) -> None:
        self.handle(event)

    def handle(self, event: dict[str, Any]) -> None:
        kind = event.get("kind", "")

        if kind == "config_warning":
            self._print(f"WARNING: {event['message']}")

        elif kind == "prefix_filter_bypassed":
            self._print("--all: checking every source.")

        elif kind == "prefix_filter":
            count = event.get("prefix_count", 0)
            self._print(f"Loaded {count} recognized prefixes. Only matching sources are checked.")

        elif kind == "source_failed":
            self._print(f"ERROR: could not load {event['source']}: {event['reason']}")

        elif kind == "source_filtered":
            if self._verbose:
                self._print(f"  - skipping {event['source']} (no recognized prefix)")

        elif kind == "source_checked":
            if self._verbose:
                self._print(f"  {event['source']}: {event['records']} records")

        elif kind == "record_skipped":
            self._print(
                f"WARNING: skipped record in {format_identifier(event)}:"
                f" {event['reason']}"
            )

        elif kind == "pass_started":
            label = PASS_LABELS.get(event["pass"], event["pass"])
            self._print(f"\n{label} ({event['count']} items)...")
            if event["pass"] == "similarity":
                if "pairs" in event:
                    self._print(f"   ({event['pairs']:,} pairs to compare)")
                self._print(
                    f"   (Thresholds: question >= {event['question_threshold']:.0%},"
                    f" options >= {event['options_threshold']:.0%})"
                )

        elif kind == "duplicate":
            if self._verbose:
                finding = event["finding"]
                self._print(f"  duplicate: {finding['duplicate']['prompt'][:80]}")

        elif kind == "similar_pair":
            if self._verbose:
                finding = event["finding"]
                self._print(
                    f"  similar ({finding['prompt_similarity']:.1%}):"
                    f" {finding['first']['prompt'][:80]}"
                )

        elif kind == "check_complete":
            self._print(f"\nCheck finished in {event['elapsed_s']:.3f} seconds.")

"""Collect findings and run counters into a CheckReport."""

from __future__ import annotations

from quiz_integrity.contracts import CheckReport, ExactDuplicateFinding, SimilarPairFinding


def build_report(
    *,
    duplicates: list[ExactDuplicateFinding],
    similar_pairs: list[SimilarPairFinding],
    sources_checked: int,
    sources_filtered: int = 0,
    failed_sources: list[str] | None = None,
    records_checked: int = 0,
    records_skipped: int = 0,
    unique_records: int = 0,
    question_threshold: float,
    options_threshold: float,
    similarity_checked: bool = True,
    elapsed_s: float = 0.0,
) -> CheckReport:
    """Build the report. Passes iff there are no duplicates and no similar pairs.

    Source and record counts are always present, so an empty finding list
    from a mostly-unloadable corpus is distinguishable from a clean one.
    """
    failed = list(failed_sources or [])
    return CheckReport(
        sources_checked=sources_checked,
        sources_filtered=sources_filtered,
        sources_failed=len(failed),
        failed_sources=failed,
        records_checked=records_checked,
        records_skipped=records_skipped,
        unique_records=unique_records,
        duplicate_count=len(duplicates),
        similar_pair_count=len(similar_pairs),
        duplicates=list(duplicates),
        similar_pairs=list(similar_pairs),
        question_threshold=question_threshold,
        options_threshold=options_threshold,
        similarity_checked=similarity_checked,
        elapsed_s=round(elapsed_s, 3),
        passed=not duplicates and not similar_pairs,
    )


def exit_code(report: CheckReport) -> int:
    """Process exit status: 0 when the corpus is clean, 1 otherwise."""
    return 0 if report["passed"] else 1

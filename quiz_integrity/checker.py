"""Run the duplicate and near-duplicate check over a corpus snapshot.

corpus snapshot -> extractor -> canonicalizer -> exact-duplicate index
-> survivors -> similarity engine -> report
"""

from __future__ import annotations

import sys
import time
from collections.abc import Callable, Iterable
from typing import Any

from tqdm import tqdm

from quiz_integrity.canonical import canonicalize
from quiz_integrity.config import Settings
from quiz_integrity.contracts import CheckReport, CorpusSnapshot, CorpusSource
from quiz_integrity.corpus.extractor import iter_records
from quiz_integrity.detect.exact import ExactDuplicateIndex
from quiz_integrity.detect.similarity import SimilarityEngine
from quiz_integrity.errors import MalformedRecordError
from quiz_integrity.reporting.summary import build_report

Observer = Callable[[dict[str, Any]], None]


def matches_prefix(name: str, prefixes: frozenset[str] | None) -> bool:
    """True when no filter is configured or the name starts with a recognized prefix."""
    if prefixes is None:
        return True
    return any(name.startswith(prefix) for prefix in prefixes)


class _Emitter:
    def __init__(self, observers: Iterable[Observer]) -> None:
        self._observers = list(observers)

    def __call__(self, kind: str, **payload: Any) -> None:
        event = {"kind": kind, **payload}
        for observer in self._observers:
            observer(event)


def _index_source(
    source: CorpusSource, index: ExactDuplicateIndex, emit: _Emitter
) -> tuple[int, int]:
    """Feed one source through the index. Returns (checked, skipped) record counts."""
    checked = skipped = 0
    for record in iter_records(source):
        try:
            canonical = canonicalize(record)
        except MalformedRecordError as e:
            skipped += 1
            emit(
                "record_skipped",
                source=source.name,
                identifier=record["identifier"],
                sequence_number=record["sequence_number"],
                reason=e.reason,
            )
            continue
        checked += 1
        finding = index.add(canonical)
        if finding is not None:
            emit("duplicate", finding=finding)
    return checked, skipped


def run_check(
    snapshot: CorpusSnapshot,
    settings: Settings | None = None,
    *,
    exact_only: bool = False,
    progress: bool = False,
    observers: Iterable[Observer] = (),
) -> CheckReport:
    """Run both passes and return the report. Never raises for bad data."""
    settings = settings or Settings()
    emit = _Emitter(observers)
    start = time.perf_counter()

    prefixes = None if settings.check_all_sources else snapshot.prefixes
    if prefixes is not None:
        emit("prefix_filter", prefix_count=len(prefixes))

    sources_checked = sources_filtered = records_checked = records_skipped = 0

    # A source outside the recognized prefixes is filtered even when it failed to load
    failed_sources: list[str] = []
    for failure in snapshot.failures:
        if not matches_prefix(failure.name, prefixes):
            sources_filtered += 1
            emit("source_filtered", source=failure.name)
            continue
        failed_sources.append(failure.name)
        emit("source_failed", source=failure.name, reason=failure.reason)

    # --- Pass 1: exact duplicates ---
    index = ExactDuplicateIndex()
    emit("pass_started", **{"pass": "exact", "count": len(snapshot.sources)})

    for source in snapshot.sources:
        if not matches_prefix(source.name, prefixes):
            sources_filtered += 1
            emit("source_filtered", source=source.name)
            continue
        checked, skipped = _index_source(source, index, emit)
        sources_checked += 1
        records_checked += checked
        records_skipped += skipped
        emit("source_checked", source=source.name, records=checked)

    # --- Pass 2: similar pairs among survivors ---
    engine = SimilarityEngine(
        index.survivors,
        question_threshold=settings.question_threshold,
        options_threshold=settings.options_threshold,
    )
    if not exact_only:
        emit(
            "pass_started",
            **{
                "pass": "similarity",
                "count": len(index.survivors),
                "pairs": engine.pair_count,
                "question_threshold": settings.question_threshold,
                "options_threshold": settings.options_threshold,
            },
        )
        rows = tqdm(
            range(len(index.survivors)),
            desc="similarity",
            unit="row",
            file=sys.stderr,
            disable=not progress or settings.similarity_workers > 1,
        )
        engine.scan(workers=settings.similarity_workers, rows=rows)
        for finding in engine.findings:
            emit("similar_pair", finding=finding)

    elapsed = time.perf_counter() - start
    report = build_report(
        duplicates=index.findings,
        similar_pairs=engine.findings,
        sources_checked=sources_checked,
        sources_filtered=sources_filtered,
        failed_sources=failed_sources,
        records_checked=records_checked,
        records_skipped=records_skipped,
        unique_records=len(index.survivors),
        question_threshold=settings.question_threshold,
        options_threshold=settings.options_threshold,
        similarity_checked=not exact_only,
        elapsed_s=elapsed,
    )
    emit(
        "check_complete",
        passed=report["passed"],
        duplicate_count=report["duplicate_count"],
        similar_pair_count=report["similar_pair_count"],
        elapsed_s=report["elapsed_s"],
    )
    return report

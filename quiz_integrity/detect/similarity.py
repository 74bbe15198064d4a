"""Pairwise near-duplicate scan over unique records.

Every unordered pair (i, j), i < j, is compared exactly once. A pair is
reported when its prompt similarity (normalized edit distance) and its
option similarity (Jaccard index) both clear their thresholds.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from concurrent.futures import ProcessPoolExecutor

from quiz_integrity.config import DEFAULT_OPTIONS_THRESHOLD, DEFAULT_QUESTION_THRESHOLD
from quiz_integrity.contracts import CanonicalRecord, SimilarPairFinding, record_ref
from quiz_integrity.utils.text import jaccard_index, prompt_similarity

# (j, prompt_similarity, option_similarity) for one row i
RowHits = list[tuple[int, float, float]]


def _scan_row(
    records: Sequence[CanonicalRecord],
    i: int,
    question_threshold: float,
    options_threshold: float,
) -> RowHits:
    hits: RowHits = []
    a = records[i]
    for j in range(i + 1, len(records)):
        b = records[j]
        q_sim = prompt_similarity(a.canonical_prompt, b.canonical_prompt)
        if q_sim < question_threshold:
            continue
        o_sim = jaccard_index(a.option_texts, b.option_texts)
        if o_sim >= options_threshold:
            hits.append((j, q_sim, o_sim))
    return hits


def _scan_rows(
    records: Sequence[CanonicalRecord],
    rows: Sequence[int],
    question_threshold: float,
    options_threshold: float,
) -> list[tuple[int, RowHits]]:
    return [(i, _scan_row(records, i, question_threshold, options_threshold)) for i in rows]


def _interleave(n: int, chunks: int) -> list[list[int]]:
    # Row i costs n - i comparisons; striding keeps chunk costs even.
    return [list(range(k, n, chunks)) for k in range(chunks) if k < n]


class SimilarityEngine:
    """Near-duplicate classifier over an ordered list of unique records."""

    def __init__(
        self,
        records: Sequence[CanonicalRecord],
        *,
        question_threshold: float = DEFAULT_QUESTION_THRESHOLD,
        options_threshold: float = DEFAULT_OPTIONS_THRESHOLD,
    ) -> None:
        self.records = tuple(records)
        self.question_threshold = question_threshold
        self.options_threshold = options_threshold
        self.findings: list[SimilarPairFinding] = []

    @property
    def pair_count(self) -> int:
        n = len(self.records)
        return n * (n - 1) // 2

    def compare(self, a: CanonicalRecord, b: CanonicalRecord) -> tuple[float, float]:
        """Both similarity scores for a pair, without thresholding."""
        return (
            prompt_similarity(a.canonical_prompt, b.canonical_prompt),
            jaccard_index(a.option_texts, b.option_texts),
        )

    def _record_hits(self, i: int, hits: RowHits) -> list[SimilarPairFinding]:
        found = []
        for j, q_sim, o_sim in hits:
            finding = SimilarPairFinding(
                first=record_ref(self.records[i]),
                second=record_ref(self.records[j]),
                prompt_similarity=q_sim,
                option_similarity=o_sim,
            )
            self.findings.append(finding)
            found.append(finding)
        return found

    def scan_row(self, i: int) -> list[SimilarPairFinding]:
        """Compare record i with every later record."""
        hits = _scan_row(self.records, i, self.question_threshold, self.options_threshold)
        return self._record_hits(i, hits)

    def scan(self, *, workers: int = 1, rows: Iterable[int] | None = None) -> list[SimilarPairFinding]:
        """Scan all pairs. Findings come out in (i, j) order for any worker count.

        ``rows`` lets callers wrap the row range (e.g. in a progress bar);
        it is only honoured for the single-worker scan.
        """
        n = len(self.records)
        if workers <= 1 or n < 2:
            for i in rows if rows is not None else range(n):
                self.scan_row(i)
            return self.findings

        chunks = _interleave(n, min(workers, n))
        results: list[tuple[int, RowHits]] = []
        with ProcessPoolExecutor(max_workers=len(chunks)) as pool:
            futures = [
                pool.submit(
                    _scan_rows,
                    self.records,
                    chunk,
                    self.question_threshold,
                    self.options_threshold,
                )
                for chunk in chunks
            ]
            for future in futures:
                results.extend(future.result())

        for i, hits in sorted(results, key=lambda r: r[0]):
            self._record_hits(i, hits)
        return self.findings


def find_similar_pairs(
    records: Sequence[CanonicalRecord],
    *,
    question_threshold: float = DEFAULT_QUESTION_THRESHOLD,
    options_threshold: float = DEFAULT_OPTIONS_THRESHOLD,
    workers: int = 1,
) -> list[SimilarPairFinding]:
    engine = SimilarityEngine(
        records,
        question_threshold=question_threshold,
        options_threshold=options_threshold,
    )
    return engine.scan(workers=workers)

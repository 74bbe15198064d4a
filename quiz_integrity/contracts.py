"""Single source of truth for all record, finding, and report types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypedDict

# --- Corpus ---


class QuestionRecord(TypedDict):
    identifier: str | None  # "q-017"; None when the source carries no id
    sequence_number: int | None  # ordinal within its source
    source_name: str  # "physics-m4-data.json"
    prompt_text: Any  # raw, pre-trim; only str is eligible
    options: Any  # raw option items; only a non-empty list/tuple is eligible


@dataclass(frozen=True)
class CorpusSource:
    """One loaded source: a name plus its ordered top-level items."""

    name: str
    items: tuple[Any, ...]


@dataclass(frozen=True)
class SourceFailure:
    name: str
    reason: str


@dataclass(frozen=True)
class CorpusSnapshot:
    """Immutable in-memory corpus handle owned by a single run.

    prefixes is None when no prefix filter is configured.
    """

    sources: tuple[CorpusSource, ...] = ()
    failures: tuple[SourceFailure, ...] = ()
    prefixes: frozenset[str] | None = None


# --- Options ---


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class StructuredText:
    text: str


OptionItem = PlainText | StructuredText


# --- Canonical form ---


@dataclass(frozen=True)
class CanonicalRecord:
    """Comparable view of a QuestionRecord. Computed once, never mutated."""

    source_name: str
    identifier: str | None
    sequence_number: int | None
    canonical_prompt: str
    option_texts: frozenset[str]
    dedupe_key: str


# --- Findings ---


class RecordRef(TypedDict):
    source: str
    identifier: str | None
    sequence_number: int | None
    prompt: str


class ExactDuplicateFinding(TypedDict):
    original: RecordRef
    duplicate: RecordRef


class SimilarPairFinding(TypedDict):
    first: RecordRef
    second: RecordRef
    prompt_similarity: float  # [0, 1]
    option_similarity: float  # [0, 1]


# --- Report ---


class CheckReport(TypedDict):
    sources_checked: int
    sources_filtered: int  # skipped by the prefix filter
    sources_failed: int  # could not be loaded
    failed_sources: list[str]
    records_checked: int
    records_skipped: int  # malformed, excluded from checking
    unique_records: int
    duplicate_count: int
    similar_pair_count: int
    duplicates: list[ExactDuplicateFinding]
    similar_pairs: list[SimilarPairFinding]
    question_threshold: float
    options_threshold: float
    similarity_checked: bool  # False in quick (exact-only) mode
    elapsed_s: float
    passed: bool


class RunEvent(TypedDict):
    """One JSONL line in the run event log."""

    kind: str
    ts: str  # ISO 8601
    payload: dict[str, Any]


def record_ref(record: CanonicalRecord) -> RecordRef:
    return RecordRef(
        source=record.source_name,
        identifier=record.identifier,
        sequence_number=record.sequence_number,
        prompt=record.canonical_prompt,
    )
